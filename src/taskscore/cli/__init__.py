"""TaskScore command-line interface."""
