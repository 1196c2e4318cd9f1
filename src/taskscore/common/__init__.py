"""Shared infrastructure: storage, telemetry and logging."""
