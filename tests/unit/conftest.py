"""
Pytest configuration for unit tests.

Disables telemetry so get_tracer()/get_meter() hand out no-op instruments.
"""

import os


def pytest_configure(config):
    """Configure telemetry for unit tests."""
    # get_tracer() returns NoOpTracer instead of a real tracer
    os.environ["TASKSCORE_TELEMETRY_ENABLED"] = "false"
