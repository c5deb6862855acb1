"""FastAPI application entry point."""

import ddtrace.auto  # noqa: F401

from application import create_app

app = create_app()
