"""Logging setup and run-scoped log context."""

from betbot.observability.logging import run_context, setup_logging

__all__ = ["run_context", "setup_logging"]
