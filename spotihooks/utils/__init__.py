"""Shared helpers: logging, instrumentation and input validation."""
