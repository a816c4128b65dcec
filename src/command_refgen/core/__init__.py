"""Core infrastructure: exceptions and diagnostics."""
