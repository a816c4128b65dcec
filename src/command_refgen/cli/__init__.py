"""Command-line interface for command-refgen."""
