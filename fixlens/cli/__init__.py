"""Command-line interface for fixlens."""
