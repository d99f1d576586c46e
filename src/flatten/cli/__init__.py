"""Command-line interface for flatten."""
