"""Command-line interface for Face Swap Studio."""
