"""FastAPI backend for Face Swap Studio."""
