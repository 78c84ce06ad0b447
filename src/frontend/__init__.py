"""Streamlit frontend for Face Swap Studio."""
