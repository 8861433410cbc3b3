"""Streamlit user interface for the scrapbook application."""
