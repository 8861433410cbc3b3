"""Command line maintenance tasks for the scrapbook application."""
