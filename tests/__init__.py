"""
Test suite for the scrapbook application.

- Unit tests for models, storage adapters, services and API routes
- Integration tests for the full entry lifecycle
"""
