"""Web layer - API views and dashboard."""
