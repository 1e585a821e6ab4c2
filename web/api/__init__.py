"""API views consumed by the HTTP router and the dashboard."""
