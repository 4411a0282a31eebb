"""In-memory task tracking service with an HTML dashboard."""
