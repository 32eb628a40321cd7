"""Users REST API."""
