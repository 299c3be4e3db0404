"""In-memory mock of the commerce REST API."""
