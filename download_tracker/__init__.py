"""Download tracker backend: per-user simulated download jobs behind a REST API."""

__version__ = "0.1.0"
