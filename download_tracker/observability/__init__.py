"""Observability: logging configuration, correlation IDs and request middleware."""
