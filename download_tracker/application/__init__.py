"""Application layer: service orchestrators over the database boundary."""
