"""Core infrastructure: configuration, database, logging, cache, security."""
