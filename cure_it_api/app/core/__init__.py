"""Core infrastructure: configuration, logging, security, errors and SQLite access."""
