"""Core infrastructure: configuration, logging, errors and resource paths."""
