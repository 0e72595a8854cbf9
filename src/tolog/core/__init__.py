"""Core infrastructure: config, exceptions, storage, logging, CLI."""
