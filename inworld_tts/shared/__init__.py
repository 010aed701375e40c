"""Shared building blocks: configuration, logging, models, HTTP transport."""
