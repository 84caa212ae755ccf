"""Shared infrastructure: settings, database, integrations, agents."""
