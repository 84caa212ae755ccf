"""Declarative base and shared column mixins."""
