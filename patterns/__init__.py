"""Reusable patterns behind the SummitBase verticals.

Each module is a self-contained pattern: rules engine, workflow state
machines, repository layer and domain configuration.
"""
