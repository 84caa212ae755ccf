"""Domain verticals."""
