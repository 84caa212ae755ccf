"""SQLAlchemy and pydantic models for the outdoor vertical."""
