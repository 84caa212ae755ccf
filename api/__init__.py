"""HTTP entry point and middleware."""
