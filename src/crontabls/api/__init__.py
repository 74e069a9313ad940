"""FastAPI analysis API."""
