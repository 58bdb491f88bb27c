"""
pytest suite for the Product Catalog API.

Test categories:
- Unit tests: validators, policy, tokens, pydantic models
- Integration tests: services against an in-memory seeded SQLite database
- API tests: full FastAPI app through httpx
"""
