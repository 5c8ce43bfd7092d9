"""Test suite for PodPost.

Test structure follows the test pyramid:
- unit/: Unit tests - isolated components (JWT, config, registry, client)
- integration/: Integration tests - real SQLite database, mocked HTTP
- api/: API endpoint tests - HTTP endpoints through the FastAPI app
"""
