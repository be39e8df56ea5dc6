"""
Test Suite

Tests for the Opsboard backend.

Structure:
    tests/
    ├── conftest.py              # Pytest fixtures (test settings, app, stub GLPI)
    ├── test_ticket_*.py         # Filter, stats and ticket service tests
    ├── test_glpi_client.py      # GLPI adapter against httpx.MockTransport
    ├── test_*_service.py        # CRUD services over the memory store
    ├── test_document_store.py   # Memory and MongoDB (mongomock) stores
    └── test_api_*.py            # Endpoint tests with FastAPI TestClient

To run tests:
    pytest
"""
