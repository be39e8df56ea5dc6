"""
Pytest Configuration and Fixtures

This file contains shared fixtures and configuration for all tests.
"""

import os

# Test settings must be in place before opsboard modules are imported
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "testing"
os.environ["GLPI_API_URL"] = ""
os.environ["GLPI_APP_TOKEN"] = ""
os.environ["GLPI_USER_TOKEN"] = ""

import pytest
from fastapi.testclient import TestClient

from opsboard.repositories.document_store import MemoryDocumentStore
from opsboard.repositories.factory import build_repositories_from
from tests.factories import StubGlpiClient


@pytest.fixture
def repositories():
    """Fresh in-memory repositories"""
    return build_repositories_from(MemoryDocumentStore)


@pytest.fixture
def stub_glpi():
    """GLPI stand-in; tests fill its payload lists"""
    return StubGlpiClient()


@pytest.fixture
def app(stub_glpi):
    """Application wired to the stub GLPI client"""
    from opsboard.main import create_app
    from opsboard.api.deps import get_glpi_client

    application = create_app()
    application.dependency_overrides[get_glpi_client] = lambda: stub_glpi
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client with the application lifespan running"""
    with TestClient(app) as test_client:
        yield test_client
