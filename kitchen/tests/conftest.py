"""
Shared pytest fixtures for Kitchen tests.

This module provides common fixtures for:
- FastAPI test client
- Sample recipe documents
- A fresh parse cache per test
"""
import os
import pytest
from typing import Generator

# Set test environment variables BEFORE importing app modules
# This ensures Settings loads in debug/test mode
os.environ.setdefault("DEBUG", "true")

from fastapi.testclient import TestClient

from kitchen.engine.parsing import get_parse_cache
from kitchen.main import app
from kitchen.tests.samples import OMELETTE, PANCAKES, TOAST


# ============================================================================
# App Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clear_parse_cache():
    """Start every test with an empty global parse cache."""
    get_parse_cache().clear()
    yield
    get_parse_cache().clear()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Create FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Document Fixtures
# ============================================================================

@pytest.fixture
def toast_text() -> str:
    """The smallest complete recipe document."""
    return TOAST


@pytest.fixture
def pancakes_text() -> str:
    """A two-step recipe with a description, a timer and modifiers."""
    return PANCAKES


@pytest.fixture
def omelette_text() -> str:
    """A one-step recipe sharing ingredients with pancakes."""
    return OMELETTE


@pytest.fixture
def recipe_file(tmp_path):
    """Factory writing a recipe document to a temporary file."""
    def _write(text: str, name: str = "recipe.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
