"""
Shared pytest fixtures for the TableScope test suite.
"""

import pytest
from typing import AsyncGenerator, Dict, List, Any

from httpx import AsyncClient, ASGITransport
from tablescope.main import app
from tablescope.services.analysis_store import AnalysisStore, analysis_store
from tablescope.services.values import normalize_rows


@pytest.fixture
def sales_rows() -> List[Dict[str, Any]]:
    """Provide decoded rows mixing dates, numbers, text and nulls."""
    return [
        {"date": "2024-01-03", "units": "12", "price": 9.5, "region": "north"},
        {"date": "2024-01-01", "units": "7", "price": 10.0, "region": "south"},
        {"date": "2024-01-02", "units": None, "price": 11.25, "region": "east"},
        {"date": "2024-01-05", "units": "15", "price": None, "region": "west"},
        {"date": "2024-01-04", "units": "9", "price": 8.75, "region": None},
    ]


@pytest.fixture
def sales_dataset(sales_rows: List[Dict[str, Any]]):
    """Provide the sales rows converted to Values."""
    return normalize_rows(sales_rows)


@pytest.fixture
def store_instance() -> AnalysisStore:
    """Provide an isolated AnalysisStore."""
    return AnalysisStore(max_entries=3)


@pytest.fixture
async def test_client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing FastAPI endpoints."""
    analysis_store.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    analysis_store.clear()
