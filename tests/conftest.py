"""
Test configuration and fixtures
The booking backend is replaced by an httpx.MockTransport
"""

import os
import pytest
import pytest_asyncio
from typing import Callable, Dict, List, Tuple, Union

import httpx
from httpx import AsyncClient, ASGITransport

# Set test environment
os.environ["APP_ENV"] = "testing"
os.environ["LOG_FORMAT"] = "text"
os.environ["PROMETHEUS_ENABLED"] = "false"

from productive_space.schemas.package import UserPackage
from productive_space.schemas.seat import Seat

BACKEND_URL = "http://backend.test"

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class MockBackend:
    """Routes requests by (method, path) and remembers what it was sent"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, route: Route):
        self.routes[(method, path)] = route

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        if callable(route):
            return route(request)
        return route


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()


@pytest_asyncio.fixture
async def backend_client(backend):
    """httpx client wired to the mock backend"""
    async with AsyncClient(
        transport=httpx.MockTransport(backend.handler),
        base_url=BACKEND_URL
    ) as client:
        yield client


@pytest_asyncio.fixture
async def client(backend_client):
    """Test client for the API with backend dependencies overridden"""
    from productive_space.main import app
    from productive_space.core.backend import get_package_client, get_payment_settings_service
    from productive_space.services.package_service import PackageClient
    from productive_space.services.payment_service import PaymentSettingsService

    settings_service = PaymentSettingsService(backend_client)
    app.dependency_overrides[get_package_client] = lambda: PackageClient(backend_client)
    app.dependency_overrides[get_payment_settings_service] = lambda: settings_service

    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


# Seat map fixtures
@pytest.fixture
def seat_layout() -> List[Seat]:
    """Six seats around two tables"""
    return [
        Seat(id="A1", x=50, y=50, shape="rect", size=10),
        Seat(id="A2", x=80, y=50, shape="rect", size=10),
        Seat(id="A3", x=110, y=50, shape="rect", size=10),
        Seat(id="B1", x=50, y=150, shape="circle", size=12),
        Seat(id="B2", x=80, y=150, shape="circle", size=12),
        Seat(id="B3", x=110, y=150, shape="circle", size=12),
    ]


# Package fixtures
@pytest.fixture
def make_package() -> Callable[..., UserPackage]:
    """Factory for user packages with sensible defaults"""
    counter = {"n": 0}

    def _make(package_type="HALF_DAY", target_role="STUDENT", remaining_count=3, **overrides):
        counter["n"] += 1
        data = {
            "id": f"up-{counter['n']}",
            "packageId": f"pkg-{counter['n']}",
            "packageName": overrides.pop("package_name", f"{package_type.title()} Pass"),
            "packageType": package_type,
            "targetRole": target_role,
            "remainingCount": remaining_count,
            "totalCount": max(remaining_count, 5),
        }
        data.update(overrides)
        return UserPackage.model_validate(data)

    return _make
