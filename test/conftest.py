"""
Test Configuration and Fixtures

This module provides:
- A throw-away SQLite database per test session (one file per xdist worker)
- Table reset around every integration test
- An httpx client over the ASGI app with the test lifespan entered
- Token helpers for each role

Architecture:
- Unit tests (test/**/unit/): Override fixtures with mocks in their own conftest.py
- Integration tests: Use a real database with proper cleanup
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = Path(tempfile.gettempdir()) / f'ticketing_test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite:///{db_path}'
    os.environ['TEST_DB_PATH'] = str(db_path)

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['AUTO_CREATE_TABLES'] = 'true'
    os.environ.setdefault('SECRET_KEY', 'ticketing_test_secret_key_32_bytes!!')
    os.environ.setdefault('DEPLOY_ENV', 'test')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from typing import Any  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.database.orm_db_setting import (  # noqa: E402
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
)
from src.service.ticketing.domain.entity.user_entity import UserEntity  # noqa: E402
from src.service.ticketing.domain.enum.user_role import UserRole  # noqa: E402
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # First, so seeding fixtures run against a fresh schema
            item.fixturenames.insert(0, 'clean_database')


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    db_path = Path(os.environ['TEST_DB_PATH'])
    for suffix in ('', '-wal', '-shm'):
        Path(f'{db_path}{suffix}').unlink(missing_ok=True)


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """Fresh schema for every integration test; engine disposed on the test's own loop."""
    await drop_db_and_tables()
    await create_db_and_tables()
    yield
    await dispose_engine()


# =============================================================================
# HTTP Client
# =============================================================================
@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Minimal lifespan for testing - no tracer provider, no exporters.

    Only wires dependency injection; tables are managed by clean_database.
    """
    from src.platform.config.di import container
    from src.platform.config.wire_modules import WIRE_MODULES

    container.wire(modules=WIRE_MODULES)
    yield
    container.unwire()


@pytest.fixture(scope='session')
def test_app() -> FastAPI:
    from src.platform.app_factory import create_app

    return create_app(lifespan=lifespan_for_tests, title_suffix=' (Test)')


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    # ASGITransport does not send lifespan events, so enter the lifespan here
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url='http://test') as async_client:
            yield async_client


# =============================================================================
# Users and Tokens
# =============================================================================
@pytest.fixture
def make_user() -> Callable[..., UserEntity]:
    def _make_user(
        role: UserRole = UserRole.USER,
        *,
        user_id: str | None = None,
        name: str = 'Test User',
        email: str | None = None,
        is_active: bool = True,
    ) -> UserEntity:
        uid = user_id or f'{role.value}_user_1'
        return UserEntity(
            id=uid,
            email=email or f'{uid}@example.com',
            name=name,
            role=role,
            is_active=is_active,
        )

    return _make_user


@pytest.fixture
def auth_headers() -> Callable[[UserEntity], dict[str, Any]]:
    jwt_auth = JwtAuth()

    def _auth_headers(user: UserEntity) -> dict[str, Any]:
        return {'Authorization': f'Bearer {jwt_auth.create_jwt_token(user)}'}

    return _auth_headers


@pytest.fixture
def organiser(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(UserRole.ORGANISER, user_id='organiser_1', name='Priya Sharma')


@pytest.fixture
def buyer(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(UserRole.USER, user_id='buyer_1', name='Arjun Mehta')


@pytest.fixture
def gatekeeper(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(UserRole.GATEKEEPER, user_id='gatekeeper_1', name='Gate Keeper')


@pytest.fixture
def admin(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(UserRole.ADMIN, user_id='admin_1', name='Site Admin')
