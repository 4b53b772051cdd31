"""Fixtures for integration tests using a PostgreSQL testcontainer."""

from collections.abc import AsyncGenerator, Generator

import asyncpg
import docker
import pytest
from docker.errors import DockerException
from testcontainers.core import testcontainers_config
from testcontainers.postgres import PostgresContainer

from procunit.catalog.postgres import PostgresCatalog
from procunit.executor import SuiteExecutor
from procunit.installer import install_assertions


@pytest.fixture(scope="session", autouse=True)
def _disable_ryuk() -> None:
    """Disable the extra cleanup instance, we use contexts to clean containers."""
    testcontainers_config.ryuk_disabled = True


@pytest.fixture(scope="session")
def postgres_dsn() -> Generator[str]:
    """Start a PostgreSQL container and return its DSN."""
    try:
        docker.from_env().ping()
    except DockerException as exc:
        pytest.skip(f"Docker is not available: {exc}")

    with PostgresContainer("postgres:16-alpine", driver=None) as postgres:
        yield postgres.get_connection_url()


@pytest.fixture
async def connection(postgres_dsn: str) -> AsyncGenerator[asyncpg.Connection]:
    """Open a connection on a fresh schema with the assertion library installed."""
    conn = await asyncpg.connect(postgres_dsn)
    await conn.execute("DROP SCHEMA IF EXISTS suite CASCADE; CREATE SCHEMA suite")
    await install_assertions(conn)
    try:
        yield conn
    finally:
        await conn.execute("DROP SCHEMA IF EXISTS suite CASCADE")
        await conn.close()


@pytest.fixture
def executor(connection: asyncpg.Connection) -> SuiteExecutor:
    """Create executor over the test connection."""
    return SuiteExecutor(
        catalog=PostgresCatalog(connection=connection),
        connection=connection,
    )
