import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

from influencehub.db.base import init_db
from influencehub.main import app
from influencehub.storage import DatabaseStorage, MemoryStorage
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

Scenario = Callable[[Storage], Awaitable[Any]]


def run_scenario(backend: str, scenario: Scenario, *, strict: bool = False) -> Any:
    """Run ``scenario`` against a fresh storage inside its own event loop."""

    async def _main() -> Any:
        if backend == "memory":
            return await scenario(MemoryStorage(strict_transitions=strict))

        engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
        try:
            await init_db(engine)
            session_factory = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
            return await scenario(DatabaseStorage(session_factory, strict_transitions=strict))
        finally:
            await engine.dispose()

    return asyncio.run(_main())


@pytest.fixture(params=["memory", "database"])
def run_storage(request):
    backend = request.param

    def _run(scenario: Scenario, *, strict: bool = False) -> Any:
        return run_scenario(backend, scenario, strict=strict)

    return _run


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def api_client(memory_storage):
    app.dependency_overrides.clear()
    app.dependency_overrides[get_storage] = lambda: memory_storage
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
