import asyncio
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

ROOT_DIR = Path(__file__).resolve().parents[1]


def _alembic_config(url: str) -> Config:
    alembic_cfg = Config(str(ROOT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", url)
    return alembic_cfg


def _table_layout(url: str) -> dict[str, set[str]]:
    async def _inspect() -> dict[str, set[str]]:
        engine = create_async_engine(url)
        try:
            async with engine.connect() as connection:
                return await connection.run_sync(
                    lambda sync_conn: {
                        table: {column["name"] for column in inspect(sync_conn).get_columns(table)}
                        for table in inspect(sync_conn).get_table_names()
                    }
                )
        finally:
            await engine.dispose()

    return asyncio.run(_inspect())


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'migrations.db'}"
    alembic_cfg = _alembic_config(url)

    command.upgrade(alembic_cfg, "head")
    layout = _table_layout(url)

    assert {"users", "influencers", "campaigns", "collaborations", "analytics"} <= set(layout)
    assert {"engagement_rate", "rate_per_post", "is_verified"} <= layout["influencers"]
    assert {"agreed_rate", "actual_reach", "actual_engagement", "completed_at"} <= layout[
        "collaborations"
    ]
    assert "collaboration_id" in layout["analytics"]

    command.downgrade(alembic_cfg, "base")
    assert set(_table_layout(url)) <= {"alembic_version"}
