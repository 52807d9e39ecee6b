from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from tvchannels.config import Settings
from tvchannels.db import Database
from tvchannels.main import create_app
from tvchannels.models import Channel


def make_database() -> Database:
    database = Database("sqlite://")
    database.init()
    return database


def make_client(database: Database, **overrides) -> TestClient:
    settings = Settings(database_url="sqlite://", auto_create_tables=False, **overrides)
    return TestClient(create_app(settings, database=database))


def add_channels(database: Database, rows: list[tuple[str, str, str, str]]) -> list[str]:
    """Insert (name, category, language, country) rows in order; returns their ids."""
    ids = []
    with database.session_factory() as db:
        for name, category, language, country in rows:
            channel_id = uuid.uuid4()
            db.add(
                Channel(
                    id=channel_id,
                    name=name,
                    category=category,
                    language=language,
                    country=country,
                    stream_url=f"https://example.com/stream/{channel_id}",
                )
            )
            ids.append(str(channel_id))
        db.commit()
    return ids
