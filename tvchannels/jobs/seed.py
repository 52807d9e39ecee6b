from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from tvchannels.config import settings
from tvchannels.db import Database
from tvchannels.models import Channel

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger("seed-job")

REQUIRED_FIELDS = ("name", "category", "language", "country", "stream_url")

SAMPLE_CHANNELS: list[dict] = [
    {
        "name": "Tech News Network",
        "category": "News",
        "language": "English",
        "country": "USA",
        "stream_url": "https://example.com/stream/tech-news",
        "logo_url": "https://example.com/logos/tech-news.png",
        "description": "Latest technology news",
    },
    {
        "name": "World News Today",
        "category": "News",
        "language": "English",
        "country": "UK",
        "stream_url": "https://example.com/stream/world-news",
        "description": "Around-the-clock international headlines",
    },
    {
        "name": "Noticias 24",
        "category": "News",
        "language": "Spanish",
        "country": "Mexico",
        "stream_url": "https://example.com/stream/noticias-24",
    },
    {
        "name": "Sports Central",
        "category": "Sports",
        "language": "English",
        "country": "UK",
        "stream_url": "https://example.com/stream/sports",
        "logo_url": "https://example.com/logos/sports.png",
        "description": "Live sports coverage",
    },
    {
        "name": "Comedy House",
        "category": "Entertainment",
        "language": "English",
        "country": "USA",
        "stream_url": "https://example.com/stream/comedy-house",
    },
    {
        "name": "Cinema Classics",
        "category": "Entertainment",
        "language": "French",
        "country": "Canada",
        "stream_url": "https://example.com/stream/cinema-classics",
        "description": "Films from the golden age",
    },
    {
        "name": "Kids Zone",
        "category": "Kids",
        "language": "English",
        "country": "USA",
        "stream_url": "https://example.com/stream/kids-zone",
    },
    {
        "name": "Cartoon Planet",
        "category": "Kids",
        "language": "Spanish",
        "country": "USA",
        "stream_url": "https://example.com/stream/cartoon-planet",
    },
    {
        "name": "Hit Music TV",
        "category": "Music",
        "language": "English",
        "country": "USA",
        "stream_url": "https://example.com/stream/hit-music",
        "description": "Chart toppers all day",
    },
]


def load_records(path: str | None) -> list[dict]:
    if not path:
        return SAMPLE_CHANNELS
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON array of channel objects")
    return records


def seed_channels(database: Database, records: list[dict]) -> dict:
    """
    Insert channel records that are not already present (matched by name).
    """
    inserted = 0
    skipped = 0
    invalid = 0

    with database.session_factory() as db:
        existing = {name for (name,) in db.query(Channel.name).all()}
        for rec in records:
            missing = [f for f in REQUIRED_FIELDS if not (rec.get(f) or "").strip()]
            if missing:
                log.warning("Skipping record without %s: %s", ", ".join(missing), rec)
                invalid += 1
                continue

            name = rec["name"].strip()
            if name in existing:
                skipped += 1
                continue

            db.add(
                Channel(
                    name=name,
                    category=rec["category"].strip(),
                    language=rec["language"].strip(),
                    country=rec["country"].strip(),
                    stream_url=rec["stream_url"].strip(),
                    logo_url=rec.get("logo_url"),
                    description=rec.get("description"),
                )
            )
            existing.add(name)
            inserted += 1
        db.commit()

    return {"inserted": inserted, "skipped": skipped, "invalid": invalid}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else None

    try:
        records = load_records(path)
    except (OSError, ValueError) as e:
        log.error("Cannot read channel records: %s", e)
        return 2

    database = Database(settings.database_url)
    try:
        database.init()
        result = seed_channels(database, records)
        log.info("Seed finished: %s", result)
        return 0
    finally:
        database.dispose()


if __name__ == "__main__":
    raise SystemExit(main())
