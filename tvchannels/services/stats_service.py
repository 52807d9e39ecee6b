from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tvchannels.errors import QueryFailed
from tvchannels.models import Channel

log = logging.getLogger(__name__)


def frequency_distribution(values: Iterable[str]) -> list[dict]:
    """
    Count occurrences and sort by count descending.

    Equal counts keep the order in which each value was first seen in the scan;
    that order is whatever the store returns, so ties are not alphabetical.
    """
    counts = Counter(values)
    return [{"name": name, "count": int(cnt)} for name, cnt in counts.most_common()]


def get_channel_stats(db: Session) -> dict:
    try:
        rows = db.query(Channel.category, Channel.language, Channel.country).all()
    except SQLAlchemyError as e:
        log.error("Error fetching channels for stats: %s", e)
        raise QueryFailed("Failed to fetch statistics", details=str(e)) from e

    return {
        "total_channels": len(rows),
        "by_category": frequency_distribution(r.category for r in rows),
        "by_language": frequency_distribution(r.language for r in rows),
        "by_country": frequency_distribution(r.country for r in rows),
    }
