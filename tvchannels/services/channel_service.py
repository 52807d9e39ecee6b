from __future__ import annotations

import logging
import math
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from tvchannels.errors import NotFound, QueryFailed
from tvchannels.models import Channel
from tvchannels.routing import ChannelFilters

log = logging.getLogger(__name__)


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def _apply_filters(q: Query, filters: ChannelFilters) -> Query:
    if filters.category:
        q = q.filter(Channel.category == filters.category)
    if filters.language:
        q = q.filter(Channel.language == filters.language)
    if filters.country:
        q = q.filter(Channel.country == filters.country)
    if filters.search:
        q = q.filter(Channel.name.icontains(filters.search, autoescape=True))
    return q


def list_channels(db: Session, filters: ChannelFilters) -> dict:
    try:
        q = _apply_filters(db.query(Channel), filters)
        total = q.count()
        rows = (
            q.order_by(Channel.name.asc(), Channel.id.asc())
            .offset(filters.offset)
            .limit(filters.limit)
            .all()
        )
    except SQLAlchemyError as e:
        log.error("Error fetching channels: %s", e)
        raise QueryFailed("Failed to fetch channels", details=str(e)) from e

    log.info("Returning channels: %d Total: %d", len(rows), total)
    return {
        "data": rows,
        "count": len(rows),
        "total": total,
        "page": filters.page,
        "limit": filters.limit,
        "total_pages": total_pages(total, filters.limit),
    }


def get_channel(db: Session, channel_id: str) -> Channel:
    try:
        ch = db.get(Channel, uuid.UUID(channel_id))
    except SQLAlchemyError as e:
        log.error("Error fetching channel %s: %s", channel_id, e)
        raise QueryFailed("Failed to fetch channel", details=str(e)) from e

    if ch is None:
        log.info("Channel not found with ID: %s", channel_id)
        raise NotFound()

    log.info("Returning channel: %s", ch.name)
    return ch
