from __future__ import annotations

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from tvchannels.cors import cors_headers
from tvchannels.db import get_db
from tvchannels.errors import ChannelApiError, InternalError
from tvchannels.routing import (
    DetailRoute,
    ListRoute,
    StatsRoute,
    first_values,
    parse_filters,
    resolve_route,
)
from tvchannels.services.channel_service import get_channel, list_channels
from tvchannels.services.stats_service import get_channel_stats

log = logging.getLogger(__name__)

router = APIRouter(tags=["tv-channels"])

# OPTIONS is answered by the CORS middleware before routing.
DISPATCH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


class ChannelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    category: str
    language: str
    country: str
    stream_url: str
    logo_url: str | None
    description: str | None
    created_at: datetime


class DistributionItem(BaseModel):
    name: str
    count: int


class StatsOut(BaseModel):
    total_channels: int
    by_category: list[DistributionItem]
    by_language: list[DistributionItem]
    by_country: list[DistributionItem]


def _channel_json(ch) -> dict:
    return ChannelOut.model_validate(ch).model_dump(mode="json")


def _ok(body: dict, request: Request) -> JSONResponse:
    settings = request.app.state.settings
    return JSONResponse(content=body, headers=cors_headers(settings.cors_allow_origin))


def _handle(request: Request, db: Session) -> JSONResponse:
    settings = request.app.state.settings
    route = resolve_route(request.method, request.url.path, settings.base_path)
    log.info("Request method=%s path=%s route=%s", request.method, request.url.path, route)

    if isinstance(route, StatsRoute):
        stats = StatsOut.model_validate(get_channel_stats(db))
        return _ok({"data": stats.model_dump(mode="json")}, request)

    if isinstance(route, DetailRoute):
        ch = get_channel(db, route.channel_id)
        return _ok({"data": _channel_json(ch)}, request)

    if isinstance(route, ListRoute):
        filters = parse_filters(first_values(request.query_params.multi_items()))
        log.info("Filters: %s", filters.as_log_dict())
        result = list_channels(db, filters)
        result["data"] = [_channel_json(ch) for ch in result["data"]]
        return _ok(result, request)

    raise InternalError()


@router.api_route("/{path:path}", methods=DISPATCH_METHODS)
def dispatch(request: Request, path: str, db: Session = Depends(get_db)):
    try:
        return _handle(request, db)
    except ChannelApiError:
        raise
    except Exception as e:
        log.exception("Unexpected error: %s", e)
        raise InternalError() from e
