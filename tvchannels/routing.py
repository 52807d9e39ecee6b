"""
Route resolution and query-string validation for the channel endpoint.

A request is resolved exactly once into ListRoute, DetailRoute or StatsRoute.
Anything else raises before a handler or the store is touched.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from tvchannels.errors import InvalidIdentifier, MethodNotAllowed

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

STATS_SEGMENT = "stats"

FILTER_MAX_LENGTH = 50
SEARCH_MAX_LENGTH = 100

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MAX_LIMIT = 100
# keeps (page - 1) * limit inside a signed 64-bit OFFSET
MAX_PAGE = 2**63 // MAX_LIMIT


@dataclass(frozen=True)
class ListRoute:
    pass


@dataclass(frozen=True)
class DetailRoute:
    channel_id: str


@dataclass(frozen=True)
class StatsRoute:
    pass


Route = Union[ListRoute, DetailRoute, StatsRoute]


@dataclass(frozen=True)
class ChannelFilters:
    category: str | None = None
    language: str | None = None
    country: str | None = None
    search: str | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def as_log_dict(self) -> dict:
        return {
            "category": self.category,
            "language": self.language,
            "country": self.country,
            "search": self.search,
            "page": self.page,
            "limit": self.limit,
        }


def _strip_base_path(path: str, base_path: str) -> str:
    base = base_path.strip("/")
    if not base:
        return path
    stripped = path.strip("/")
    if stripped == base:
        return ""
    if stripped.startswith(base + "/"):
        return stripped[len(base) + 1 :]
    return path


def path_segments(path: str, base_path: str = "") -> list[str]:
    return [p for p in _strip_base_path(path, base_path).split("/") if p]


def is_valid_channel_id(value: str) -> bool:
    return bool(UUID_RE.match(value))


def resolve_route(method: str, path: str, base_path: str = "") -> Route:
    """
    Map an HTTP method and URL path onto a route.

    OPTIONS never reaches here; pre-flight is answered by the CORS middleware.
    """
    if method.upper() != "GET":
        raise MethodNotAllowed()

    segments = path_segments(path, base_path)

    if len(segments) <= 1:
        return ListRoute()

    if len(segments) == 2:
        if segments[1] == STATS_SEGMENT:
            return StatsRoute()
        if not is_valid_channel_id(segments[1]):
            raise InvalidIdentifier()
        return DetailRoute(channel_id=segments[1])

    raise MethodNotAllowed()


def sanitize_string(value: str | None, max_length: int = SEARCH_MAX_LENGTH) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()[:max_length]
    return cleaned or None


def _parse_leading_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    m = _LEADING_INT_RE.match(raw)
    if not m:
        return None
    return int(m.group(1))


def parse_page(raw: str | None) -> int:
    value = _parse_leading_int(raw)
    if value is None:
        return DEFAULT_PAGE
    return min(MAX_PAGE, max(1, value))


def parse_limit(raw: str | None) -> int:
    value = _parse_leading_int(raw)
    if value is None:
        return DEFAULT_LIMIT
    return min(MAX_LIMIT, max(1, value))


def parse_filters(params: Mapping[str, str]) -> ChannelFilters:
    return ChannelFilters(
        category=sanitize_string(params.get("category"), FILTER_MAX_LENGTH),
        language=sanitize_string(params.get("language"), FILTER_MAX_LENGTH),
        country=sanitize_string(params.get("country"), FILTER_MAX_LENGTH),
        search=sanitize_string(params.get("search"), SEARCH_MAX_LENGTH),
        page=parse_page(params.get("page")),
        limit=parse_limit(params.get("limit")),
    )


def first_values(items: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Collapse repeated query parameters, keeping the first occurrence."""
    out: dict[str, str] = {}
    for key, value in items:
        out.setdefault(key, value)
    return out
