"""
Restaurant entity source: HTTP client for /api/restaurants and the shared filter rules.

The list returned by the service is a full snapshot; callers replace their
previous list with it.
"""
from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from halalmap.geo.markers import Entity
from halalmap.map_settings import ALL_CUISINES, ALL_PROVINCES, API_TIMEOUT_S, API_URL, USER_AGENT

log = logging.getLogger(__name__)

SORT_KEYS = ("rating", "name", "reviews")


FETCH_FAILED_MESSAGE = "Failed to load restaurants. Please try again."


class EntitySourceError(Exception):
    """The entity source could not be queried or returned unusable data."""


@dataclass(frozen=True)
class EntityQuery:
    province: Optional[str] = None
    search: str = ""
    cuisine: Optional[str] = None
    sort: Optional[str] = None

    @property
    def province_filter(self) -> Optional[str]:
        if not self.province or self.province == ALL_PROVINCES:
            return None
        return self.province

    @property
    def cuisine_filter(self) -> Optional[str]:
        if not self.cuisine or self.cuisine == ALL_CUISINES:
            return None
        return self.cuisine

    def to_params(self) -> dict:
        params = {}
        if self.province_filter:
            params["province"] = self.province_filter
        if self.search:
            params["search"] = self.search
        if self.cuisine_filter:
            params["cuisine"] = self.cuisine_filter
        if self.sort:
            params["sort"] = self.sort
        return params

    @classmethod
    def from_params(cls, params) -> "EntityQuery":
        """Build from a query-string mapping (Flask request.args or a dict)."""
        sort = params.get("sort")
        return cls(
            province=params.get("province") or None,
            search=(params.get("search") or "").strip(),
            cuisine=params.get("cuisine") or None,
            sort=sort if sort in SORT_KEYS else None,
        )


def _field(item, name: str, default=""):
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def filter_entities(items: Iterable[Union[dict, Entity]], query: EntityQuery) -> list:
    """Apply search/province/cuisine filters and optional sort.

    Works on raw records (dicts) and on Entity objects. Search is a
    case-insensitive substring match over name, address, cuisine and province.
    """
    needle = query.search.lower()
    province = query.province_filter
    cuisine = query.cuisine_filter
    out = []
    for item in items:
        if needle:
            haystack = [str(_field(item, k) or "") for k in ("name", "address", "cuisine", "province")]
            if not any(needle in h.lower() for h in haystack):
                continue
        if province and _field(item, "province") != province:
            continue
        if cuisine and _field(item, "cuisine") != cuisine:
            continue
        out.append(item)

    if query.sort == "rating":
        out.sort(key=lambda i: float(_field(i, "rating", 0) or 0), reverse=True)
    elif query.sort == "name":
        out.sort(key=lambda i: str(_field(i, "name")).lower())
    elif query.sort == "reviews":
        def reviews(i):
            if isinstance(i, dict):
                return int(i.get("reviewCount", i.get("review_count", 0)) or 0)
            return int(i.review_count or 0)
        out.sort(key=reviews, reverse=True)
    return out


def build_url(base_url: str, query: EntityQuery) -> str:
    url = base_url.rstrip("/") + "/api/restaurants"
    params = query.to_params()
    if params:
        url += "?" + urllib.parse.urlencode(params)
    return url


def fetch_entities(query: EntityQuery, base_url: str = API_URL, timeout: float = API_TIMEOUT_S) -> List[Entity]:
    """GET the restaurant list for ``query``. Raises EntitySourceError on any failure."""
    url = build_url(base_url, query)
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = json.loads(resp.read().decode())
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        log.warning("Failed to fetch restaurants from %s: %s", url, exc)
        raise EntitySourceError(FETCH_FAILED_MESSAGE) from exc
    if not isinstance(data, list):
        raise EntitySourceError("Unexpected response from restaurant service")
    entities = []
    for record in data:
        try:
            entities.append(Entity.from_record(record))
        except (KeyError, TypeError, AttributeError):
            log.debug("Skipping malformed restaurant record: %r", record)
    return entities
