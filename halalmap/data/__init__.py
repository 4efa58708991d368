from .entity_source import EntityQuery, EntitySourceError, fetch_entities, filter_entities, build_url
from .fetch_coordinator import FetchCoordinator, FetchTicket, BackgroundFetcher

__all__ = [
    "EntityQuery",
    "EntitySourceError",
    "fetch_entities",
    "filter_entities",
    "build_url",
    "FetchCoordinator",
    "FetchTicket",
    "BackgroundFetcher",
]
