"""Highlight search client for Home Run Bot."""

import json
from collections.abc import Callable
from typing import Any

import requests

from .config import SearchConfig
from .logging_config import create_execution_logger
from .models import Feed, Highlight, Playback, SearchResult

SEARCH_OPERATION = "Search"

SEARCH_DOCUMENT = (
    "query Search($query: String!, $page: Int, $limit: Int, "
    "$feedPreference: FeedPreference, $languagePreference: LanguagePreference, "
    "$contentPreference: ContentPreference) { search(query: $query, limit: $limit, "
    "page: $page, feedPreference: $feedPreference, "
    "languagePreference: $languagePreference, contentPreference: $contentPreference) "
    "{ plays { mediaPlayback { ...MediaPlaybackFields __typename } __typename } "
    "total __typename } } fragment MediaPlaybackFields on MediaPlayback { id "
    "description feeds { type playbacks { name url __typename } __typename } "
    "__typename }"
)

PAGE_SIZE = 1
PAGE = 0
LANGUAGE_PREFERENCE = "EN"
CONTENT_PREFERENCE = "MIXED"


class SearchError(RuntimeError):
    """A poll did not produce a usable response."""


class SchemaMismatch(ValueError):
    """A response parsed as JSON but is not shaped like a search result."""


def _require(container: Any, key: str, expected: type) -> Any:
    if not isinstance(container, dict):
        raise SchemaMismatch(f"expected an object holding {key!r}")
    value = container.get(key)
    if not isinstance(value, expected):
        raise SchemaMismatch(f"{key!r} is not a {expected.__name__}")
    return value


def _parse_playback(raw: Any) -> Playback:
    return Playback(
        name=_require(raw, "name", str),
        url=_require(raw, "url", str),
    )


def _parse_each(items: list, parse: Callable[[Any], Any]) -> list:
    """Parse every well-formed entry, dropping the malformed ones."""
    parsed = []
    for item in items:
        try:
            parsed.append(parse(item))
        except SchemaMismatch:
            continue
    return parsed


def _parse_feed(raw: Any) -> Feed:
    return Feed(
        type=_require(raw, "type", str),
        playbacks=_parse_each(_require(raw, "playbacks", list), _parse_playback),
    )


def _parse_highlight(raw: Any) -> Highlight:
    return Highlight(
        id=_require(raw, "id", str),
        description=_require(raw, "description", str),
        feeds=_parse_each(_require(raw, "feeds", list), _parse_feed),
    )


def parse_search_response(payload: Any) -> SearchResult:
    """Parse a decoded search response into a SearchResult.

    The matched highlight sits at data.search.plays[0].mediaPlayback[0]. Only a
    response holding exactly one play with exactly one media playback record
    yields a highlight; anything else is an empty result. Feeds and playbacks
    that are malformed are dropped without discarding the highlight.

    Args:
        payload: Decoded JSON body

    Returns:
        SearchResult with zero or one highlight
    """
    try:
        search = _require(_require(payload, "data", dict), "search", dict)
        plays = _require(search, "plays", list)
        total = search.get("total")
        if not isinstance(total, int) or isinstance(total, bool):
            total = None

        if len(plays) != 1:
            return SearchResult(total=total)

        media = _require(plays[0], "mediaPlayback", list)
        if len(media) != 1:
            return SearchResult(total=total)

        return SearchResult(highlights=[_parse_highlight(media[0])], total=total)
    except SchemaMismatch:
        return SearchResult()


class SearchClient:
    """Queries the search API for the latest matching highlight."""

    def __init__(self, config: SearchConfig, execution_id: str | None = None):
        """Initialize SearchClient with configuration.

        Args:
            config: Search API configuration
            execution_id: Execution ID for logging context
        """
        self.config = config
        self.logger = create_execution_logger("search_client", execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": config.user_agent,
                "Content-Type": "application/json",
            }
        )

        self.logger.info(
            "SearchClient initialized",
            endpoint_url=config.endpoint_url,
            timeout=config.timeout,
        )

    def build_params(self, query: str) -> dict[str, str]:
        """Build the GET parameters for a search request."""
        variables = {
            "query": query,
            "limit": PAGE_SIZE,
            "page": PAGE,
            "languagePreference": LANGUAGE_PREFERENCE,
            "contentPreference": CONTENT_PREFERENCE,
        }
        return {
            "query": SEARCH_DOCUMENT,
            "operationName": SEARCH_OPERATION,
            "variables": json.dumps(variables),
        }

    def search(self, query: str) -> SearchResult:
        """Run a search and parse the response.

        Args:
            query: Query built by build_search_query

        Returns:
            SearchResult with zero or one highlight

        Raises:
            SearchError: If the request fails, returns a non-2xx status or the
                body is not JSON
        """
        self.logger.debug("Sending search request", search_query=query)

        try:
            response = self.session.get(
                self.config.endpoint_url,
                params=self.build_params(query),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"Search request failed: {e}", error=str(e))
            raise SearchError(f"Search request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(
                f"Search response is not valid JSON: {e}",
                status_code=response.status_code,
                content_length=len(response.content),
            )
            raise SearchError("Search response is not valid JSON") from e

        self.logger.debug(
            "Search response received",
            status_code=response.status_code,
            raw_response=payload,
        )

        result = parse_search_response(payload)
        if result.top is None:
            self.logger.info("No usable highlight in search response", total=result.total)
        else:
            self.logger.info(
                "Search returned highlight",
                highlight_id=result.top.id,
                total=result.total,
            )
        return result
