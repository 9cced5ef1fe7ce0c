"""
Asset Delivery Client

Outbound calls for the resolution pipeline:
- Asset Delivery v2 metadata lookup
- CDN content retrieval with ordered fallback across locations

Requests are made once each. There is no retry and no backoff.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import urlsplit

import aiohttp

from src.common.logging import get_sanitized_logger

from .errors import (
    NoContentError,
    RateLimitedError,
    UnauthorizedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from .models import ContentFetch

logger = get_sanitized_logger(__name__)

COOKIE_NAME = ".ROBLOSECURITY"


def extract_locations(info: Any) -> list[str]:
    """
    Normalize the locations array of an Asset Delivery response.

    Entries are either bare URL strings or objects with a "location" field.
    Entries without a usable URL are skipped.
    """
    if not isinstance(info, dict):
        return []

    raw_locations = info.get("locations")
    if not isinstance(raw_locations, list):
        return []

    locations = []
    for entry in raw_locations:
        if isinstance(entry, str):
            url = entry
        elif isinstance(entry, dict):
            url = entry.get("location")
        else:
            url = None

        if isinstance(url, str) and url.strip():
            locations.append(url.strip())
    return locations


class AssetDeliveryClient:
    """
    Client for Asset Delivery metadata and CDN content.

    Each call opens its own session, so the client holds no per-request
    state and can be shared between concurrent resolutions.
    """

    def __init__(
        self,
        asset_delivery_url: str,
        user_agent: str,
        timeout_seconds: float = 10.0,
    ):
        self._asset_delivery_url = asset_delivery_url
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds

    def _headers(self, credential: str | None, accept: str) -> dict[str, str]:
        headers = {
            "User-Agent": self._user_agent,
            "Accept": accept,
        }
        if credential:
            headers["Cookie"] = f"{COOKIE_NAME}={credential}"
        return headers

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self._timeout_seconds),
        )

    async def fetch_asset_delivery_info(
        self,
        asset_id: str,
        credential: str | None,
    ) -> dict[str, Any]:
        """
        Fetch Asset Delivery metadata for an asset.

        Args:
            asset_id: Numeric asset id
            credential: .ROBLOSECURITY value, attached as a cookie when set

        Returns:
            Parsed JSON response body

        Raises:
            RateLimitedError: On 429
            UnauthorizedError: On 401
            UpstreamError: On any other status >= 400 or transport failure
            UpstreamTimeoutError: When the request times out
        """
        url = self._asset_delivery_url.format(asset_id=asset_id)
        headers = self._headers(credential, accept="application/json")

        try:
            async with self._session() as session:
                async with session.get(url, headers=headers) as response:
                    if response.status == 429:
                        raise RateLimitedError()
                    if response.status == 401:
                        raise UnauthorizedError()
                    if response.status >= 400:
                        raise UpstreamError.from_status(response.status, response.reason)

                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        raise UpstreamError(
                            "Asset Delivery returned an invalid JSON body."
                        ) from e
        except (asyncio.TimeoutError, TimeoutError) as e:
            logger.warning(f"Asset Delivery lookup timed out for asset {asset_id}")
            raise UpstreamTimeoutError() from e
        except aiohttp.ClientError as e:
            logger.warning(
                f"Asset Delivery lookup failed for asset {asset_id}: {type(e).__name__}"
            )
            raise UpstreamError(f"Asset Delivery request failed: {type(e).__name__}") from e

        if not isinstance(data, dict):
            raise UpstreamError("Asset Delivery returned an unexpected response shape.")

        logger.debug(
            f"Asset Delivery returned {len(extract_locations(data))} location(s) for asset {asset_id}"
        )
        return data

    async def fetch_first_content(
        self,
        locations: list[str],
        credential: str | None,
    ) -> ContentFetch:
        """
        Fetch the first CDN location that answers with text.

        Locations are tried strictly in order. Once one succeeds the rest
        are never requested.

        Args:
            locations: Ordered CDN URLs
            credential: .ROBLOSECURITY value, attached as a cookie when set

        Returns:
            ContentFetch with the body and the number of locations attempted

        Raises:
            NoContentError: If the list is empty or every location fails
        """
        if not locations:
            raise NoContentError("No CDN locations returned for this asset.")

        headers = self._headers(credential, accept="*/*")

        async with self._session() as session:
            attempts = self._attempt_locations(session, locations, headers)
            try:
                async for fetched in attempts:
                    if fetched is not None:
                        return fetched
            finally:
                await attempts.aclose()

        raise NoContentError()

    async def _attempt_locations(
        self,
        session: aiohttp.ClientSession,
        locations: list[str],
        headers: dict[str, str],
    ) -> AsyncIterator[ContentFetch | None]:
        """Lazily request each location, yielding a result or None per attempt."""
        for attempt, location in enumerate(locations, start=1):
            yield await self._fetch_location(session, location, headers, attempt)

    async def _fetch_location(
        self,
        session: aiohttp.ClientSession,
        location: str,
        headers: dict[str, str],
        attempt: int,
    ) -> ContentFetch | None:
        host = urlsplit(location).hostname or "unknown-host"
        try:
            async with session.get(location, headers=headers) as response:
                if not 200 <= response.status < 300:
                    logger.info(f"CDN location {attempt} ({host}) returned {response.status}")
                    return None
                body = await response.read()
        except (asyncio.TimeoutError, TimeoutError):
            logger.warning(f"CDN location {attempt} ({host}) timed out")
            return None
        except aiohttp.ClientError as e:
            logger.warning(f"CDN location {attempt} ({host}) failed: {type(e).__name__}")
            return None

        return ContentFetch(
            text=_decode_body(body),
            location=location,
            attempts=attempt,
        )


def _decode_body(body: bytes | str) -> str:
    """Decode a CDN body as UTF-8, keeping ASCII digits from binary payloads."""
    if isinstance(body, str):
        return body
    return body.decode("utf-8", errors="replace")
