"""Unit tests for AnimationIdResolver."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.services.animation_resolution.config import AnimationServiceConfig
from src.services.animation_resolution.core.client import AssetDeliveryClient
from src.services.animation_resolution.core.errors import (
    InvalidAssetIdError,
    MissingAssetIdError,
    MissingCredentialError,
    NoContentError,
    RateLimitedError,
)
from src.services.animation_resolution.core.models import ContentFetch, ResolutionResult
from src.services.animation_resolution.core.resolver import AnimationIdResolver


def _config(**overrides) -> AnimationServiceConfig:
    return AnimationServiceConfig(_env_file=None, **overrides)


def _client(
    info: dict | None = None,
    text: str = "",
    attempts: int = 1,
) -> MagicMock:
    client = MagicMock(spec=AssetDeliveryClient)
    client.fetch_asset_delivery_info = AsyncMock(
        return_value=info if info is not None else {"locations": [{"location": "https://c1/x"}]}
    )
    client.fetch_first_content = AsyncMock(
        return_value=ContentFetch(text=text, location="https://c1/x", attempts=attempts)
    )
    return client


class TestAnimationIdResolver:
    """Test suite for AnimationIdResolver."""

    async def test_end_to_end_with_catalog_url(self) -> None:
        """Resolves the documented catalog URL scenario."""
        client = _client(text="foo 555555 bar 555555 baz 999999")
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        result = await resolver.resolve(catalog_url="https://example.com/catalog/987654321?x=1")

        assert result == ResolutionResult(
            input_id="987654321",
            animation_id_candidate="555555",
            all_numeric_matches=("555555", "999999"),
            cdn_locations_tried=1,
        )
        assert result.to_dict() == {
            "inputId": "987654321",
            "animationIdCandidate": "555555",
            "allNumericMatches": ["555555", "999999"],
            "cdnLocationsTried": 1,
        }
        client.fetch_asset_delivery_info.assert_awaited_once_with("987654321", "cookie")
        client.fetch_first_content.assert_awaited_once_with(["https://c1/x"], "cookie")

    async def test_explicit_asset_id_wins(self) -> None:
        client = _client(text="123456")
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        result = await resolver.resolve(
            catalog_url="https://example.com/catalog/987654321", asset_id="111222333"
        )

        assert result.input_id == "111222333"
        client.fetch_asset_delivery_info.assert_awaited_once_with("111222333", "cookie")

    async def test_request_credential_overrides_config(self) -> None:
        client = _client(text="123456")
        resolver = AnimationIdResolver(_config(roblosecurity="configured"), client=client)

        await resolver.resolve(asset_id="987654321", credential="  override  ")

        client.fetch_asset_delivery_info.assert_awaited_once_with("987654321", "override")

    async def test_blank_request_credential_falls_back_to_config(self) -> None:
        client = _client(text="123456")
        resolver = AnimationIdResolver(_config(roblosecurity="configured"), client=client)

        await resolver.resolve(asset_id="987654321", credential="   ")

        client.fetch_asset_delivery_info.assert_awaited_once_with("987654321", "configured")

    async def test_missing_credential_makes_no_network_call(self) -> None:
        client = _client()
        resolver = AnimationIdResolver(_config(), client=client)

        with pytest.raises(MissingCredentialError) as exc_info:
            await resolver.resolve(catalog_url="https://example.com/catalog/987654321")

        assert exc_info.value.status_code == 400
        client.fetch_asset_delivery_info.assert_not_awaited()
        client.fetch_first_content.assert_not_awaited()

    async def test_credential_checked_before_asset_id(self) -> None:
        resolver = AnimationIdResolver(_config(), client=_client())

        with pytest.raises(MissingCredentialError):
            await resolver.resolve()

    async def test_missing_asset_id_makes_no_network_call(self) -> None:
        client = _client()
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        with pytest.raises(MissingAssetIdError) as exc_info:
            await resolver.resolve(catalog_url="https://example.com/catalog/id12345")

        assert exc_info.value.status_code == 400
        client.fetch_asset_delivery_info.assert_not_awaited()

    async def test_invalid_asset_id_makes_no_network_call(self) -> None:
        client = _client()
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        with pytest.raises(InvalidAssetIdError):
            await resolver.resolve(asset_id="12ab34")

        client.fetch_asset_delivery_info.assert_not_awaited()

    async def test_no_matches_yields_null_candidate(self) -> None:
        resolver = AnimationIdResolver(
            _config(roblosecurity="cookie"), client=_client(text="no ids 12345 here")
        )

        result = await resolver.resolve(asset_id="987654321")

        assert result.animation_id_candidate is None
        assert result.all_numeric_matches == ()

    async def test_reports_locations_attempted(self) -> None:
        info = {"locations": ["https://a/1", "https://b/2", "https://c/3"]}
        client = _client(info=info, text="444444", attempts=2)
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        result = await resolver.resolve(asset_id="987654321")

        assert result.cdn_locations_tried == 2
        client.fetch_first_content.assert_awaited_once_with(
            ["https://a/1", "https://b/2", "https://c/3"], "cookie"
        )

    async def test_upstream_errors_propagate(self) -> None:
        client = _client()
        client.fetch_asset_delivery_info = AsyncMock(side_effect=RateLimitedError())
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        with pytest.raises(RateLimitedError):
            await resolver.resolve(asset_id="987654321")

        client.fetch_first_content.assert_not_awaited()

    async def test_empty_locations_are_passed_through(self) -> None:
        client = _client(info={"locations": []})
        client.fetch_first_content = AsyncMock(side_effect=NoContentError())
        resolver = AnimationIdResolver(_config(roblosecurity="cookie"), client=client)

        with pytest.raises(NoContentError):
            await resolver.resolve(asset_id="987654321")

        client.fetch_first_content.assert_awaited_once_with([], "cookie")

    def test_builds_client_from_config(self) -> None:
        resolver = AnimationIdResolver(_config(timeout_seconds=3.5, user_agent="ua/2"))

        assert isinstance(resolver._client, AssetDeliveryClient)
        assert resolver._client._timeout_seconds == 3.5
        assert resolver._client._user_agent == "ua/2"
