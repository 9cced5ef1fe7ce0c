"""
Animation ID Resolver Implementation

Resolves a catalog URL or asset id to an animation id candidate:
1. Identifier extraction (explicit id or catalog URL)
2. Asset Delivery metadata lookup
3. CDN content retrieval, first successful location wins
4. Numeric token scan of the content
"""

from __future__ import annotations

from src.common.logging import get_sanitized_logger

from ..config import AnimationServiceConfig
from .client import AssetDeliveryClient, extract_locations
from .errors import MissingAssetIdError, MissingCredentialError
from .extractor import extract_all_numeric_ids, pick_candidate, resolve_target_id
from .models import ResolutionResult

logger = get_sanitized_logger(__name__)


class AnimationIdResolver:
    """
    Resolver for emote animation ids.

    The resolver is a function of the request and the configuration it was
    built with. The configured credential is the default; a per-request
    credential overrides it.
    """

    def __init__(
        self,
        config: AnimationServiceConfig,
        client: AssetDeliveryClient | None = None,
    ):
        self._config = config
        self._client = client or AssetDeliveryClient(
            asset_delivery_url=config.asset_delivery_url,
            user_agent=config.user_agent,
            timeout_seconds=config.timeout_seconds,
        )

    async def resolve(
        self,
        catalog_url: str | None = None,
        asset_id: str | None = None,
        credential: str | None = None,
    ) -> ResolutionResult:
        """
        Resolve an animation id from a catalog URL or explicit asset id.

        Args:
            catalog_url: Catalog URL containing the asset id
            asset_id: Explicit asset id (takes precedence over catalog_url)
            credential: Per-request .ROBLOSECURITY override

        Returns:
            ResolutionResult with the candidate and every numeric match

        Raises:
            MissingCredentialError: If no credential is available
            MissingAssetIdError: If no asset id can be determined
            InvalidAssetIdError: If the explicit asset id is not numeric
            ResolutionError: For any upstream failure
        """
        session_credential = self._select_credential(credential)
        if not session_credential:
            raise MissingCredentialError()

        target_id = resolve_target_id(catalog_url, asset_id)
        if not target_id:
            raise MissingAssetIdError()

        logger.info(f"Resolving animation id for asset {target_id}")

        info = await self._client.fetch_asset_delivery_info(target_id, session_credential)
        locations = extract_locations(info)
        fetched = await self._client.fetch_first_content(locations, session_credential)

        ids = extract_all_numeric_ids(fetched.text)
        candidate = pick_candidate(ids)

        logger.info(
            f"Asset {target_id}: {len(ids)} numeric match(es) after "
            f"{fetched.attempts} of {len(locations)} location(s)"
        )

        return ResolutionResult(
            input_id=target_id,
            animation_id_candidate=candidate,
            all_numeric_matches=tuple(ids),
            cdn_locations_tried=fetched.attempts,
        )

    def _select_credential(self, credential: str | None) -> str | None:
        """Pick the per-request credential, falling back to configuration."""
        if credential and credential.strip():
            return credential.strip()
        return self._config.default_credential()
