"""
Resolution Errors

Every failure the pipeline can report. Each error carries the HTTP status
and a machine-readable code so transports can render it without inspecting
the message. Messages never include credentials.
"""

from __future__ import annotations


class ResolutionError(Exception):
    """Base class for failures of a single resolution request."""

    status_code: int = 500
    code: str = "resolution_error"
    default_message: str = "Resolution failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"error": self.message, "code": self.code}


class MissingCredentialError(ResolutionError):
    """No session credential is available from any source."""

    status_code = 400
    code = "missing_credential"
    default_message = (
        "Missing .ROBLOSECURITY. Set env ROBLOSECURITY or send "
        "X-Roblox-Security header server-side."
    )


class MissingAssetIdError(ResolutionError):
    """Neither an explicit id nor an extractable id was supplied."""

    status_code = 400
    code = "missing_asset_id"
    default_message = "Could not extract an asset/catalog ID (6+ digits) from input."


class InvalidAssetIdError(ResolutionError):
    """An explicit asset id was supplied but is not numeric."""

    status_code = 400
    code = "invalid_asset_id"
    default_message = "Asset ID must contain digits only."


class RateLimitedError(ResolutionError):
    """Asset Delivery throttled the request."""

    status_code = 429
    code = "rate_limited"
    default_message = "Rate limited by Asset Delivery. Please try again later."


class UnauthorizedError(ResolutionError):
    """Asset Delivery rejected the session credential."""

    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized: Asset Delivery requires a valid .ROBLOSECURITY."


class UpstreamError(ResolutionError):
    """Any other upstream failure."""

    status_code = 502
    code = "upstream_error"
    default_message = "Asset Delivery request failed."

    def __init__(self, message: str | None = None, status: int | None = None):
        super().__init__(message)
        self.status = status

    @classmethod
    def from_status(cls, status: int, reason: str | None = None) -> UpstreamError:
        """Build an error with the upstream status folded into the message."""
        detail = f"{status} {reason}".strip() if reason else str(status)
        return cls(f"Asset Delivery error: {detail}", status=status)


class UpstreamTimeoutError(UpstreamError):
    """An outbound request exceeded the configured timeout."""

    status_code = 504
    code = "upstream_timeout"
    default_message = "Timed out waiting for Asset Delivery."


class NoContentError(ResolutionError):
    """No CDN location yielded usable content."""

    status_code = 502
    code = "no_content"
    default_message = "Failed to fetch any CDN asset content."
