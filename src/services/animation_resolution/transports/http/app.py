"""
FastAPI HTTP Transport for Animation Resolution Service

Provides REST endpoints for animation id resolution:
- /health - Liveness probe
- /api/resolve - Resolve a catalog URL or asset id

NOTE: Do NOT add `from __future__ import annotations` to this file.
PEP 563 breaks FastAPI's runtime introspection for parameter sources.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.common.logging import get_sanitized_logger, redact_secret

from ...config import AnimationServiceConfig
from ...core.errors import ResolutionError
from ...core.resolver import AnimationIdResolver

logger = get_sanitized_logger(__name__)


# Request/Response models
class ResolveRequest(BaseModel):
    """Request body for /api/resolve endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    catalog_url: str | None = Field(None, alias="catalogUrl", max_length=2048)
    asset_id: str | None = Field(None, alias="assetId", max_length=32)

    @field_validator("asset_id", mode="before")
    @classmethod
    def _coerce_asset_id(cls, value: Any) -> Any:
        # JSON clients often send the id as a number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ResolveResponse(BaseModel):
    """Response for animation id resolution."""

    model_config = ConfigDict(populate_by_name=True)

    input_id: str = Field(..., alias="inputId")
    animation_id_candidate: str | None = Field(None, alias="animationIdCandidate")
    all_numeric_matches: list[str] = Field(default_factory=list, alias="allNumericMatches")
    cdn_locations_tried: int = Field(0, alias="cdnLocationsTried")


class ErrorResponse(BaseModel):
    """Error body returned for failed resolutions."""

    error: str
    code: str


def create_app(
    config: AnimationServiceConfig | None = None,
    resolver: AnimationIdResolver | None = None,
) -> Any:
    """
    Create a FastAPI application for the animation resolution service.

    Args:
        config: Service configuration
        resolver: Resolver to serve (built from config when omitted)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.responses import JSONResponse
    except ImportError as e:
        raise ImportError(
            "FastAPI is required. Install with: pip install fastapi uvicorn"
        ) from e

    _config = config or AnimationServiceConfig()
    _resolver = resolver or AnimationIdResolver(_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info(f"Starting animation resolution service: {_config.server_name}")
        if _config.default_credential() is None:
            logger.warning(
                "No default credential configured; requests must supply "
                f"the {_config.credential_header} header"
            )
        yield
        logger.info("Animation resolution service shut down")

    app = FastAPI(
        title="Animation Resolution Service",
        description="Resolves Roblox emote catalog items to animation ids",
        version=_config.server_version,
        lifespan=lifespan,
    )
    app.state.config = _config
    app.state.resolver = _resolver

    def error_response(error: ResolutionError, *secrets: str | None) -> JSONResponse:
        content = error.to_dict()
        for secret in secrets:
            content["error"] = redact_secret(content["error"], secret)
        logger.info(f"Resolution failed ({error.code}): {content['error']}")
        return JSONResponse(content=content, status_code=error.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Field names and reasons only; the rejected input is never echoed
        problems = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            problems.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
        message = "Invalid request body: " + "; ".join(problems)
        logger.info(f"Rejected request ({message})")
        return JSONResponse(
            content={"error": message, "code": "invalid_request"},
            status_code=400,
        )

    @app.get("/health")
    async def liveness_check() -> JSONResponse:
        """Liveness probe - just checks if process is alive."""
        return JSONResponse(content={"ok": True}, status_code=200)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with service info."""
        return {
            "name": _config.server_name,
            "version": _config.server_version,
            "endpoints": {
                "health": "/health",
                "resolve": "/api/resolve",
            },
        }

    @app.post(
        "/api/resolve",
        response_model=ResolveResponse,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            429: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
            504: {"model": ErrorResponse},
        },
    )
    async def resolve_endpoint(request: Request, body: ResolveRequest | None = None) -> Any:
        """Resolve a catalog URL or asset id to an animation id candidate."""
        if body is None:
            body = ResolveRequest()
        header_credential = None
        if _config.accept_credential_header:
            header_credential = request.headers.get(_config.credential_header)

        try:
            result = await _resolver.resolve(
                catalog_url=body.catalog_url,
                asset_id=body.asset_id,
                credential=header_credential,
            )
        except ResolutionError as e:
            return error_response(e, header_credential, _config.default_credential())
        except Exception as e:
            logger.exception(f"Unexpected error resolving animation id: {type(e).__name__}")
            return JSONResponse(
                content={"error": "Unexpected error while resolving.", "code": "internal_error"},
                status_code=500,
            )

        return ResolveResponse(**result.to_dict())

    return app


async def run_http_server(config: AnimationServiceConfig | None = None) -> None:
    """
    Run the HTTP server.

    Args:
        config: Service configuration
    """
    try:
        import uvicorn
    except ImportError as e:
        raise ImportError(
            "Uvicorn is required. Install with: pip install uvicorn"
        ) from e

    _config = config or AnimationServiceConfig()
    app = create_app(_config)

    logger.info(f"Starting HTTP server on {_config.host}:{_config.port}")

    server_config = uvicorn.Config(
        app,
        host=_config.host,
        port=_config.port,
        log_level=_config.log_level.lower(),
    )
    server = uvicorn.Server(server_config)
    await server.serve()
