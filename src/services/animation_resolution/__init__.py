"""
Animation Resolution Service

Standalone service for resolving Roblox emote catalog items to animation ids.
Exposes an HTTP/REST transport; the resolver can also be used directly.

Usage:
    # As a service
    python -m src.services.animation_resolution --port 3000

    # Programmatic
    from src.services.animation_resolution import AnimationIdResolver, AnimationServiceConfig
"""

__version__ = "0.1.0"

from .config import AnimationServiceConfig
from .core.errors import ResolutionError
from .core.models import ResolutionResult
from .core.resolver import AnimationIdResolver

__all__ = [
    "AnimationIdResolver",
    "AnimationServiceConfig",
    "ResolutionError",
    "ResolutionResult",
]
