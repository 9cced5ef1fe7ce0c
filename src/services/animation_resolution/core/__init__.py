"""
Core animation id resolution logic.

This module contains the domain logic for animation id resolution,
independent of any transport or framework.
"""

from .client import AssetDeliveryClient
from .errors import ResolutionError
from .models import ContentFetch, ResolutionResult
from .resolver import AnimationIdResolver

__all__ = [
    "AnimationIdResolver",
    "AssetDeliveryClient",
    "ContentFetch",
    "ResolutionError",
    "ResolutionResult",
]
