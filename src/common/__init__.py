"""
Shared utilities for the animation resolver.
"""
