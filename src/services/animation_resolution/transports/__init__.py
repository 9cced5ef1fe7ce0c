"""
Transport implementations for the animation resolution service.

Supports:
- HTTP/REST (FastAPI)
"""
