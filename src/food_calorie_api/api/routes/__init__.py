"""API routes."""

from . import upload

__all__ = ["upload"]
