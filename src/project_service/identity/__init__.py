"""Caller identity resolution from OAuth bearer tokens."""

from __future__ import annotations

from project_service.identity.token import TokenIdentityProvider, TokenVerifier

__all__ = [
    "TokenIdentityProvider",
    "TokenVerifier",
]
