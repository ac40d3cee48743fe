"""Bearer-token identity for the project service.

The identity server (Keycloak or any OIDC provider) issues JWT access
tokens. TokenVerifier checks signature, expiry and issuer; the verified
claims become a TokenIdentityProvider for the lifetime of one request.

Role lookup follows the Keycloak claim layout:
    resource_access.<client_id>.roles  (client roles)
    realm_access.roles                 (realm roles)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import jwt

from project_service.config import IdentityConfig
from project_service.exceptions import AuthenticationError
from project_service.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenIdentityProvider:
    """IdentityProvider backed by the claims of a verified access token.

    Attributes:
        username: Caller identity (``preferred_username``, falling back to ``sub``)
        client_roles: Roles granted on the configured client
        realm_roles: Realm-wide roles
        token: Raw bearer token, forwarded to downstream services
    """

    username: str
    client_roles: frozenset[str] = field(default_factory=frozenset)
    realm_roles: frozenset[str] = field(default_factory=frozenset)
    token: str | None = None

    @classmethod
    def from_claims(
        cls, claims: dict[str, Any], client_id: str, token: str | None = None
    ) -> TokenIdentityProvider:
        """Build an identity from decoded token claims.

        Raises:
            AuthenticationError: If the token carries no usable username.
        """
        username = claims.get("preferred_username") or claims.get("sub")
        if not username:
            raise AuthenticationError("Token has no preferred_username or sub claim")

        client_access = (claims.get("resource_access") or {}).get(client_id) or {}
        realm_access = claims.get("realm_access") or {}

        return cls(
            username=str(username),
            client_roles=frozenset(client_access.get("roles") or ()),
            realm_roles=frozenset(realm_access.get("roles") or ()),
            token=token,
        )

    def current_identity(self) -> str:
        return self.username

    def has_role(self, identity: str, role_name: str) -> bool:
        # A request only carries the caller's own claims
        if identity != self.username:
            return False
        return role_name in self.client_roles or role_name in self.realm_roles


class TokenVerifier:
    """Verifies JWT access tokens issued by the identity server.

    HS* algorithms use the configured shared secret; anything else fetches
    signing keys from the issuer's JWKS endpoint (cached by PyJWKClient).
    """

    def __init__(self, config: IdentityConfig) -> None:
        self.config = config
        self._jwks_client: jwt.PyJWKClient | None = None
        if not all(alg.startswith("HS") for alg in config.algorithms):
            self._jwks_client = jwt.PyJWKClient(config.resolved_jwks_url)

    def _signing_key(self, token: str) -> Any:
        if self._jwks_client is not None and not jwt.get_unverified_header(token).get(
            "alg", ""
        ).startswith("HS"):
            return self._jwks_client.get_signing_key_from_jwt(token).key
        return self.config.secret_key

    def verify(self, token: str) -> TokenIdentityProvider:
        """Verify a bearer token and build the caller's identity.

        Args:
            token: Raw JWT access token.

        Returns:
            Identity provider scoped to the token's subject.

        Raises:
            AuthenticationError: If the token is expired, malformed, or
                fails signature, issuer or audience checks.
        """
        try:
            claims = jwt.decode(
                token,
                self._signing_key(token),
                algorithms=self.config.algorithms,
                issuer=self.config.issuer,
                audience=self.config.client_id if self.config.verify_audience else None,
                options={"verify_aud": self.config.verify_audience},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.warning("token_expired")
            raise AuthenticationError("Token expired") from exc
        except (jwt.InvalidTokenError, jwt.PyJWKClientError) as exc:
            logger.warning("token_invalid", error=str(exc))
            raise AuthenticationError("Invalid token") from exc

        return TokenIdentityProvider.from_claims(claims, self.config.client_id, token=token)
