"""Keycloak OIDC provider - resolves bearer tokens into auth contexts."""

import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from actcoll.domain.value_objects import AuthContext

logger = logging.getLogger(__name__)


class KeycloakProvider:
    """Keycloak OIDC - introspects JWTs and maps them to policy subjects."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> AuthContext | None:
        """Introspect token; return the caller's context or None if inactive."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        return context_from_claims(token_info)


def context_from_claims(token_info: dict) -> AuthContext | None:
    """Build an AuthContext from introspection claims.

    Realm roles and the `groups` claim both become policy subjects.
    """
    if not token_info.get("active") or not token_info.get("sub"):
        return None
    roles = token_info.get("realm_access", {}).get("roles", [])
    groups = token_info.get("groups", [])
    return AuthContext(
        user_id=token_info["sub"],
        groups=frozenset(roles) | frozenset(groups),
    )
