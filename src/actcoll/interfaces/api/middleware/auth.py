"""Auth middleware - resolves the caller's AuthContext or allows anonymous."""

import falcon.asgi

from actcoll.domain.value_objects import AuthContext

ANONYMOUS = AuthContext(user_id="anonymous")


class AuthMiddleware:
    """Middleware that validates JWT and sets req.context.user."""

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract caller from Authorization header."""
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            token = auth[7:]
            req.context.user = self._keycloak.decode_token(token) if self._keycloak else None
        else:
            req.context.user = ANONYMOUS
