"""
Bearer-token authentication for user endpoints.

Tokens are issued by an external auth service and signed with RS256; this
application only verifies them with the configured ``JWT_PUBLIC_KEY`` and
resolves the ``user_id`` claim to a :class:`~app.models.User` row.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import jwt
from flask import current_app, g, request

from app import db
from app.errors import Unauthenticated
from app.models import User

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ALGORITHMS = ["RS256"]
REQUIRED_TOKEN_CLAIMS = ["user_id", "username", "iat", "exp"]


def verify_token(
    token: str,
    public_key: str,
    algorithms: list[str] | None = None,
) -> dict[str, Any] | None:
    """
    Decode and validate a JWT, returning the payload on success.

    Performs signature, ``exp`` and ``iat`` checks, requires every claim in
    ``REQUIRED_TOKEN_CLAIMS`` and checks that ``user_id`` is a positive
    integer.

    Args:
        token: The encoded JWT string to verify.
        public_key: RSA public key in PEM format.
        algorithms: Acceptable signing algorithms (default ``["RS256"]``).

    Returns:
        The decoded payload, or ``None`` if verification fails.
    """
    try:
        decoded = jwt.decode(
            token,
            public_key,
            algorithms=algorithms or DEFAULT_ALLOWED_ALGORITHMS,
            options={"require": REQUIRED_TOKEN_CLAIMS},
            leeway=int(current_app.config.get("JWT_CLOCK_SKEW_SECONDS", 30)),
        )
    except jwt.InvalidTokenError:
        return None

    user_id = decoded.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id <= 0:
        return None
    return decoded


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


def require_auth(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that enforces Bearer-token authentication.

    On success the authenticated :class:`User` is stored on
    ``flask.g.current_user``. Any failure raises :class:`Unauthenticated`,
    which the error handlers render as a 401 envelope.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        public_key = current_app.config.get("JWT_PUBLIC_KEY")
        if not public_key:
            logger.warning("JWT_PUBLIC_KEY is not configured; rejecting request")
            raise Unauthenticated()

        token = _bearer_token()
        if token is None:
            raise Unauthenticated()

        payload = verify_token(token, public_key)
        if payload is None:
            raise Unauthenticated()

        user = db.session.get(User, payload["user_id"])
        if user is None:
            logger.warning(f"Token refers to unknown user {payload['user_id']}")
            raise Unauthenticated()

        g.current_user = user
        return view_func(*args, **kwargs)

    return wrapper
