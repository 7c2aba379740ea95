"""
Signing keys and bearer tokens for tests of the user endpoints.

Tokens mimic the ones minted by the external auth service: RS256, with
``user_id``, ``username`` (the account email), ``iat`` and ``exp`` claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, NamedTuple

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


class SigningKeys(NamedTuple):
    private_pem: str
    public_pem: str


def new_signing_keys() -> SigningKeys:
    """Generate an in-memory RSA key pair as PEM strings."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return SigningKeys(
        private_pem=key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("utf-8"),
        public_pem=key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("utf-8"),
    )


def token_claims(
    user_id: Any,
    username: str = "test.user@example.com",
    expires_in: timedelta = timedelta(hours=1),
) -> dict[str, Any]:
    """Claims for ``user_id``; a negative ``expires_in`` gives an expired token."""
    now = datetime.now(timezone.utc)
    return {
        "user_id": user_id,
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }


def with_bearer(headers: dict[str, str], token: str) -> dict[str, str]:
    return {**headers, "Authorization": f"Bearer {token}"}
