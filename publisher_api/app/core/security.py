"""
Security helpers for password hashing and bearer-token authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens carry the
user's id in ``sub`` and an expiration timestamp in ``exp``; they are
signed with ``Settings.secret_key``.  Passwords are hashed with
PBKDF2-HMAC-SHA256 and a random per-user salt.

``get_current_user`` is the FastAPI dependency guarding every
publisher route: it rejects a missing, malformed, badly signed or
expired token, and a token whose user no longer exists, with
``AuthError`` (HTTP 401).
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .context import AppContext, get_context
from .errors import AuthError


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
TOKEN_ALGORITHM = "HS256"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[int] = None,
) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field holding the
    expiration time as a UNIX timestamp.  The token has the form
    ``header.payload.signature``, each part base64url encoded, and is
    presented by clients as ``Authorization: Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": user_id}``).
    settings : Settings
        Supplies the signing key and the default lifetime.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A signed JWT token.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": TOKEN_ALGORITHM, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload when the signature matches and ``exp`` lies in
    the future, otherwise ``None``.  A header naming any algorithm
    other than HS256 is rejected.  Any malformed input (wrong number
    of segments, bad base64, non-JSON payload) also yields ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and json.JSONDecodeError are both ValueErrors
        return None
    if not isinstance(header, dict) or header.get("alg") != TOKEN_ALGORITHM:
        return None
    if not isinstance(data, dict):
        return None
    try:
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (TypeError, ValueError):
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each call.  The result is
    ``"<salt hex>$<hash hex>"`` so the salt travels with the hash and
    ``verify_password`` can recompute it.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored ``salt$hash`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    """Dependency that retrieves the current authenticated user.

    ``HTTPBearer`` yields ``None`` for a missing header, a non-bearer
    scheme or an empty token (``"Bearer "``).  On success the decoded
    token payload is returned with ``user_id``, ``username`` and
    ``email`` of the stored user attached.
    """
    if credentials is None:
        raise AuthError("Not authenticated")

    payload = decode_access_token(credentials.credentials, context.settings)
    if not payload:
        logger.debug("Rejected invalid or expired token")
        raise AuthError("Invalid or expired token")

    # The subject may have been deleted since the token was issued.
    from publisher_api.app.services.user_service import UserService
    user = await UserService(context.db).get_user_by_id(str(payload.get("sub")))
    if not user:
        logger.debug("Rejected token for unknown user %s", payload.get("sub"))
        raise AuthError("User no longer exists")

    payload["user_id"] = user.id
    payload["username"] = user.username
    payload["email"] = user.email
    return payload
