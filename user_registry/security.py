"""
Signed access tokens.

Tokens are compact HS256 JSON Web Tokens (``header.payload.signature``,
each part base64url-encoded without padding) carrying the subject's user
id under ``id`` and a UNIX ``exp`` timestamp.  They are signed with
``settings.SECRET_KEY`` and live ``settings.TOKEN_EXPIRE_SECONDS`` (one
hour) unless the caller asks otherwise.
"""
import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from user_registry.config import settings

logger = logging.getLogger(__name__)

_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes) -> bytes:
    return hmac.new(settings.SECRET_KEY.encode("utf-8"), message, hashlib.sha256).digest()


def _encode_part(obj: dict) -> str:
    return _b64_url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def create_access_token(user_id: int, expires_in: Optional[int] = None) -> str:
    """Issue a token for *user_id* valid for *expires_in* seconds."""
    lifetime = settings.TOKEN_EXPIRE_SECONDS if expires_in is None else expires_in
    claims = {"id": user_id, "exp": int(time.time()) + lifetime}
    signing_input = f"{_encode_part(_HEADER)}.{_encode_part(claims)}"
    signature = _b64_url_encode(_sign(signing_input.encode("ascii")))
    return f"{signing_input}.{signature}"


def decode_access_token(token: str) -> Optional[int]:
    """
    Return the user id embedded in *token*, or None when the token is
    malformed, carries a bad signature or has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts

    try:
        expected = _sign(f"{header_b64}.{payload_b64}".encode("ascii"))
        if not hmac.compare_digest(expected, _b64_url_decode(signature_b64)):
            return None
        claims = json.loads(_b64_url_decode(payload_b64))
    except (ValueError, UnicodeError):
        return None

    if not isinstance(claims, dict):
        return None
    exp = claims.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        return None
    subject = claims.get("id")
    return subject if isinstance(subject, int) else None


bearer = HTTPBearer(auto_error=False)


def require_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> int:
    """Dependency resolving the bearer token to a user id, or 401."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        logger.info("Rejected invalid or expired bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def guard_writes(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> int | None:
    """
    Route guard for mutating endpoints.  Enforces ``require_token`` only
    when ``settings.REQUIRE_AUTH`` is on; otherwise lets every request
    through.
    """
    if not settings.REQUIRE_AUTH:
        return None
    return require_token(credentials)
