from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobtracker.config import settings
from jobtracker.database import get_db
from jobtracker.models.user import User


bearer_scheme = HTTPBearer(auto_error=False)
HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 210_000


def _pbkdf2(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations).hex()


def hash_password(password: str) -> str:
    """Hash as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``."""
    salt = secrets.token_hex(16)
    return "$".join((HASH_ALGORITHM, str(HASH_ITERATIONS), salt, _pbkdf2(password, salt, HASH_ITERATIONS)))


def verify_password(password: str, password_hash: str) -> bool:
    parts = (password_hash or "").split("$")
    if len(parts) != 4 or parts[0] != HASH_ALGORITHM or not parts[1].isdigit():
        return False
    _, iterations, salt, digest = parts
    return hmac.compare_digest(_pbkdf2(password, salt, int(iterations)), digest)


def _signature(claims: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), claims.encode("utf-8"), hashlib.sha256).hexdigest()


def create_access_token(user_id: int, ttl_seconds: int | None = None, secret: str | None = None) -> str:
    """Issue an opaque bearer token for ``user_id``.

    The token is the unpadded urlsafe base64 of ``user_id:expiry:nonce:signature``
    where the signature is an HMAC-SHA256 over the first three fields.
    """
    ttl = settings.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    claims = f"{user_id}:{int(time.time()) + ttl}:{secrets.token_hex(6)}"
    raw = f"{claims}:{_signature(claims, secret or settings.auth_secret)}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode_access_token(token: str, secret: str | None = None) -> int | None:
    """Return the user id of a well-signed, unexpired token, else None."""
    if not token:
        return None
    try:
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4)).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return None

    claims, _, signature = raw.rpartition(":")
    fields = claims.split(":")
    if len(fields) != 3 or not hmac.compare_digest(_signature(claims, secret or settings.auth_secret), signature):
        return None
    user_id, expires_at, _ = fields
    if not (user_id.isdigit() and expires_at.isdigit()) or int(expires_at) < time.time():
        return None
    return int(user_id)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user")
    return user
