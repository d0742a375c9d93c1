"""JWT issue / verify utilities (access & refresh tokens)"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional
import uuid
import jwt

from app.core.exceptions import AuthenticationError

ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(hours=24)
REFRESH_TOKEN_TTL = timedelta(days=7)

ACCESS = "access"
REFRESH = "refresh"


def build_claims(user) -> Dict[str, Any]:
    """Identity claims carried by every token issued for ``user``."""
    return {"userId": user.id, "email": user.email, "isAdmin": bool(user.is_admin)}


def _build_payload(claims: Dict[str, Any], expires_delta: timedelta, token_type: str) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "userId": claims["userId"],
        "email": claims["email"],
        "isAdmin": bool(claims.get("isAdmin", False)),
        "type": token_type,
        "iat": now,
        "exp": now + expires_delta,
    }


def create_access_token(
    claims: Dict[str, Any], secret: str, expires_delta: timedelta = ACCESS_TOKEN_TTL, algorithm: str = ALGORITHM
) -> str:
    return jwt.encode(_build_payload(claims, expires_delta, ACCESS), secret, algorithm=algorithm)


def create_refresh_token(
    claims: Dict[str, Any], secret: str, expires_delta: timedelta = REFRESH_TOKEN_TTL, algorithm: str = ALGORITHM
) -> str:
    payload = _build_payload(claims, expires_delta, REFRESH)
    # unique per issue so two logins in the same second store distinct hashes
    payload["jti"] = uuid.uuid4().hex
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = ALGORITHM) -> Dict[str, Any]:
    """Decode and verify a token, raising AuthenticationError with the failure kind."""
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token expired", reason="expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token", reason="invalid") from e
    except Exception as e:
        raise AuthenticationError("Token verification failed", reason="failed") from e


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Read claims without verifying signature or expiry; None when unreadable."""
    try:
        return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.PyJWTError:
        return None


def get_token_expiration(token: str) -> Optional[datetime]:
    decoded = decode_token(token)
    if not decoded or "exp" not in decoded:
        return None
    return datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)


def is_token_expired(token: str) -> bool:
    expiration = get_token_expiration(token)
    if expiration is None:
        return True
    return expiration <= datetime.now(timezone.utc)


def extract_token_from_header(header: Optional[str]) -> Optional[str]:
    """Token from ``Authorization: Bearer <token>``; any other shape yields None."""
    if not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]
