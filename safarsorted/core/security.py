# safarsorted/core/security.py
import base64
import binascii
import hmac
from typing import Optional

from safarsorted.core.config import DEFAULT_ADMIN_PASS, DEFAULT_ADMIN_USER, Settings


def parse_basic_auth(authorization: Optional[str]) -> Optional[tuple[str, str]]:
    """
    Split `Basic <base64(user:pass)>` into (user, pass).
    Returns None for a missing header, another scheme or an undecodable payload.
    """
    if not authorization:
        return None
    scheme, _, encoded = authorization.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def authenticate(authorization: Optional[str], username: str, password: str) -> bool:
    """
    Check an Authorization header against the configured admin login.
    Stateless; callers re-run it on every protected request.
    """
    creds = parse_basic_auth(authorization)
    if creds is None or not username or not password:
        return False
    # compare both fields even if the first one fails
    user_ok = hmac.compare_digest(creds[0].encode("utf-8"), username.encode("utf-8"))
    pass_ok = hmac.compare_digest(creds[1].encode("utf-8"), password.encode("utf-8"))
    return user_ok and pass_ok


def uses_default_credentials(cfg: Settings) -> bool:
    """True when the admin login is blank or still the shipped fallback."""
    if not cfg.ADMIN_USER or not cfg.ADMIN_PASS:
        return True
    return cfg.ADMIN_USER == DEFAULT_ADMIN_USER or cfg.ADMIN_PASS == DEFAULT_ADMIN_PASS
