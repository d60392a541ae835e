import hashlib
import hmac
from typing import Optional
from urllib.parse import urlencode

from ..core.config import settings

TOKEN_LENGTH = 16


def make_quote_token(inquiry_id: int, secret: Optional[str] = None) -> str:
    """Return the short HMAC that authorises accepting a quote."""
    key = (secret or settings.SECRET_KEY).encode("utf-8")
    digest = hmac.new(key, str(inquiry_id).encode("utf-8"), hashlib.sha256).hexdigest()
    return digest[:TOKEN_LENGTH]


def verify_quote_token(inquiry_id: int, token: str, secret: Optional[str] = None) -> bool:
    if not token:
        return False
    return hmac.compare_digest(make_quote_token(inquiry_id, secret), token)


def build_accept_url(base_url: str, inquiry_id: int, secret: Optional[str] = None) -> str:
    query = urlencode({"id": inquiry_id, "token": make_quote_token(inquiry_id, secret)})
    return f"{base_url.rstrip('/')}{settings.API_V1_STR}/inquiries/accept-quote?{query}"
