import hmac
import logging
from typing import Optional

from fastapi import Cookie, Header, status

from ..core.config import settings
from ..database import get_db  # noqa: F401  re-exported for routers and test overrides
from ..pricing import PriceCatalog, get_catalog
from ..utils import error_response

logger = logging.getLogger(__name__)

ADMIN_COOKIE = "admin-auth"


def get_price_catalog() -> PriceCatalog:
    return get_catalog()


def require_admin(
    x_admin_token: Optional[str] = Header(default=None),
    admin_auth: Optional[str] = Cookie(default=None, alias=ADMIN_COOKIE),
) -> None:
    """Allow the request only when the shared admin password is presented."""
    expected = settings.ADMIN_PASSWORD
    presented = x_admin_token or admin_auth or ""
    if not expected or not presented or not hmac.compare_digest(presented, expected):
        logger.warning("Rejected admin request (token %s)", "present" if presented else "missing")
        raise error_response(
            "Unauthorized",
            {"admin": "unauthorized"},
            status.HTTP_401_UNAUTHORIZED,
        )
