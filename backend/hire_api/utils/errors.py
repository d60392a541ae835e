from typing import Dict
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


def error_response(
    message: str,
    field_errors: Dict[str, str],
    code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
) -> HTTPException:
    """Return an HTTPException shaped ``{"message", "field_errors"}``.

    ``field_errors`` maps a form field to a short code such as ``required``,
    ``invalid_email`` or ``not_found`` so the hire page can flag the input.
    Client errors are logged as warnings, server errors as errors.
    """
    level = logging.ERROR if code >= 500 else logging.WARNING
    logger.log(level, "%s %s", message, field_errors)
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)
