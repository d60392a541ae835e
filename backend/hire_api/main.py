# backend/hire_api/main.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from . import models  # noqa: F401  register tables on Base.metadata
from .api import api_inquiry, api_pricing
from .core.config import settings
from .core.observability import setup_logging, setup_tracer
from .database import Base, engine
from .pricing import get_catalog

setup_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

# Always use ORJSONResponse for JSON payloads to ensure consistent, fast
# serialization across all endpoints.
app = FastAPI(title="Hire Desk API", default_response_class=ORJSONResponse)
setup_tracer(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors with details and log them for debugging."""
    errors = exc.errors()
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    field_errors = {
        ".".join(str(p) for p in err.get("loc", ())[1:]) or "body": err.get("type", "invalid")
        for err in errors
    }
    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": {
                "message": "Invalid request",
                "field_errors": field_errors,
                "errors": jsonable_encoder(errors),
            }
        },
    )


api_prefix = settings.API_V1_STR  # usually "/api/v1"

app.include_router(api_pricing.router, prefix=f"{api_prefix}", tags=["pricing"])
app.include_router(api_inquiry.router, prefix=f"{api_prefix}", tags=["inquiries"])


@app.on_event("startup")
def load_price_catalog() -> None:
    """Load (and validate) the price catalog once so bad config fails fast."""
    catalog = get_catalog()
    logger.info(
        "Price catalog ready: %d packages, %d features, %d services",
        len(catalog.base_packages),
        len(catalog.features),
        len(catalog.additional_services),
    )


@app.get("/healthz", tags=["health"])
async def healthz():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {"message": "Welcome to Hire Desk API"}
