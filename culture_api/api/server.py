from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional, Union
from uuid import uuid4

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from langchain_core.language_models import BaseChatModel

from ..application.services.crop_calendar_service import CropCalendarService
from ..application.services.location_climate_service import LocationClimateService
from ..domain.errors import CultureApiError, InternalError, ValidationError
from ..infra.config import AppConfig, get_config
from ..infra.geocode_service import AddressGeocoder
from ..infra.llm import get_chat_model
from ..infra.llm_extract import StructuredJsonExtractor
from ..observability.logging_utils import (
    init_logging,
    log_error_event,
    reset_trace_id,
    set_trace_id,
)
from ..schemas.models import (
    CropQuery,
    CropResult,
    ErrorResponse,
    ExtractionWarning,
    LocationQuery,
    LocationResult,
)

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


_REQUIRED_FIELDS = {"/api/culture": "culture", "/api/location": "address"}


def _invalid_field(path: str, exc: RequestValidationError) -> str:
    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if part != "body"]
        if loc and isinstance(loc[0], str):
            return loc[0]
    return _REQUIRED_FIELDS.get(path, "body")


def _internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error at %s", request.url.path)
    log_error_event("unhandled_error", path=request.url.path, error=str(exc))
    error = InternalError.from_exception(exc)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def create_app(
    config: Optional[AppConfig] = None,
    *,
    chat_model: Optional[BaseChatModel] = None,
    http_client: Optional[httpx.Client] = None,
) -> FastAPI:
    """
    Build the API with its collaborators wired in.

    ``chat_model`` and ``http_client`` default to a ChatOpenAI model and a fresh
    httpx client; tests pass fakes instead.
    """
    cfg = config or get_config()
    init_logging(log_path=cfg.log_path)

    owns_client = http_client is None
    client = http_client or httpx.Client(trust_env=False)
    extractor = StructuredJsonExtractor(chat_model or get_chat_model(cfg))

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info("Culture-date-api ready, model=%s", cfg.openai_model)
        yield
        if owns_client:
            client.close()

    app = FastAPI(title="Culture Date API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.crop_calendar = CropCalendarService(
        extractor, max_tokens=cfg.crop_max_tokens
    )
    app.state.location_climate = LocationClimateService(
        AddressGeocoder(client, cfg.geocode_url),
        extractor,
        max_tokens=cfg.climate_max_tokens,
    )

    @app.middleware("http")
    async def _trace_requests(request: Request, call_next):
        trace_id = uuid4().hex
        token = set_trace_id(trace_id)
        try:
            response = await call_next(request)
        except Exception as exc:
            # 在 trace id 仍有效时生成 500，日志和响应头才能对上
            response = _internal_error_response(request, exc)
        finally:
            reset_trace_id(token)
        response.headers["X-Trace-Id"] = trace_id
        return response

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError.for_field(_invalid_field(request.url.path, exc))
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(CultureApiError)
    async def _api_error_handler(_: Request, exc: CultureApiError):
        return JSONResponse(
            status_code=exc.status_code, content=jsonable_encoder(exc.to_payload())
        )

    @app.get("/health")
    def health():
        return {"status": "ok", "model": cfg.openai_model}

    @app.post(
        "/api/culture",
        response_model=Union[CropResult, ExtractionWarning],
        responses=_ERROR_RESPONSES,
    )
    def crop_calendar(query: CropQuery, request: Request):
        return request.app.state.crop_calendar.handle(query)

    @app.post(
        "/api/location",
        response_model=Union[LocationResult, ExtractionWarning],
        responses=_ERROR_RESPONSES,
    )
    def location_climate(query: LocationQuery, request: Request):
        return request.app.state.location_climate.handle(query)

    return app
