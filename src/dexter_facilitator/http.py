"""FastAPI transport for the facilitator."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from .config import FacilitatorSettings, load_settings
from .constants import LANDING_PAGE_URL, SERVICE_NAME
from .facilitator import UpstreamFacilitatorBackend
from .orchestrator import Facilitator
from .signers import NetworkRegistry

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 1024 * 1024


class RequestTooLarge(ValueError):
    pass


async def read_json(request: Request, limit: int = MAX_BODY_BYTES):
    """Read and decode a JSON body, counting bytes as they arrive.

    Chunked uploads carry no ``Content-Length``, so the limit is enforced on
    the stream itself.
    """
    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > limit:
            raise RequestTooLarge("Request body too large")
    return json.loads(received)


def error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


def _accept_quality(accept: str, media_types: tuple) -> float:
    best = 0.0
    for part in accept.split(","):
        media, _, params = part.strip().partition(";")
        if media.strip().lower() not in media_types:
            continue
        quality = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        best = max(best, quality)
    return best


def prefers_html(accept: Optional[str]) -> bool:
    if not accept:
        return False
    html = _accept_quality(accept, ("text/html",))
    json_quality = _accept_quality(accept, ("application/json", "*/*", "application/*"))
    return html > json_quality


def build_facilitator(
    settings: FacilitatorSettings,
    registry: Optional[NetworkRegistry] = None,
    backend=None,
) -> Facilitator:
    if registry is None:
        registry = NetworkRegistry(settings.networks, settings.facilitator_private_key)
    if backend is None:
        backend = UpstreamFacilitatorBackend(
            settings.upstream_facilitator_url,
            timeout=settings.upstream_timeout_seconds,
        )
    return Facilitator(registry, backend, fee_payer=settings.fee_payer_address or None)


def create_app(
    settings: Optional[FacilitatorSettings] = None,
    facilitator: Optional[Facilitator] = None,
) -> FastAPI:
    """Build the facilitator app.

    Raises ``ConfigurationError`` if the configured networks are not all known.
    """
    if facilitator is None:
        settings = settings or load_settings()
        facilitator = build_facilitator(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("facilitator ready for networks %s", ", ".join(facilitator.registry.networks))
        yield
        aclose = getattr(facilitator.backend, "aclose", None)
        if aclose is not None:
            await aclose()

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)

    origins = settings.origins if settings is not None else []
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"error": "Request body too large"})
        return await call_next(request)

    @app.exception_handler(Exception)
    async def unhandled_error(_request: Request, exc: Exception):
        logger.error("Unhandled facilitator error", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/")
    async def root(request: Request):
        if prefers_html(request.headers.get("accept")):
            return RedirectResponse(LANDING_PAGE_URL, status_code=302)
        return {
            "service": SERVICE_NAME,
            "status": "ok",
            "networks": facilitator.registry.networks,
        }

    @app.get("/health")
    @app.get("/healthz")
    async def health():
        return facilitator.health()

    @app.get("/supported")
    async def supported():
        try:
            return await facilitator.supported()
        except Exception as exc:
            logger.exception("failed to build supported network list")
            return JSONResponse(status_code=500, content={"error": error_message(exc)})

    @app.post("/verify")
    async def verify(request: Request):
        try:
            body = await read_json(request)
            return await facilitator.verify(body)
        except RequestTooLarge as exc:
            return JSONResponse(status_code=413, content={"error": error_message(exc)})
        except Exception as exc:
            logger.exception("verify failed")
            return JSONResponse(status_code=400, content={"error": error_message(exc)})

    @app.post("/settle")
    async def settle(request: Request):
        try:
            body = await read_json(request)
            return await facilitator.settle(body)
        except RequestTooLarge as exc:
            return JSONResponse(status_code=413, content={"error": error_message(exc)})
        except Exception as exc:
            logger.exception("settle failed")
            return JSONResponse(status_code=400, content={"error": error_message(exc)})

    return app
