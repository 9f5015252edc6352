from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from refollow.analysis.gate import CreatorRequirement, resolve_creators
from refollow.config import Settings, get_settings
from refollow.errors import GateDenied, StartupError, ValidationError
from refollow.logging import configure_logging, get_logger
from refollow.service import RefollowService, parse_fid
from refollow.storage.cache import COOKIE_NAME, parse_cookie_timestamp
from refollow.upstream.client import NeynarClient, Upstream
from refollow.upstream.profiles import ProfileHydrator

LOGGER = get_logger(__name__)

GENERIC_ERROR = "Failed to build refollow data"


def _resolve_requirement(client: Upstream, settings: Settings) -> CreatorRequirement:
    if not settings.required_creators:
        return CreatorRequirement()
    resolution = resolve_creators(ProfileHydrator(client), settings.required_creators)
    if resolution.ok:
        return resolution.requirement
    if not settings.creator_gate_fail_open:
        raise StartupError(f"Could not resolve required creators: {resolution.error}")
    LOGGER.warning("Creator gate disabled: %s", resolution.error)
    return CreatorRequirement()


def create_app(
    settings: Optional[Settings] = None,
    *,
    client: Optional[Upstream] = None,
    service: Optional[RefollowService] = None,
) -> FastAPI:
    """Build the API. ``client``/``service`` are injectable for tests."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: Optional[NeynarClient] = None
        if service is not None:
            app.state.service = service
        else:
            upstream = client
            if upstream is None:
                owned = upstream = NeynarClient(settings=settings)
            requirement = await run_in_threadpool(_resolve_requirement, upstream, settings)
            app.state.service = RefollowService.from_client(
                upstream,
                settings=settings,
                requirement=requirement,
            )
        LOGGER.info("Refollow backend ready (environment=%s)", settings.environment)
        try:
            yield
        finally:
            if owned is not None:
                owned.close()

    app = FastAPI(title="Refollow", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def health() -> str:
        return "Refollow backend is running"

    @app.get("/refollow")
    def refollow(request: Request, fid: Optional[str] = None, refresh: Optional[str] = None) -> JSONResponse:
        svc: RefollowService = request.app.state.service
        try:
            subject = parse_fid(fid)
            outcome = svc.refollow(
                subject,
                force_refresh=refresh == "true",
                cookie_ts=parse_cookie_timestamp(request.cookies.get(COOKIE_NAME)),
            )
        except ValidationError as exc:
            return JSONResponse({"error": str(exc)}, status_code=400)
        except GateDenied as exc:
            LOGGER.info("Gate denied fid %s", fid)
            return JSONResponse({"error": str(exc)}, status_code=403)
        except Exception:  # noqa: BLE001
            LOGGER.exception("refollow error for fid %s", fid)
            return JSONResponse({"error": GENERIC_ERROR}, status_code=500)

        response = JSONResponse(outcome.result.to_payload())
        if not outcome.from_cache:
            response.set_cookie(
                COOKIE_NAME,
                str(outcome.computed_at),
                max_age=settings.cache_ttl_seconds,
                samesite="none",
                secure=settings.is_production,
            )
        return response

    @app.post("/logout")
    def logout() -> JSONResponse:
        response = JSONResponse({"ok": True})
        response.delete_cookie(COOKIE_NAME, samesite="none", secure=settings.is_production)
        return response

    return app


__all__ = ["create_app"]
