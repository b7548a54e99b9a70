# apps/api/turnus/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from turnus.core.config import Settings, settings as default_settings
from turnus.core.exceptions import DomainError
from turnus.db.session import Database
from turnus.services.identity import IdentityProvider, provider_from_settings

# ROUTERLAR
from turnus.api.routes_org import router as org_router
from turnus.api.routes_shift_types import router as shift_types_router
from turnus.api.routes_shifts import router as shifts_router
from turnus.api.routes_swap_requests import router as swap_requests_router
from turnus.api.routes_notes import router as notes_router
from turnus.api.routes_notifications import router as notifications_router

log = logging.getLogger("turnus")


def create_app(cfg: Optional[Settings] = None, identity_provider: Optional[IdentityProvider] = None) -> FastAPI:
    cfg = cfg or default_settings
    logging.basicConfig(
        level=cfg.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=cfg.APP_NAME, debug=cfg.DEBUG)
    app.state.settings = cfg
    app.state.db = Database(cfg.DATABASE_URL, lock_timeout=cfg.DB_LOCK_TIMEOUT_SEC)
    app.state.identity_provider = identity_provider or provider_from_settings(cfg)

    # ---------------- CORS ----------------
    origins = cfg.cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=86400,
    )
    log.info("[cors] allow_origins=%s", origins)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "error": exc.kind})

    @app.on_event("startup")
    def open_store():
        app.state.db.open()
        log.info("[startup] auth_mode=%s", cfg.AUTH_MODE)

    @app.on_event("shutdown")
    def close_store():
        app.state.db.close()

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/_routes")
    def list_routes():
        return sorted({f"{getattr(r, 'methods', {'GET'})} {getattr(r, 'path', '')}" for r in app.router.routes})

    # Router kayıtları
    app.include_router(org_router)
    app.include_router(shift_types_router)
    app.include_router(shifts_router)
    app.include_router(swap_requests_router)
    app.include_router(notes_router)
    app.include_router(notifications_router)
    return app


app = create_app()
