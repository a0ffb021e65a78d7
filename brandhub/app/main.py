from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from .config import settings
from .errors import PageNotFoundError, StoreError
from .services.seo import not_found_seo
import logging
import time
import os
import uuid
from .routers.pages import router as pages_router
from .routers.pages_api import router as pages_api_router
from pathlib import Path


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Brandhub Pages", version="0.1.0")

    static_dir = Path(__file__).resolve().parent / "static"
    templates_dir = Path(__file__).resolve().parent / "templates"

    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    app.state.templates = Jinja2Templates(directory=str(templates_dir))

    @app.middleware("http")
    async def timing_middleware(request: Request, call_next):
        t0 = time.perf_counter()
        req_id = uuid.uuid4().hex[:8]
        response = await call_next(request)
        total = time.perf_counter() - t0
        response.headers["X-Process-Time"] = f"{total:.3f}"
        if request.url.path.startswith("/static/"):
            response.headers.setdefault(
                "Cache-Control", "public, max-age=31536000, immutable"
            )
        if os.environ.get("REQ_TIMING", "0") == "1":
            logger.info(
                "req_timing id=%s path=%s status=%s total_ms=%.1f",
                req_id,
                request.url.path,
                response.status_code,
                total * 1000,
            )
        return response

    @app.exception_handler(PageNotFoundError)
    async def page_not_found(request: Request, exc: PageNotFoundError):
        templates = request.app.state.templates
        locale = exc.locale if exc.locale in settings.SUPPORTED_LOCALES else settings.DEFAULT_LOCALE
        return templates.TemplateResponse(
            request,
            "404.html",
            {
                "request": request,
                "locale": locale,
                "locales": settings.SUPPORTED_LOCALES,
                "meta": not_found_seo(),
            },
            status_code=404,
        )

    @app.exception_handler(StoreError)
    async def store_unavailable(request: Request, exc: StoreError):
        logger.error("store_error path=%s op=%s", request.url.path, exc.operation)
        if request.url.path.startswith("/api/"):
            return JSONResponse({"error": "Pages store unavailable"}, status_code=500)
        templates = request.app.state.templates
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "request": request,
                "locale": settings.DEFAULT_LOCALE,
                "locales": settings.SUPPORTED_LOCALES,
            },
            status_code=503,
        )

    @app.get("/health", include_in_schema=False)
    def healthcheck():
        return {"status": "ok"}

    # api routes before the catch-all page routes
    app.include_router(pages_api_router, prefix="/api", tags=["pages"])
    app.include_router(pages_router)

    return app


app = create_app()
