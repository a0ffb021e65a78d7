import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from ..config import settings
from ..dependencies import get_page_service, resolve_locale
from ..errors import PageNotFoundError
from ..schemas.page import PageRecord
from ..services.legal_fallbacks import get_legal_fallback, is_legal_page
from ..services.page_renderer import RenderMode, build_page_view, select_mode
from ..services.page_service import PageService
from ..services.seo import generate_page_seo, legal_fallback_seo, legal_page_seo, structured_data_script


logger = logging.getLogger(__name__)
router = APIRouter()

HOME_SLUG = "home"


def _base_context(request: Request, locale: str, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    context = {
        "request": request,
        "locale": locale,
        "locales": settings.SUPPORTED_LOCALES,
        "site_url": settings.SITE_URL,
    }
    if extra:
        context.update(extra)
    return context


def _render_dynamic(request: Request, page: PageRecord, mode: RenderMode, locale: str):
    if is_legal_page(page.slug):
        meta = legal_page_seo(page, settings.SITE_URL)
    else:
        meta = generate_page_seo(page, settings.SITE_URL)
    context = {
        "view": build_page_view(page, mode),
        "meta": meta,
        "structured_data": structured_data_script(page, settings.SITE_URL),
    }
    return request.app.state.templates.TemplateResponse(
        request, "dynamic_page.html", _base_context(request, locale, context)
    )


def _render_home(request: Request, locale: str, pages: PageService):
    templates = request.app.state.templates
    page = pages.get_page_by_slug(HOME_SLUG, locale)
    if page is not None:
        return _render_dynamic(request, page, RenderMode.DYNAMIC_CONDITIONAL_CHROME, locale)
    return templates.TemplateResponse(request, "home.html", _base_context(request, locale))


def _render_slug(request: Request, slug: str, locale: str, pages: PageService):
    templates = request.app.state.templates
    page = pages.get_page_by_slug(slug, locale)
    mode = select_mode(page, slug)
    logger.debug("page_resolved slug=%s locale=%s mode=%s", slug, locale, mode.value)

    if mode in (RenderMode.DYNAMIC_FIXED_CHROME, RenderMode.DYNAMIC_CONDITIONAL_CHROME):
        return _render_dynamic(request, page, mode, locale)
    if mode == RenderMode.STATIC_FALLBACK:
        fallback = get_legal_fallback(slug)
        return templates.TemplateResponse(
            request,
            fallback.template,
            _base_context(request, locale, {"fallback": fallback, "meta": legal_fallback_seo(fallback)}),
        )
    raise PageNotFoundError(slug, locale)


@router.get("/")
def index(request: Request, pages: PageService = Depends(get_page_service)):
    return _render_home(request, settings.DEFAULT_LOCALE, pages)


@router.get("/{slug}")
def dynamic_page(slug: str, request: Request, pages: PageService = Depends(get_page_service)):
    # "/en" is the English home, not a page called "en"
    locale = resolve_locale(slug)
    if locale is not None:
        return _render_home(request, locale, pages)
    return _render_slug(request, slug, settings.DEFAULT_LOCALE, pages)


@router.get("/{locale}/{slug}")
def localized_page(locale: str, slug: str, request: Request, pages: PageService = Depends(get_page_service)):
    resolved = resolve_locale(locale)
    if resolved is None:
        raise PageNotFoundError(slug, locale)
    return _render_slug(request, slug, resolved, pages)
