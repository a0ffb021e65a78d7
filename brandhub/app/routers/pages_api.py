from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from ..dependencies import get_page_service, get_revalidation_service
from ..errors import InvalidRevalidationRequest, StoreError
from ..schemas.page import RevalidateRequest, RevalidateResponse
from ..services.page_service import PageService
from ..services.revalidation import REVALIDATION_TYPES, RevalidationResult, RevalidationService


router = APIRouter()


def _error(message: str, status_code: int, details: Optional[str] = None) -> JSONResponse:
    body = {"error": message}
    if details:
        body["details"] = details
    return JSONResponse(body, status_code=status_code)


def _revalidate(service: RevalidationService, kind: Optional[str], slug: Optional[str], path: Optional[str] = None):
    try:
        result = service.revalidate(kind, slug=slug, path=path)
    except InvalidRevalidationRequest:
        return _error("Invalid revalidation type", status.HTTP_400_BAD_REQUEST)
    except StoreError as exc:
        return _error("Revalidation failed", status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    return _response(result)


def _response(result: RevalidationResult) -> RevalidateResponse:
    return RevalidateResponse(
        revalidated=True,
        paths=result.paths,
        message=result.message,
        timestamp=result.timestamp,
    )


@router.get("/dynamic-pages")
def list_pages(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    slug: Optional[str] = Query(default=None),
    page_id: Optional[int] = Query(default=None, alias="id"),
    pages: PageService = Depends(get_page_service),
):
    try:
        if page_id is not None:
            page = pages.get_page_by_id(page_id)
        elif slug:
            page = pages.get_page_by_slug(slug, None)
        else:
            return [p.model_dump(mode="json") for p in pages.get_all_pages(status_filter)]
    except StoreError:
        return _error("Failed to fetch pages", status.HTTP_500_INTERNAL_SERVER_ERROR)
    if page is None:
        return _error("Page not found", status.HTTP_404_NOT_FOUND)
    return page.model_dump(mode="json")


@router.post("/dynamic-pages")
def revalidate_pages(
    payload: Optional[RevalidateRequest] = Body(default=None),
    service: RevalidationService = Depends(get_revalidation_service),
):
    payload = payload or RevalidateRequest()
    # unknown types revalidate everything here; /revalidate rejects them
    kind = payload.type if payload.type in REVALIDATION_TYPES else "all"
    if kind == "single" and not (payload.slug or payload.path):
        return _response(RevalidationResult(paths=[]))
    return _revalidate(service, kind, payload.slug, payload.path)


@router.post("/revalidate")
def revalidate(
    payload: RevalidateRequest,
    service: RevalidationService = Depends(get_revalidation_service),
):
    return _revalidate(service, payload.type, payload.slug)
