from __future__ import annotations

from typing import Any


class PageError(Exception):
    """Base class for page resolution failures."""


class PageNotFoundError(PageError):
    def __init__(self, slug: str, locale: str | None = None) -> None:
        self.slug = slug
        self.locale = locale
        super().__init__(f"page not found: slug={slug!r} locale={locale!r}")


class StoreError(PageError):
    """The pages store could not be queried.

    Distinct from a missing page: callers must not treat it as "use the
    fallback" or as a 404.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"pages store failed during {operation}{detail}")


class MalformedContentError(PageError):
    """A stored content field has a shape the converter does not know.

    Recorded at the store boundary; the value is still rendered verbatim.
    """

    def __init__(self, field: str, raw: Any) -> None:
        self.field = field
        self.raw = raw
        kind = (raw.get("type") or raw.get("kind")) if isinstance(raw, dict) else type(raw).__name__
        super().__init__(f"unrecognized content shape in {field}: {kind!r}")


class InvalidRevalidationRequest(PageError):
    pass
