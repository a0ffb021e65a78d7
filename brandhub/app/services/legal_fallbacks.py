from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class LegalFallback:
    slug: str
    title: str
    template: str

    @property
    def description(self) -> str:
        return f"{self.title} - Our legal policies and terms."

    @property
    def path(self) -> str:
        return f"/{self.slug}"


_LEGAL_FALLBACKS: Dict[str, LegalFallback] = {
    "privacy-policy": LegalFallback("privacy-policy", "Privacy Policy", "legal/privacy_policy.html"),
    "terms-of-service": LegalFallback("terms-of-service", "Terms of Service", "legal/terms_of_service.html"),
    "cookie-policy": LegalFallback("cookie-policy", "Cookie Policy", "legal/cookie_policy.html"),
}

LEGAL_SLUGS: Tuple[str, ...] = tuple(_LEGAL_FALLBACKS)


def is_legal_page(slug: str) -> bool:
    return slug in _LEGAL_FALLBACKS


def get_legal_fallback(slug: str) -> Optional[LegalFallback]:
    return _LEGAL_FALLBACKS.get(slug)


def legal_paths() -> list[str]:
    return [fb.path for fb in _LEGAL_FALLBACKS.values()]
