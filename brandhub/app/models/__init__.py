from .page import Base, Page, PAGE_STATUSES

__all__ = [
    "Base",
    "Page",
    "PAGE_STATUSES",
]
