from loguru import logger

from src.domain.interfaces import RevalidateScope


class PageCache:
    """In-process record of rendered storefront paths and their freshness.

    A ``layout`` revalidation marks every tracked path under the prefix stale,
    a ``page`` revalidation only the exact path.
    """

    def __init__(self) -> None:
        self._stale: set[str] = set()
        self._rendered: set[str] = set()

    def mark_fresh(self, path: str) -> None:
        self._rendered.add(path)
        self._stale.discard(path)

    def is_stale(self, path: str) -> bool:
        return path in self._stale

    def revalidate(self, path: str, scope: RevalidateScope = "page") -> None:
        if scope == "layout":
            prefix = path.rstrip("/") + "/"
            affected = {p for p in self._rendered if p == path or p.startswith(prefix)}
            affected.add(path)
        else:
            affected = {path}

        self._stale.update(affected)
        logger.info(f"[PageCache] Revalidated {path} ({scope}): {len(affected)} path(s) stale")
