from typing import Literal, Protocol

CacheMode = Literal["default", "no-store"]
RevalidateScope = Literal["page", "layout"]


class IGraphQLClient(Protocol):
    def execute(
        self,
        document: str,
        variables: dict | None = None,
        customer_id: int | None = None,
        cache: CacheMode = "default",
    ) -> dict: ...


class ISessionProvider(Protocol):
    def get_customer_id(self) -> int | None:
        """Return the logged-in customer's id, or ``None`` for a guest."""
        ...


class IPageCache(Protocol):
    def revalidate(self, path: str, scope: RevalidateScope = "page") -> None: ...
