class StaticSession:
    """Session provider bound to a fixed customer, ``None`` meaning a guest."""

    def __init__(self, customer_id: int | None = None) -> None:
        self._customer_id = customer_id

    def get_customer_id(self) -> int | None:
        return self._customer_id
