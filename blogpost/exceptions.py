"""Exceptions raised by the blogpost store layer"""


class StoreError(Exception):
    """A statement could not be executed against the store.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, query: str | None = None):
        super().__init__(message)
        self.query = query


class NoActiveConnectionError(ValueError):
    """A repository method was called outside a connection context"""

    def __init__(self):
        super().__init__(
            "No active connection found. Repository methods must be called within DatabaseManager.connection()."
        )
