from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class FetchError(AppError):
    """A read against the store failed (network, query or mapping)."""

    def __init__(self, stream: str, detail: str = "") -> None:
        self.stream = stream
        super().__init__(detail or f"failed to fetch {stream}")


class NotifyError(AppError):
    """Subscribing to a change channel failed. Never shown to the user."""

    def __init__(self, collection: str, detail: str = "") -> None:
        self.collection = collection
        super().__init__(detail or f"failed to subscribe to {collection}")


class StoreWriteError(AppError):
    pass
