from __future__ import annotations

from typing import Any, Callable, Coroutine, Protocol

from dm_dashboard.domain.entities.record_change import RecordChanged
from dm_dashboard.domain.value_objects.enums import Collection

OnChangeCallback = Callable[[RecordChanged], Coroutine[Any, Any, None]]


class SubscriptionHandle(Protocol):
    collection: Collection

    @property
    def active(self) -> bool: ...


class ChangeChannel(Protocol):
    async def subscribe(
        self, collection: Collection, on_event: OnChangeCallback,
    ) -> SubscriptionHandle:
        """Start delivering change events for ``collection``.

        Raises NotifyError if the subscription cannot be established.
        """
        ...

    async def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Stop delivery. Safe to call more than once."""
        ...
