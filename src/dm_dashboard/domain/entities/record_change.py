from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dm_dashboard.domain.value_objects.enums import ChangeKind, Collection


@dataclass(frozen=True, slots=True)
class RecordChanged:
    """Push notice that a row in a watched collection was created, updated or deleted.

    Only used as a refetch trigger, never applied to state directly.
    """

    collection: Collection
    kind: ChangeKind
    new: dict[str, Any] | None = None
    old: dict[str, Any] | None = None

    @property
    def conversation_ref(self) -> str | None:
        for record in (self.new, self.old):
            if record and record.get("conversation_id") is not None:
                return str(record["conversation_id"])
        return None
