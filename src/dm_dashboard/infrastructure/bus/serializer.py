from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from dm_dashboard.domain.entities.record_change import RecordChanged
from dm_dashboard.domain.value_objects.enums import ChangeKind, Collection


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def serialize_change(change: RecordChanged) -> str:
    envelope = {
        "event": change.kind.value,
        "data": {
            "table": change.collection.value,
            "new": change.new,
            "old": change.old,
        },
    }
    return json.dumps(envelope, cls=_Encoder)


def deserialize_change(raw: str | bytes) -> RecordChanged:
    """Parse an envelope; raises ValueError/KeyError on malformed input."""
    envelope = json.loads(raw)
    data = envelope["data"]
    return RecordChanged(
        collection=Collection(data["table"]),
        kind=ChangeKind(envelope["event"]),
        new=data.get("new"),
        old=data.get("old"),
    )
