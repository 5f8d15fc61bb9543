from __future__ import annotations

from enum import StrEnum


class Collection(StrEnum):
    CONVERSATIONS = "conversations"
    MESSAGES = "messages"


class ChangeKind(StrEnum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class MessageStatus(StrEnum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class StreamName(StrEnum):
    CONVERSATIONS = "conversations"
    MESSAGES = "messages"
    CONFIG = "config"


class StreamState(StrEnum):
    IDLE = "idle"
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
