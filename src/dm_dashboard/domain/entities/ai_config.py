from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly assistant replying to Instagram direct messages. "
    "Keep answers short, polite and on topic."
)
DEFAULT_WELCOME_MESSAGE = "Hi! Thanks for reaching out, we'll get back to you shortly."


@dataclass(frozen=True, slots=True)
class AIConfig:
    """The process-wide auto-response settings (a single row in the store)."""

    auto_respond: bool = False
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    auto_welcome: bool = False
    welcome_message: str = DEFAULT_WELCOME_MESSAGE


DEFAULT_AI_CONFIG = AIConfig()
