from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Integer, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from dm_dashboard.infrastructure.db.base import Base

SINGLETON_ID = 1


class AIConfigModel(Base):
    __tablename__ = "ai_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    auto_respond: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false"),
    )
    system_prompt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # older rows predate the welcome feature
    auto_welcome: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    welcome_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
        onupdate=text("now()"),
    )

    __table_args__ = (
        CheckConstraint(f"id = {SINGLETON_ID}", name="ck_ai_config_singleton"),
    )
