"""User name model."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column

from identity_bot.db.base import Base


class UserName(Base):
    """Full name recorded for a login."""

    __tablename__ = "user_names"

    login: Mapped[str] = mapped_column(String(255), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(160), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(160), nullable=False, default="")
    updated_at: Mapped[Any] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
