"""Dialogue snapshot model."""

from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger, Index, Integer, TIMESTAMP, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from identity_bot.db.base import Base


class DialogueSnapshot(Base):
    """One serialized dialogue state; the highest id per chat is the current one."""

    __tablename__ = "dialogue_snapshots"
    __table_args__ = (Index("ix_dialogue_snapshots_chat_id_id", "chat_id", "id"),)

    # SQLite only autoincrements INTEGER primary keys.
    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    chat_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[Any] = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
