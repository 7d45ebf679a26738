"""SQLAlchemy-backed store gateway."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from identity_bot.core.errors import StoreError
from identity_bot.interfaces.store_gateway import StoreGateway
from identity_bot.models.chat_login import ChatLogin
from identity_bot.models.dialogue_snapshot import DialogueSnapshot
from identity_bot.models.user_name import UserName

logger = logging.getLogger(__name__)


class SqlStoreGateway(StoreGateway):
    """Runs each store procedure in its own short session."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self.session_factory() as db:
                try:
                    yield db
                    db.commit()
                except Exception:
                    db.rollback()
                    raise
        except SQLAlchemyError as exc:
            logger.error("Store operation %s failed: %s", operation, exc)
            raise StoreError(f"Store operation '{operation}' failed.") from exc

    def ping(self) -> None:
        with self._session("ping") as db:
            db.execute(text("SELECT 1"))

    def chat_update(self, chat_id: int, login: str) -> None:
        with self._session("chat_update") as db:
            chat = db.get(ChatLogin, chat_id)
            if chat is None:
                db.add(ChatLogin(chat_id=chat_id, login=login))
                try:
                    db.flush()
                except IntegrityError:
                    # Another session inserted the row first.
                    db.rollback()
                    chat = db.get(ChatLogin, chat_id)
                    if chat is None:
                        raise
                    chat.login = login
            elif chat.login != login:
                chat.login = login

    def login_get(self, chat_id: int) -> str | None:
        with self._session("login_get") as db:
            query = select(ChatLogin.login).where(ChatLogin.chat_id == chat_id)
            return db.execute(query).scalar_one_or_none()

    def name_update(self, login: str, first: str, last: str) -> None:
        with self._session("name_update") as db:
            user_name = db.get(UserName, login)
            if user_name is None:
                db.add(UserName(login=login, first_name=first, last_name=last))
                try:
                    db.flush()
                except IntegrityError:
                    db.rollback()
                    user_name = db.get(UserName, login)
                    if user_name is None:
                        raise
                    user_name.first_name = first
                    user_name.last_name = last
            elif (user_name.first_name, user_name.last_name) != (first, last):
                user_name.first_name = first
                user_name.last_name = last

    def name_get(self, login: str) -> str | None:
        with self._session("name_get") as db:
            user_name = db.get(UserName, login)
            if user_name is None:
                return None
            return f"{user_name.first_name} {user_name.last_name}".strip()

    def dialogue_append(self, chat_id: int, data: str) -> None:
        with self._session("dialogue_append") as db:
            db.add(DialogueSnapshot(chat_id=chat_id, data=data))

    def dialogue_latest(self, chat_id: int) -> str | None:
        with self._session("dialogue_latest") as db:
            query = (
                select(DialogueSnapshot.data)
                .where(DialogueSnapshot.chat_id == chat_id)
                .order_by(DialogueSnapshot.id.desc())
                .limit(1)
            )
            return db.execute(query).scalars().first()

    def dialogue_delete(self, chat_id: int) -> None:
        with self._session("dialogue_delete") as db:
            db.execute(delete(DialogueSnapshot).where(DialogueSnapshot.chat_id == chat_id))
