"""Identification flow: one handler per dialogue state."""

from __future__ import annotations

import logging

from identity_bot.core.errors import ValidationError
from identity_bot.schemas.dialogue import DialogueState
from identity_bot.schemas.inbound import InboundMessage
from identity_bot.schemas.profile import FullName
from identity_bot.services.command_parser import Command
from identity_bot.services.dispatcher import Route, Transition
from identity_bot.services.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

SAY_HELLO = "Say hello to start the dialogue."
REQUEST_LOGIN = "Please send me your username."
REQUEST_FULL_NAME = "Please send me your full name (first and last name)."
REPEAT_FULL_NAME = "Please send me your full name."
INVALID_FULL_NAME = "Invalid full name."
IDENTIFIED = "You are identified. Use /get to get your user information and /reset to flush it."
RESET_DONE = "Your username was reset. Write any message to start the dialogue again."
INVALID_COMMAND = "Please, send /get or /reset."


class ConversationFlow:
    """Computes transitions from message content and stored profile data.

    Handlers only write profile data; the dispatcher persists the returned
    state before any prompt is sent.
    """

    def __init__(self, profiles: ProfileRepository) -> None:
        self.profiles = profiles

    def routes(self) -> dict[DialogueState, Route]:
        """State to handler table."""
        return {
            DialogueState.START: Route(self.start),
            DialogueState.REQUEST_LOGIN: Route(self.request_login),
            DialogueState.REQUEST_FULL_NAME: Route(self.request_full_name),
            DialogueState.IDENTIFIED_USER: Route(self.identified_user, expects_command=True),
        }

    async def start(self, message: InboundMessage) -> Transition:
        if message.text is None:
            return Transition.stay(SAY_HELLO)

        conversation_id = message.conversation_id
        if message.chat_username is not None:
            login = message.chat_username
            await self.profiles.record_login_for_conversation(conversation_id, login)
            logger.info("User @%s has logged in", login)
        else:
            stored_login = await self.profiles.get_login_for_conversation(conversation_id)
            if stored_login is None:
                return self._goto_request_login()
            login = stored_login

        return await self._evaluate_name_step(message=message, login=login)

    async def request_login(self, message: InboundMessage) -> Transition:
        if message.text is None:
            return Transition.stay(REQUEST_LOGIN)

        login = message.text
        await self.profiles.record_login_for_conversation(message.conversation_id, login)
        logger.info("User @%s has sent their username", login)
        return await self._evaluate_name_step(message=message, login=login)

    async def request_full_name(self, message: InboundMessage) -> Transition:
        if message.text is None:
            return Transition.stay(REPEAT_FULL_NAME)

        try:
            full_name = FullName.parse(message.text, self.profiles.name_policy)
        except ValidationError:
            return Transition.stay(INVALID_FULL_NAME)

        login = await self.profiles.get_login_for_conversation(message.conversation_id)
        if login is None:
            return self._goto_request_login()

        await self.profiles.record_name(login, full_name)
        logger.info("User @%s has identified themselves as %s", login, full_name.display())
        return self._goto_identified_user()

    async def identified_user(self, message: InboundMessage, command: Command) -> Transition:
        if command is Command.RESET:
            logger.info("Chat %s reset its dialogue", message.conversation_id)
            return Transition.reset_dialogue(RESET_DONE)

        profile = await self.profiles.get_profile(message.conversation_id)
        if profile is None:
            return self._goto_request_login()

        reply = f"Here is your username: {profile.login}."
        if profile.name is not None:
            reply += f" Your full name: {profile.name.display()}."
        return Transition.stay(reply)

    async def invalid_command(self, message: InboundMessage) -> Transition:
        del message
        return Transition.stay(INVALID_COMMAND)

    async def _evaluate_name_step(self, *, message: InboundMessage, login: str) -> Transition:
        inline_name = message.structured_name()
        if inline_name is not None:
            await self.profiles.record_name(login, inline_name)
            logger.info("User @%s has identified themselves as %s", login, inline_name.display())
            return self._goto_identified_user()

        if await self.profiles.get_name(login) is not None:
            return self._goto_identified_user()
        return self._goto_request_full_name()

    def _goto_request_login(self) -> Transition:
        logger.debug("goto RequestLogin")
        return Transition.goto(DialogueState.REQUEST_LOGIN, REQUEST_LOGIN)

    def _goto_request_full_name(self) -> Transition:
        logger.debug("goto RequestFullName")
        return Transition.goto(DialogueState.REQUEST_FULL_NAME, REQUEST_FULL_NAME)

    def _goto_identified_user(self) -> Transition:
        logger.debug("goto IdentifiedUser")
        return Transition.goto(DialogueState.IDENTIFIED_USER, IDENTIFIED)
