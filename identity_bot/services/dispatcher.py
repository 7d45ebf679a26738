"""Routes inbound messages to the handler registered for the conversation's state."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from identity_bot.core.errors import ConfigurationError
from identity_bot.interfaces.messaging_provider import MessagingProvider
from identity_bot.schemas.dialogue import DialogueState
from identity_bot.schemas.inbound import InboundMessage
from identity_bot.services.command_parser import Command, CommandParser
from identity_bot.services.conversation_locks import ConversationLocks
from identity_bot.services.dialogue_store import DialogueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of one handler: where the dialogue goes and what to send."""

    next_state: DialogueState | None = None
    prompts: tuple[str, ...] = ()
    reset: bool = False

    @classmethod
    def stay(cls, *prompts: str) -> Transition:
        return cls(prompts=prompts)

    @classmethod
    def goto(cls, state: DialogueState, *prompts: str) -> Transition:
        return cls(next_state=state, prompts=prompts)

    @classmethod
    def reset_dialogue(cls, *prompts: str) -> Transition:
        return cls(prompts=prompts, reset=True)


Handler = Callable[[InboundMessage], Awaitable[Transition]]
CommandHandler = Callable[[InboundMessage, Command], Awaitable[Transition]]


@dataclass(frozen=True, slots=True)
class Route:
    """Handler bound to a state; command routes receive the parsed command."""

    handler: Handler | CommandHandler
    expects_command: bool = False


class Dispatcher:
    """Load state, run the state's handler, persist the outcome, then send prompts.

    Messages of one conversation are processed strictly one at a time.
    """

    def __init__(
        self,
        *,
        dialogue_store: DialogueStore[DialogueState],
        messaging_provider: MessagingProvider,
        routes: Mapping[DialogueState, Route],
        fallback: Handler,
        command_parser: CommandParser | None = None,
        locks: ConversationLocks | None = None,
    ) -> None:
        missing = [state.value for state in DialogueState if state not in routes]
        if missing:
            raise ConfigurationError(f"No handler registered for states: {', '.join(missing)}.")
        self.dialogue_store = dialogue_store
        self.messaging_provider = messaging_provider
        self.routes = dict(routes)
        self.fallback = fallback
        self.command_parser = command_parser or CommandParser()
        self.locks = locks or ConversationLocks()

    async def dispatch(self, message: InboundMessage) -> list[str]:
        """Process one inbound message and return the prompts that were sent.

        Cancelling the caller does not release the conversation before the
        in-flight processing has finished.
        """
        async with self.locks.hold(message.conversation_id):
            processing = asyncio.create_task(self._process(message))
            try:
                return await asyncio.shield(processing)
            except asyncio.CancelledError:
                await self._settle(processing)
                raise

    async def _process(self, message: InboundMessage) -> list[str]:
        conversation_id = message.conversation_id
        state = await self.dialogue_store.load(conversation_id)
        logger.debug("Chat %s is in state %s", conversation_id, state.value)

        transition = await self._run_handler(state=state, message=message)
        await self._persist(conversation_id=conversation_id, state=state, transition=transition)

        for prompt in transition.prompts:
            await self.messaging_provider.send_message(chat_id=conversation_id, text=prompt)
        return list(transition.prompts)

    @staticmethod
    async def _settle(processing: asyncio.Task[list[str]]) -> None:
        while not processing.done():
            try:
                await asyncio.wait({processing})
            except asyncio.CancelledError:
                continue
        if not processing.cancelled() and processing.exception() is not None:
            logger.warning("Processing of a cancelled message failed", exc_info=processing.exception())

    async def _run_handler(self, *, state: DialogueState, message: InboundMessage) -> Transition:
        route = self.routes[state]
        if not route.expects_command:
            return await route.handler(message)

        command = self.command_parser.parse(message.text)
        if command is None:
            return await self.fallback(message)
        return await route.handler(message, command)

    async def _persist(self, *, conversation_id: int, state: DialogueState, transition: Transition) -> None:
        if transition.reset:
            await self.dialogue_store.remove(conversation_id)
            return
        if transition.next_state is None or transition.next_state == state:
            return
        await self.dialogue_store.update(conversation_id, transition.next_state)
        logger.debug("Chat %s moved %s -> %s", conversation_id, state.value, transition.next_state.value)
