"""FastAPI dependencies."""

from fastapi import Request

from identity_bot.services.bot_service import BotService


def get_bot_service(request: Request) -> BotService:
    """Return the bot service wired during application startup."""
    return request.app.state.bot_service
