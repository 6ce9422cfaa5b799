"""Rotation status endpoint, including database connectivity."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noob_channel.adapters.persistence.database import get_session
from noob_channel.application.use_cases.bot import NoobChannelBot
from noob_channel.infrastructure.api.dependencies import get_bot

router = APIRouter(tags=["status"])


async def _database_status(session: AsyncSession) -> str:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return f"error: {e}"
    return "connected"


@router.get("/status")
async def rotation_status(
    bot: NoobChannelBot = Depends(get_bot),
    session: AsyncSession = Depends(get_session),
):
    """Committed counters, the channel handed to joiners, and store health."""
    sequence, occupancy, channel = bot.allocator.state.snapshot()
    database = await _database_status(session)
    return {
        "status": "ok" if database == "connected" else "degraded",
        "database": database,
        "bot": bot.name(),
        "channel_sequence": sequence,
        "occupancy": occupancy,
        "channel_cap": bot.allocator.cap,
        "current_channel": {
            "name": channel.name,
            "description": channel.description,
            "id": channel.channel_id,
        },
        "manager_identity": bot.identity.public_key.hex(),
    }
