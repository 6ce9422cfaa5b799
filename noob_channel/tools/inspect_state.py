"""Print the persisted rotation state.

Usage:
    python -m noob_channel.tools.inspect_state
    python -m noob_channel.tools.inspect_state --database-url sqlite+aiosqlite:///cmix/noob_channel.db
    python -m noob_channel.tools.inspect_state --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from sqlalchemy.ext.asyncio import async_sessionmaker

from noob_channel.adapters.crypto.rsa_channel_adapter import RsaChannelCrypto
from noob_channel.adapters.persistence.database import build_engine
from noob_channel.adapters.persistence.repositories import SqlKeyValueStore
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.config import settings
from noob_channel.domain.exceptions import MalformedChannelError, NoobChannelError
from noob_channel.domain.value_objects.enums import StateKey

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def read_state(store: KeyValueStore) -> dict:
    """Collect counters and the current channel summary from ``store``."""
    crypto = RsaChannelCrypto()
    report: dict = {}

    for key in (StateKey.CHANNEL_COUNT, StateKey.IN_CURRENT_CHANNEL):
        obj = await store.get(key.value)
        if obj is None:
            report[key.value] = None
            continue
        try:
            report[key.value] = obj.as_uint64()
        except ValueError:
            report[key.value] = f"malformed ({len(obj.data)} bytes)"

    obj = await store.get(StateKey.CURRENT_CHANNEL.value)
    if obj is None:
        report[StateKey.CURRENT_CHANNEL.value] = None
    else:
        try:
            channel = crypto.unmarshal(obj.data)
            report[StateKey.CURRENT_CHANNEL.value] = {
                "name": channel.name,
                "id": channel.channel_id,
                "stored_at": obj.timestamp.isoformat(),
            }
        except MalformedChannelError as e:
            report[StateKey.CURRENT_CHANNEL.value] = f"malformed: {e}"

    report[StateKey.MANAGER_IDENTITY.value] = (
        await store.get(StateKey.MANAGER_IDENTITY.value) is not None
    )
    return report


async def inspect(database_url: str) -> dict:
    engine = build_engine(database_url)
    try:
        store = SqlKeyValueStore(async_sessionmaker(engine, expire_on_commit=False))
        return await read_state(store)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show the persisted noob channel rotation state")
    parser.add_argument("--database-url", default=settings.database_url)
    parser.add_argument("--json", action="store_true", help="print machine-readable JSON")
    args = parser.parse_args(argv)

    try:
        report = asyncio.run(inspect(args.database_url))
    except NoobChannelError as e:
        logger.error("Could not read state: %s", e)
        return 1

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        for key, value in report.items():
            print(f"{key:>18}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
