"""SQLAlchemy key-value store implementation."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from noob_channel.adapters.persistence.models import VersionedObjectModel
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.domain.exceptions import PersistenceError
from noob_channel.domain.value_objects.versioned_object import VersionedObject

logger = logging.getLogger(__name__)


def _to_domain(m: VersionedObjectModel) -> VersionedObject:
    return VersionedObject(data=bytes(m.data), version=m.version, timestamp=m.timestamp)


class SqlKeyValueStore(KeyValueStore):
    """One short transaction per call, committed before returning."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: str) -> VersionedObject | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(VersionedObjectModel).where(VersionedObjectModel.key == key)
                )
                m = result.scalar_one_or_none()
                return _to_domain(m) if m else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"failed to read {key}") from e

    async def set(self, key: str, obj: VersionedObject) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.merge(
                        VersionedObjectModel(
                            key=key,
                            version=obj.version,
                            timestamp=obj.timestamp,
                            data=obj.data,
                        )
                    )
        except SQLAlchemyError as e:
            raise PersistenceError(f"failed to write {key}") from e
        logger.debug("Stored %s (%d bytes)", key, len(obj.data))

    async def delete(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        delete(VersionedObjectModel).where(VersionedObjectModel.key == key)
                    )
        except SQLAlchemyError as e:
            raise PersistenceError(f"failed to delete {key}") from e
