"""Filesystem credential vault — implements CredentialVault."""

from __future__ import annotations

import asyncio
import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path

from noob_channel.application.ports.credential_vault import CredentialVault
from noob_channel.domain.exceptions import CredentialCollisionError, VaultError

logger = logging.getLogger(__name__)

CHANNEL_INFO_FILENAME = "channelInfo.json"
CHANNEL_ADMIN_FILENAME = "channelAdmin.key"
PARTIAL_SUFFIX = ".partial"


def _write_durably(path: Path, data: bytes, mode: int) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())


def _fsync_dir(path: Path) -> None:
    fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


class FilesystemCredentialVault(CredentialVault):
    """One directory per codename under ``root``.

    Files are first written into a hidden ``.<codename>-*.partial``
    directory and published with a single rename, so ``<root>/<codename>``
    either holds both files or does not exist.
    """

    def __init__(self, root: str | os.PathLike[str]):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VaultError(f"failed to create admin key directory at {self._root}") from e

    def purge_incomplete(self) -> int:
        """Remove partial directories left behind by an interrupted write."""
        removed = 0
        for leftover in self._root.glob(f".*{PARTIAL_SUFFIX}"):
            if leftover.is_dir():
                shutil.rmtree(leftover, ignore_errors=True)
                logger.warning("Removed incomplete credential directory %s", leftover)
                removed += 1
        return removed

    def channel_dir(self, codename: str) -> Path:
        if not codename or codename.startswith(".") or os.sep in codename or "/" in codename:
            raise VaultError(f"Invalid codename for a credential directory: {codename!r}")
        return self._root / codename

    async def write_admin_credential(
        self, codename: str, channel_info: bytes, admin_key_pem: bytes
    ) -> None:
        await asyncio.to_thread(self._write, codename, channel_info, admin_key_pem)

    def _write(self, codename: str, channel_info: bytes, admin_key_pem: bytes) -> None:
        final_dir = self.channel_dir(codename)
        if final_dir.exists():
            raise CredentialCollisionError(
                f"failed to make directory for channel: {final_dir} already exists"
            )

        try:
            staging = Path(
                tempfile.mkdtemp(prefix=f".{codename}-", suffix=PARTIAL_SUFFIX, dir=self._root)
            )
        except OSError as e:
            raise VaultError(f"failed to make directory for channel {codename}") from e

        try:
            try:
                _write_durably(staging / CHANNEL_INFO_FILENAME, channel_info, 0o644)
            except OSError as e:
                raise VaultError(
                    f"failed to write channel info to file {final_dir / CHANNEL_INFO_FILENAME}"
                ) from e
            try:
                _write_durably(staging / CHANNEL_ADMIN_FILENAME, admin_key_pem, 0o600)
            except OSError as e:
                raise VaultError(
                    f"failed to write channel admin keys to file {final_dir / CHANNEL_ADMIN_FILENAME}"
                ) from e

            if final_dir.exists():
                raise CredentialCollisionError(
                    f"failed to make directory for channel: {final_dir} already exists"
                )
            try:
                os.rename(staging, final_dir)
            except OSError as e:
                if e.errno in (errno.EEXIST, errno.ENOTEMPTY):
                    raise CredentialCollisionError(
                        f"failed to make directory for channel: {final_dir} already exists"
                    ) from e
                raise VaultError(f"failed to publish credential directory {final_dir}") from e
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        try:
            _fsync_dir(self._root)
        except OSError:
            logger.warning("Could not fsync %s after publishing %s", self._root, codename)
        logger.info("Wrote admin credentials for %s to %s", codename, final_dir)
