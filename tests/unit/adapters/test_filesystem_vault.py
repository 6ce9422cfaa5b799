"""Tests for FilesystemCredentialVault."""

import stat

import pytest

from noob_channel.adapters.vault import filesystem_vault
from noob_channel.adapters.vault.filesystem_vault import (
    CHANNEL_ADMIN_FILENAME,
    CHANNEL_INFO_FILENAME,
    FilesystemCredentialVault,
)
from noob_channel.domain.exceptions import CredentialCollisionError, VaultError


@pytest.fixture
def vault(tmp_path):
    v = FilesystemCredentialVault(tmp_path / "adminKeys")
    v.ensure_root()
    return v


@pytest.mark.asyncio
async def test_writes_both_files(vault):
    await vault.write_admin_credential("BoldlyBraveOtter07", b'{"name":"x"}', b"PEM")

    channel_dir = vault.root / "BoldlyBraveOtter07"
    assert (channel_dir / CHANNEL_INFO_FILENAME).read_bytes() == b'{"name":"x"}'
    assert (channel_dir / CHANNEL_ADMIN_FILENAME).read_bytes() == b"PEM"
    mode = stat.S_IMODE((channel_dir / CHANNEL_ADMIN_FILENAME).stat().st_mode)
    assert mode & 0o077 == 0


@pytest.mark.asyncio
async def test_existing_directory_is_a_collision(vault):
    await vault.write_admin_credential("Taken", b"a", b"b")

    with pytest.raises(CredentialCollisionError):
        await vault.write_admin_credential("Taken", b"c", b"d")

    assert (vault.root / "Taken" / CHANNEL_INFO_FILENAME).read_bytes() == b"a"


@pytest.mark.asyncio
async def test_failed_second_file_leaves_nothing_behind(vault, monkeypatch):
    real_write = filesystem_vault._write_durably

    def failing_write(path, data, mode):
        if path.name == CHANNEL_ADMIN_FILENAME:
            raise OSError("disk full")
        real_write(path, data, mode)

    monkeypatch.setattr(filesystem_vault, "_write_durably", failing_write)

    with pytest.raises(VaultError, match="channel admin keys"):
        await vault.write_admin_credential("HalfWritten", b"a", b"b")

    assert list(vault.root.iterdir()) == []


@pytest.mark.parametrize("codename", ["", ".hidden", "a/b"])
@pytest.mark.asyncio
async def test_unsafe_codename_rejected(vault, codename):
    with pytest.raises(VaultError, match="Invalid codename"):
        await vault.write_admin_credential(codename, b"a", b"b")


def test_purge_incomplete_removes_partial_dirs(vault):
    (vault.root / ".Crashed-abc.partial").mkdir()
    (vault.root / ".Crashed-abc.partial" / CHANNEL_INFO_FILENAME).write_bytes(b"a")
    (vault.root / "Complete").mkdir()

    assert vault.purge_incomplete() == 1
    assert [p.name for p in vault.root.iterdir()] == ["Complete"]


def test_ensure_root_creates_nested_dirs(tmp_path):
    v = FilesystemCredentialVault(tmp_path / "a" / "b")
    v.ensure_root()
    assert v.root.is_dir()


def test_ensure_root_fails_when_path_is_a_file(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(VaultError):
        FilesystemCredentialVault(target).ensure_root()
