"""Channel naming — deterministic seed, name and description for a sequence number."""

from __future__ import annotations

import hashlib

CHANNEL_SALT = "i'm a little teapot short and stout"
CHANNEL_NAME_TEMPLATE = "NC_%s"
CHANNEL_DESCRIPTION = "A channel for you super noobs that need some help"


def channel_seed(sequence: int, salt: str = CHANNEL_SALT) -> bytes:
    """Hash the decimal sequence number followed by the salt (BLAKE2b-256).

    The result is a pure function of ``(sequence, salt)``, so a restarted
    bot derives the same codename for the same sequence.
    """
    if sequence < 0:
        raise ValueError("Channel sequence cannot be negative")
    h = hashlib.blake2b(digest_size=32)
    h.update(str(sequence).encode("ascii"))
    h.update(salt.encode("utf-8"))
    return h.digest()


def channel_name(codename: str) -> str:
    return CHANNEL_NAME_TEMPLATE % codename
