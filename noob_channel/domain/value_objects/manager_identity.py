"""ManagerIdentity value object — the bot's own channel signing identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ManagerIdentity:
    public_key: bytes
    private_key: bytes

    def __repr__(self) -> str:
        return f"ManagerIdentity(public_key={self.public_key.hex()!r})"
