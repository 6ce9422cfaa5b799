"""Relationship confirmation policies for incoming auth requests."""

from __future__ import annotations

from collections.abc import Callable, Iterable

ConfirmationPolicy = Callable[[str], bool]


def accept_all(partner_id: str) -> bool:
    """Confirm every relationship request."""
    return True


def allow_list(partner_ids: Iterable[str]) -> ConfirmationPolicy:
    """Only confirm partners whose id is in ``partner_ids``."""
    allowed = frozenset(p.strip() for p in partner_ids if p and p.strip())

    def _policy(partner_id: str) -> bool:
        return partner_id in allowed

    return _policy


def select_confirmation_policy(partner_ids: Iterable[str]) -> ConfirmationPolicy:
    """An empty allow-list keeps the accept-everyone behaviour."""
    partner_ids = list(partner_ids)
    if not partner_ids:
        return accept_all
    return allow_list(partner_ids)
