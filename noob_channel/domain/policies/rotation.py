"""RotationPolicy — decides when a join overflows the current channel."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_CHANNEL_CAP = 100


@dataclass(frozen=True)
class RotationDecision:
    """Outcome of applying a rotation policy to a freshly incremented occupancy.

    Attributes:
        rotate: whether a new channel must be minted for this join.
        occupancy_after_rotation: occupancy to record once the rotation
            has been committed. Ignored when ``rotate`` is False.
    """

    rotate: bool
    occupancy_after_rotation: int


RotationPolicy = Callable[[int, int], RotationDecision]


def rotate_when_over_cap(occupancy: int, cap: int) -> RotationDecision:
    """Rotate strictly when occupancy exceeds the cap; never reset the count.

    Once the cap has been passed every later join rotates again, because
    the occupancy keeps growing.
    """
    return RotationDecision(rotate=occupancy > cap, occupancy_after_rotation=occupancy)


def rotate_and_reset_when_over_cap(occupancy: int, cap: int) -> RotationDecision:
    """Rotate when occupancy exceeds the cap and restart counting at 1.

    The joiner that triggered the rotation is the first member of the new
    channel.
    """
    if occupancy > cap:
        return RotationDecision(rotate=True, occupancy_after_rotation=1)
    return RotationDecision(rotate=False, occupancy_after_rotation=occupancy)


def select_policy(reset_on_rotation: bool) -> RotationPolicy:
    return rotate_and_reset_when_over_cap if reset_on_rotation else rotate_when_over_cap
