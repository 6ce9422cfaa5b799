"""Tests for the rotation policies."""

import pytest

from noob_channel.domain.policies.rotation import (
    RotationDecision,
    rotate_and_reset_when_over_cap,
    rotate_when_over_cap,
    select_policy,
)


@pytest.mark.parametrize("occupancy", [1, 50, 99, 100])
def test_at_or_below_cap_does_not_rotate(occupancy):
    assert rotate_when_over_cap(occupancy, 100).rotate is False


def test_first_join_over_cap_rotates():
    decision = rotate_when_over_cap(101, 100)
    assert decision == RotationDecision(rotate=True, occupancy_after_rotation=101)


def test_observed_policy_never_resets():
    """Every join past the cap keeps rotating because occupancy keeps growing."""
    for occupancy in (101, 102, 500):
        decision = rotate_when_over_cap(occupancy, 100)
        assert decision.rotate is True
        assert decision.occupancy_after_rotation == occupancy


def test_reset_policy_restarts_at_one():
    assert rotate_and_reset_when_over_cap(101, 100) == RotationDecision(True, 1)
    assert rotate_and_reset_when_over_cap(100, 100) == RotationDecision(False, 100)


def test_select_policy():
    assert select_policy(False) is rotate_when_over_cap
    assert select_policy(True) is rotate_and_reset_when_over_cap
