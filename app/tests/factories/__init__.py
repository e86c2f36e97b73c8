"""Test data factories for deterministic test data generation."""

from tests.factories.matches import (
    make_goal_payload,
    make_intent,
    make_match_row,
    make_match_update_payload,
    make_reminder_payload,
    make_service_account,
    make_snapshot,
)

__all__ = [
    "make_goal_payload",
    "make_intent",
    "make_match_row",
    "make_match_update_payload",
    "make_reminder_payload",
    "make_service_account",
    "make_snapshot",
]
