"""Failures a monitoring cycle can end with."""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for errors that abandon a single cycle."""


class TransientReadFailure(MonitorError):
    """A reader could not produce a usable value this cycle."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class InvariantViolation(MonitorError):
    """A snapshot could not be assembled completely."""
