"""Shared fixtures: a fake Tk ``after()`` host for single-stepping frames."""

from __future__ import annotations

import pytest


class FakeHost:
    """Records after() callbacks instead of running an event loop."""

    def __init__(self):
        self._seq = 0
        self.pending: dict[str, tuple] = {}
        self.cancelled: list[str] = []

    def after(self, ms, fn):
        self._seq += 1
        token = f"after#{self._seq}"
        self.pending[token] = (ms, fn)
        return token

    def after_cancel(self, token):
        self.cancelled.append(token)
        self.pending.pop(token, None)

    def callbacks(self, ms):
        return [fn for delay, fn in self.pending.values() if delay == ms]

    def fire(self, ms):
        """Run every callback currently pending with delay *ms*."""
        due = [(tok, fn) for tok, (delay, fn) in self.pending.items() if delay == ms]
        for tok, _ in due:
            del self.pending[tok]
        for _, fn in due:
            fn()
        return len(due)


@pytest.fixture
def host():
    return FakeHost()
