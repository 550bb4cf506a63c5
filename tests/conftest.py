"""Test configuration shared across this project's pytest suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests can import modules from src/ without requiring editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeScheduler:
    """Stand-in for the Tk root's after/after_cancel timer API.

    Jobs are recorded instead of run; `fire()` runs the pending one the way
    Tk would when its delay elapses.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.pending: dict[str, object] = {}
        self._next_id = 0

    def after(self, delay_ms: int, fn):  # noqa: ANN001 - callback type not important for these tests
        self._next_id += 1
        job = f"job-{self._next_id}"
        self.calls.append(("after", delay_ms))
        self.pending[job] = fn
        return job

    def after_cancel(self, job):  # noqa: ANN001 - job id type not important for these tests
        self.calls.append(("cancel", job))
        self.pending.pop(job, None)

    def fire(self) -> None:
        """Run the single pending job."""
        assert len(self.pending) == 1, f"expected one pending job, got {len(self.pending)}"
        job, fn = next(iter(self.pending.items()))
        del self.pending[job]
        fn()

    @property
    def delays(self) -> list[object]:
        return [arg for kind, arg in self.calls if kind == "after"]


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
