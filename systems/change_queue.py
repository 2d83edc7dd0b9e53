"""
systems/change_queue.py
=======================
Deferred stack-change queue for the screen manager.

Architecture
------------
Screens never touch the stack.  When one asks to switch, push or pop, the
request is recorded here as a ``PendingChange`` and applied later, between
event-delegation passes, when the manager calls ``drain()``.  This keeps a
screen's own handler from running while that same screen is being closed.

Requested height
----------------
The queue tracks the height the stack *will* have once every queued change
is applied.  ``request_pop()`` validates against that number, not the live
stack, so popping the last screen fails at the call site instead of at the
next drain.

Drain rules
-----------
- Entries are applied strictly front-to-back, each one completely before
  the next.
- The queue is emptied as part of the drain.
- Requests made *during* a drain (a screen's ``init`` calling ``push``)
  wait for the next drain.  They are never applied in the current pass.
- If applying an entry raises, the exception propagates and the entries
  that were not reached are kept, ahead of anything queued meanwhile.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Hashable

from core.errors import IllegalPop

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Change records
# ---------------------------------------------------------------------------

class ChangeKind(enum.Enum):
    """The three stack operations a screen can request."""
    SWITCH = "switch"
    PUSH   = "push"
    POP    = "pop"


@dataclass(frozen=True)
class PendingChange:
    """One queued stack operation.

    Parameters
    ----------
    kind:
        Which operation to perform.
    screen_id:
        Target screen for ``SWITCH`` and ``PUSH``; ``None`` for ``POP``.
    args:
        Positional arguments for the new screen's ``init()``.
    """

    kind:      ChangeKind
    screen_id: Hashable | None = None
    args:      tuple[Any, ...] = ()

    def __repr__(self) -> str:
        if self.kind is ChangeKind.POP:
            return "<PendingChange POP>"
        return f"<PendingChange {self.kind.name} {self.screen_id!r} args={self.args!r}>"


Applier = Callable[[PendingChange], None]


# ---------------------------------------------------------------------------
# ChangeQueue
# ---------------------------------------------------------------------------

class ChangeQueue:
    """FIFO of pending stack changes plus the eventual stack height.

    Usage
    -----
        queue = ChangeQueue()
        queue.request_switch("menu", ())
        queue.request_push("options", ("audio",))
        queue.request_pop()

        # Once per frame, owned by the manager:
        queue.drain(apply_change)
    """

    def __init__(self) -> None:
        self._pending: list[PendingChange] = []
        self._requested_height: int = 0
        self._draining: bool = False   # re-entrancy guard

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request_switch(self, screen_id: Hashable, args: tuple[Any, ...]) -> PendingChange:
        """Queue a clear-then-push.  The eventual height becomes 1."""
        self._requested_height = 1
        return self._append(PendingChange(ChangeKind.SWITCH, screen_id, tuple(args)))

    def request_push(self, screen_id: Hashable, args: tuple[Any, ...]) -> PendingChange:
        """Queue a push.  The eventual height grows by one."""
        self._requested_height += 1
        return self._append(PendingChange(ChangeKind.PUSH, screen_id, tuple(args)))

    def request_pop(self) -> PendingChange:
        """Queue a pop.  The eventual height shrinks by one.

        Raises
        ------
        IllegalPop
            If the pop would leave the stack empty once every queued change
            has been applied.  Nothing is queued in that case.
        """
        if self._requested_height <= 1:
            raise IllegalPop()
        self._requested_height -= 1
        return self._append(PendingChange(ChangeKind.POP))

    # ------------------------------------------------------------------
    # Drain
    # ------------------------------------------------------------------

    def drain(self, apply: Applier) -> int:
        """Apply every change queued before this call, in FIFO order.

        Parameters
        ----------
        apply:
            Callable performing one change against the live stack.

        Returns
        -------
        int
            Number of changes applied.  ``0`` when called re-entrantly from
            inside another drain.
        """
        if self._draining:
            # Picked up by the next drain; nothing runs inside this one.
            return 0

        batch = self._pending
        self._pending = []
        if batch:
            log.debug("Draining %d change(s)", len(batch))

        self._draining = True
        applied = 0
        try:
            for change in batch:
                apply(change)
                applied += 1
        finally:
            self._draining = False
            if applied < len(batch):
                self._pending[:0] = batch[applied + 1:]
        return applied

    def resync(self, live_height: int) -> int:
        """Recompute the requested height from *live_height* and the queue.

        Used after a failed drain, when the height counted at request time
        no longer matches what the remaining entries will produce.
        """
        height = live_height
        for change in self._pending:
            if change.kind is ChangeKind.SWITCH:
                height = 1
            elif change.kind is ChangeKind.PUSH:
                height += 1
            else:
                height -= 1
        self._requested_height = height
        log.debug("Requested height resynced to %d", height)
        return height

    def reset(self) -> None:
        """Forget every pending change and set the eventual height to 0."""
        self._pending.clear()
        self._requested_height = 0

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def requested_height(self) -> int:
        """Stack height once every queued change has been applied."""
        return self._requested_height

    @property
    def pending_count(self) -> int:
        """Number of changes waiting for the next drain."""
        return len(self._pending)

    @property
    def draining(self) -> bool:
        """True while ``drain()`` is applying changes."""
        return self._draining

    def pending(self) -> tuple[PendingChange, ...]:
        """Snapshot of the queued changes, oldest first."""
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def __repr__(self) -> str:
        return (
            f"<ChangeQueue pending={self.pending_count} "
            f"requested_height={self._requested_height}>"
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _append(self, change: PendingChange) -> PendingChange:
        self._pending.append(change)
        log.debug("Queued %r (requested height %d)", change, self._requested_height)
        return change
