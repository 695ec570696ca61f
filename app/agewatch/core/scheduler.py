"""Polling scheduler driving the walk, classify, emit and sleep cycle.

A cycle walks every configured root in order into one fresh list of
entries, classifies each entry, emits its events and then sleeps for
the poll interval. The sleep and the phase boundaries honour a stop
request, so a signal handler can end the loop without cutting a cycle
off mid-emission. A stop request is a plain flag and setting it takes
no lock.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from agewatch.core.settings import ErrorPolicy, WatchSettings
from agewatch.events.emitter import EventEmitter
from agewatch.filesystem.models import Classification, EntryDescriptor
from agewatch.filesystem.walker import Clock, TraversalError, utc_now, walk_tree

logger = logging.getLogger(__name__)

Walker = Callable[..., list[EntryDescriptor]]

# Longest uninterrupted sleep; bounds how long a stop request waits
_SLEEP_SLICE_S = 0.25


class SchedulerState(str, Enum):
    """Lifecycle state of the poll scheduler.

    Attributes:
        IDLE: Created, no cycle run yet.
        SCANNING: Walking, classifying and emitting.
        SLEEPING: Waiting for the next cycle.
        STOPPED: Stop requested and honoured.
    """

    IDLE = "idle"
    SCANNING = "scanning"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


@dataclass(frozen=True, slots=True)
class RootFailure:
    """A configured root whose walk failed.

    Attributes:
        root: Root path as configured.
        error: Traversal error raised while walking it.
    """

    root: str
    error: TraversalError


@dataclass(slots=True)
class CycleReport:
    """Outcome of one completed (or stopped) cycle.

    Attributes:
        entries: Number of entries walked.
        stale: Stale entries, in walk order.
        errors: Roots that failed to walk (only with ErrorPolicy.CONTINUE).
    """

    entries: int = 0
    stale: list[EntryDescriptor] = field(default_factory=lambda: [])
    errors: list[RootFailure] = field(default_factory=lambda: [])

    @property
    def stale_count(self) -> int:
        return len(self.stale)


class PollScheduler:
    """Runs scan cycles over the configured roots until stopped.

    Args:
        settings: Immutable watch settings.
        emitter: Event emitter receiving every classified entry.
        walker: Tree walker function, ``walker(root, clock=...)``.
        clock: Time source passed to the walker.
    """

    def __init__(
        self,
        settings: WatchSettings,
        emitter: EventEmitter,
        *,
        walker: Walker = walk_tree,
        clock: Clock = utc_now,
    ) -> None:
        self._settings = settings
        self._emitter = emitter
        self._walker = walker
        self._clock = clock
        self._policy = settings.policy
        self._stop_requested = False
        self._state = SchedulerState.IDLE
        self._cycles = 0

    @property
    def state(self) -> SchedulerState:
        """Current lifecycle state."""
        return self._state

    @property
    def cycles(self) -> int:
        """Number of cycles started so far."""
        return self._cycles

    @property
    def stop_requested(self) -> bool:
        """True once stop() has been called."""
        return self._stop_requested

    def stop(self) -> None:
        """Request the loop to stop at the next phase boundary.

        Safe to call from a signal handler or another thread. A sleeping
        loop notices the request within one sleep slice.
        """
        self._stop_requested = True

    def run(self, *, max_cycles: int | None = None) -> None:
        """Run cycles until stopped.

        Args:
            max_cycles: Stop after this many cycles (None = forever).

        Raises:
            TraversalError: If a root cannot be walked and the error
                policy is ABORT. The fatal record is emitted first.
        """
        while not self._stop_requested:
            self.run_cycle()
            if self._stop_requested:
                break
            if max_cycles is not None and self._cycles >= max_cycles:
                break
            self._state = SchedulerState.SLEEPING
            logger.debug("Sleeping %ds before next cycle", self._settings.poll)
            self._sleep(self._settings.poll)

        self._state = SchedulerState.STOPPED

    def run_cycle(self) -> CycleReport:
        """Run a single walk, classify and emit cycle.

        Returns:
            CycleReport describing the cycle.

        Raises:
            TraversalError: If a root cannot be walked and the error
                policy is ABORT.
        """
        self._state = SchedulerState.SCANNING
        self._cycles += 1
        report = CycleReport()

        entries = self._walk_roots(report)
        if self._stop_requested:
            logger.debug("Stop requested, skipping emission for cycle %d", self._cycles)
            return report

        report.entries = len(entries)
        for entry in entries:
            classification = self._policy.classify(entry)
            self._emitter.emit_entry(entry, classification)
            if classification == Classification.STALE:
                report.stale.append(entry)

        for failure in report.errors:
            self._emitter.emit_traversal_error(failure.root, failure.error, fatal=False)

        logger.debug(
            "Cycle %d: %d entries, %d stale, %d failed roots",
            self._cycles,
            report.entries,
            report.stale_count,
            len(report.errors),
        )
        return report

    def _walk_roots(self, report: CycleReport) -> list[EntryDescriptor]:
        """Walk all roots in order into one fresh list."""
        entries: list[EntryDescriptor] = []
        for root in self._settings.directories:
            if self._stop_requested:
                break
            try:
                entries.extend(self._walker(root, clock=self._clock))
            except TraversalError as e:
                if self._settings.on_error == ErrorPolicy.ABORT:
                    self._emitter.emit_traversal_error(root, e, fatal=True)
                    raise
                logger.debug("Continuing after failed root %s", root)
                report.errors.append(RootFailure(root=root, error=e))
        return entries


    def _sleep(self, seconds: float) -> None:
        """Sleep up to ``seconds``, returning early once a stop is requested."""
        deadline = time.monotonic() + seconds
        while not self._stop_requested:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            time.sleep(min(remaining, _SLEEP_SLICE_S))
