"""
Reward and study-time accounting.

Correct answers earn a fixed number of coins. Study time is accumulated by a
cancelable background timer that flushes elapsed time every tick and the
remaining partial tick when it stops.
"""
import logging
from threading import Event, Lock, Thread
from typing import Callable, Optional

from vocab_trainer.schemas.records import UserRecord
from vocab_trainer.utils.time_utils import now_ms

logger = logging.getLogger(__name__)

CORRECT_ANSWER_COINS = 10
CORRECT_ANSWER_COUNT = 1
DEFAULT_TICK_MS = 1000


def apply_correct_answer(user: UserRecord) -> UserRecord:
    """Return the user with one correct answer rewarded; nothing else changes."""
    return user.model_copy(update={
        "coins": user.coins + CORRECT_ANSWER_COINS,
        "correct": user.correct + CORRECT_ANSWER_COUNT,
    })


def add_study_time(user: UserRecord, elapsed_ms: int) -> UserRecord:
    """Return the user with elapsed study time added (negative durations are ignored)."""
    return user.model_copy(update={"time_ms": user.time_ms + max(0, int(elapsed_ms))})


class StudyTimer:
    """
    Periodically reports elapsed study time while a session is open.

    Every tick the time since the previous report is passed to on_elapsed.
    stop() cancels the background thread and reports the final partial tick,
    so at most the in-flight tick is lost if the process dies. A report whose
    callback fails is retried with the next one.
    """

    def __init__(
        self,
        on_elapsed: Callable[[int], None],
        interval_ms: int = DEFAULT_TICK_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.on_elapsed = on_elapsed
        self.interval_ms = interval_ms
        self.clock = clock
        self.total_ms = 0
        self._pending_ms = 0
        self._last_mark: Optional[int] = None
        self._stop_event = Event()
        self._lock = Lock()
        self._thread: Optional[Thread] = None

    @property
    def running(self) -> bool:
        return self._last_mark is not None

    def start(self, background: bool = True) -> None:
        """Start timing; with background=False ticks must be driven by tick()."""
        with self._lock:
            if self._last_mark is not None:
                return
            self._last_mark = self.clock()
            self._stop_event.clear()

        if background:
            self._thread = Thread(target=self._run, name="study-timer", daemon=True)
            self._thread.start()

    def tick(self) -> int:
        """Report the time elapsed since the last report."""
        with self._lock:
            if self._last_mark is None:
                return 0
            now = self.clock()
            elapsed = max(0, now - self._last_mark)
            self._last_mark = now
        self._report(elapsed)
        return elapsed

    def stop(self) -> int:
        """Stop timing and flush the final partial tick; returns the flushed duration."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

        with self._lock:
            if self._last_mark is None:
                return 0
            elapsed = max(0, self.clock() - self._last_mark)
            self._last_mark = None
        self._report(elapsed)
        return elapsed

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_ms / 1000):
            self.tick()

    def _report(self, elapsed: int) -> None:
        # A slice whose callback failed is carried into the next report
        amount = elapsed + self._pending_ms
        if amount <= 0:
            return
        try:
            self.on_elapsed(amount)
        except Exception as e:
            self._pending_ms = amount
            logger.error(f"Study timer: failed to record {amount} ms: {str(e)}", exc_info=True)
            return
        self._pending_ms = 0
        self.total_ms += amount
