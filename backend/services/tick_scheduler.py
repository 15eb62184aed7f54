"""
Tick scheduler for the game loop.

Runs GameLoop.tick() once per period on a single worker, re-reading the
period before every wait so speed changes apply from the next tick on.
The worker exits as soon as the game reaches GameOver; start() arms a new
one only if none is active, so there is never more than one tick in flight.
Each worker owns its stop event: once stop() retires it, it can no longer
tick, even if it has not finished exiting.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TickScheduler:
    """Drive a GameLoop at its current speed until it is over or stopped."""

    def __init__(self, game, wait: Optional[Callable[[float], bool]] = None):
        """
        Args:
            game: the GameLoop to drive (its lock also guards this scheduler)
            wait: wait(seconds) -> True to stop. Defaults to waiting on the
                  worker's stop event, so stop() interrupts a pending wait.
        """
        self.game = game
        self._wait = wait
        self._stop_event = threading.Event()
        self._active = False
        self._thread: Optional[threading.Thread] = None
        self.ticks_run = 0

    @property
    def is_active(self) -> bool:
        with self.game.lock:
            return self._active

    def start(self) -> bool:
        """
        Start ticking on a background thread.

        Returns:
            False if a worker is already active (nothing is started).
        """
        with self.game.lock:
            if self._active:
                return False
            stop_event = self._arm()
            self._thread = threading.Thread(
                target=self._run, args=(stop_event,), name="tick-scheduler", daemon=True
            )
            self._thread.start()
            logger.info(f"Tick scheduler started at {self.game.speed}ms")
            return True

    def run_blocking(self) -> int:
        """
        Tick on the calling thread until the game ends or stop() is called.

        Returns:
            Number of ticks executed by this call.
        """
        with self.game.lock:
            if self._active:
                raise RuntimeError("Tick scheduler is already running.")
            stop_event = self._arm()
        before = self.ticks_run
        self._run(stop_event)
        return self.ticks_run - before

    def stop(self, timeout: Optional[float] = None) -> None:
        """Retire the current worker and wait up to timeout for it to exit."""
        with self.game.lock:
            self._stop_event.set()
            self._active = False
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _arm(self) -> threading.Event:
        # Caller holds game.lock
        self._active = True
        self._stop_event = threading.Event()
        return self._stop_event

    def _retire(self, stop_event: threading.Event) -> None:
        # Caller holds game.lock; a retired worker must not clear its successor's flag
        if self._stop_event is stop_event:
            self._active = False

    def _run(self, stop_event: threading.Event) -> None:
        wait = self._wait or stop_event.wait
        while True:
            stop_requested = wait(self.game.speed / 1000.0)

            with self.game.lock:
                if stop_requested or stop_event.is_set():
                    self._retire(stop_event)
                    logger.info("Tick scheduler stopped")
                    return

                try:
                    if self.game.is_running:
                        self.game.tick()
                        self.ticks_run += 1
                except Exception:
                    self._retire(stop_event)
                    logger.exception("Tick failed, scheduler halted")
                    raise

                if not self.game.is_running:
                    # Cleared under the same lock a restart uses to re-arm us
                    self._retire(stop_event)
                    logger.info(f"Game over after {self.ticks_run} ticks, scheduler idle")
                    return
