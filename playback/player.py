"""
player.py — Trace Playback Driver
==================================
The Player is the ONLY object that turns a Result into visible change.
It walks the steps strictly in order, one per delay interval, and keeps
the VisualState the renderer polls.

Lifecycle:
    IDLE  →  start() / play()  →  PLAYING
    PLAYING  ⇄  pause() / resume()  ⇄  PAUSED
    PLAYING  →  (trace exhausted)   →  FINISHED
    PLAYING / PAUSED  →  cancel()   →  CANCELLED

Per step:
  1. wait while paused (checked only here, never mid-step)
  2. clear the intermediate (pivot) highlight
  3. apply the step: Visit / Traverse / Path / Intermediate
  4. notify `on_step`
  5. wait one delay interval

A Traverse lights its edge for exactly one delay interval.  The removal
runs on its own threading.Timer so it never holds up the main loop, and
it is tagged with the run generation: a timer that outlives its run
finds a different generation and does nothing.

Thread safety:
  All state sits behind one Condition.  `start()` plays on a daemon
  thread; `play()` plays in the caller's thread.  Only one run may be in
  flight; cancel() the old one before starting another.
"""

import logging
import threading
from typing import Callable, List, Optional

import config
from graph import EdgeKey, edge_key
from algorithms.step import Intermediate, Path, Result, Step, Traverse, Visit
from playback.state import PlaybackStatus, VisualState

logger = logging.getLogger(__name__)

DEFAULT_DELAY = config.DEFAULT_DELAY_MS / 1000


class Player:
    """
    Attributes:
        on_step : Optional callback(Step) fired after each step is applied.
                  Runs on the playback thread, outside the state lock.
    """

    def __init__(
        self,
        delay: float = DEFAULT_DELAY,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.on_step = on_step

        self._cond = threading.Condition(threading.RLock())
        self._delay: float = max(0.0, delay)
        self._state = VisualState()
        self._paused = False
        self._running = False
        self._generation = 0
        self._thread: Optional[threading.Thread] = None
        self._timers: List[threading.Timer] = []
        self._deferred: List[EdgeKey] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, result: Result, paused: bool = False) -> None:
        """Play `result` on a background thread and return immediately."""
        with self._cond:
            generation = self._begin(result, paused)
            thread = threading.Thread(
                target=self._run,
                args=(result, generation),
                name=f"playback-{generation}",
                daemon=True,
            )
            self._thread = thread
        thread.start()

    def play(self, result: Result) -> Optional[float]:
        """
        Play `result` in the calling thread.

        Returns the result's distance, or None if the run was cancelled.
        """
        with self._cond:
            generation = self._begin(result, paused=False)
        return self._run(result, generation)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join the background run.  Returns True once it has ended."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def cancel(self) -> None:
        """Abandon the current run; its pending timers become no-ops."""
        with self._cond:
            if not self._running:
                return
            self._generation += 1
            self._running = False
            self._paused = False
            self._teardown()
            self._state.current_node = None
            self._state.intermediate_node = None
            self._state.status = PlaybackStatus.CANCELLED
            self._cond.notify_all()
        logger.info("Playback cancelled")

    # ------------------------------------------------------------------
    # Pause / Resume
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._cond:
            self._paused = True
            if self._running:
                self._state.status = PlaybackStatus.PAUSED

    def resume(self) -> None:
        with self._cond:
            if not self._paused:
                return
            self._paused = False
            # edge expiries that came due while paused
            for key in self._deferred:
                self._state.animating.discard(key)
            self._deferred.clear()
            if self._running:
                self._state.status = PlaybackStatus.PLAYING
            self._cond.notify_all()

    def toggle_pause(self) -> bool:
        """Flip pause.  Returns the new paused flag."""
        with self._cond:
            if self._paused:
                self.resume()
            else:
                self.pause()
            return self._paused

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    @property
    def delay(self) -> float:
        return self._delay

    def set_delay(self, seconds: float) -> None:
        with self._cond:
            if self._running:
                raise RuntimeError("Cannot change the delay while playback is running.")
            self._delay = max(0.0, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def snapshot(self) -> VisualState:
        with self._cond:
            return self._state.copy()

    @property
    def is_running(self) -> bool:
        with self._cond:
            return self._running

    @property
    def is_paused(self) -> bool:
        with self._cond:
            return self._paused

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _begin(self, result: Result, paused: bool) -> int:
        """Reset every indicator for a new run.  Caller holds the lock."""
        if self._running:
            raise RuntimeError("Playback already in progress; cancel it first.")
        self._teardown()
        self._generation += 1
        self._running = True
        self._paused = paused
        self._state = VisualState(
            total_steps=len(result.steps),
            status=PlaybackStatus.PAUSED if paused else PlaybackStatus.PLAYING,
        )
        logger.info("Playback %d started: %d steps, delay %.3fs",
                    self._generation, len(result.steps), self._delay)
        return self._generation

    def _run(self, result: Result, generation: int) -> Optional[float]:
        completed = False
        try:
            for step in result.steps:
                if not self._wait_while_paused(generation):
                    return None
                with self._cond:
                    if generation != self._generation:
                        return None
                    self._apply(step, generation)
                if self.on_step:
                    self.on_step(step)
                if not self._sleep(generation):
                    return None

            with self._cond:
                # a run paused during its last interval finishes only after resume
                if not self._wait_while_paused(generation):
                    return None
                self._state.distance = result.distance
                self._state.current_node = None
                self._state.intermediate_node = None
                self._state.status = PlaybackStatus.FINISHED
                self._running = False
                self._cond.notify_all()
            completed = True
            logger.info("Playback %d finished: distance=%s", generation, result.distance)
            return result.distance
        finally:
            if not completed:
                self._abort(generation)

    def _abort(self, generation: int) -> None:
        """Release the run slot if this run died without being cancelled."""
        with self._cond:
            if generation == self._generation and self._running:
                self._running = False
                self._teardown()
                self._state.status = PlaybackStatus.CANCELLED
                self._cond.notify_all()

    def _apply(self, step: Step, generation: int) -> None:
        state = self._state
        state.intermediate_node = None

        if isinstance(step, Visit):
            state.current_node = step.node
            state.visited.add(step.node)
        elif isinstance(step, Traverse):
            key = edge_key(step.source, step.target)
            state.animating.add(key)
            self._schedule_expiry(generation, key)
        elif isinstance(step, Path):
            state.final_path = {edge_key(a, b) for a, b in zip(step.path, step.path[1:])}
        elif isinstance(step, Intermediate):
            state.intermediate_node = step.node

        state.steps_applied += 1

    def _wait_while_paused(self, generation: int) -> bool:
        with self._cond:
            while self._paused and generation == self._generation:
                self._cond.wait()
            return generation == self._generation

    def _sleep(self, generation: int) -> bool:
        with self._cond:
            self._cond.wait_for(lambda: generation != self._generation, timeout=self._delay)
            return generation == self._generation

    def _schedule_expiry(self, generation: int, key: EdgeKey) -> None:
        timer = threading.Timer(self._delay, self._expire, args=(generation, key))
        timer.daemon = True
        self._timers = [t for t in self._timers if t.is_alive()]
        self._timers.append(timer)
        timer.start()

    def _expire(self, generation: int, key: EdgeKey) -> None:
        with self._cond:
            if generation != self._generation:
                logger.debug("Dropping stale edge expiry %s from run %d", key, generation)
                return
            if self._paused and self._running:
                self._deferred.append(key)
                return
            self._state.animating.discard(key)

    def _teardown(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        self._deferred.clear()
