"""
Frame schedulers.

Both follow the display-refresh contract: a callback scheduled while a frame
is being dispatched runs on the next frame, never the current one.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Optional

from atlas_sim.render.surface import FrameCallback

logger = logging.getLogger(__name__)


class ManualScheduler:
    """Deterministic fixed-step scheduler. Time only moves when advance() is called."""

    def __init__(self, start_s: float = 0.0):
        self.now_s = start_s
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def schedule(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def advance(self, dt_s: float) -> int:
        """Move the clock by dt_s and fire one frame. Returns callbacks fired."""
        if dt_s < 0:
            raise ValueError("dt_s must be non-negative.")
        self.now_s += dt_s
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(self.now_s)
        return len(due)

    def run_frames(self, n: int, dt_s: float) -> int:
        """Fire up to n frames; stops early once nothing is scheduled."""
        fired = 0
        for _ in range(n):
            if not self.advance(dt_s):
                break
            fired += 1
        return fired


class RealtimeScheduler:
    """
    Single-threaded wall-clock loop at a target frame rate.
    run() blocks until nothing is scheduled or a limit is hit.
    """

    def __init__(
        self,
        fps: float = 60.0,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if fps <= 0:
            raise ValueError(f"fps must be positive. Got: {fps}")
        self.frame_interval_s = 1.0 / fps
        self._clock = clock
        self._sleep = sleep
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def schedule(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run(self, max_frames: Optional[int] = None, duration_s: Optional[float] = None) -> int:
        start = self._clock()
        next_frame = start
        frames = 0
        while self._pending:
            if max_frames is not None and frames >= max_frames:
                break
            now = self._clock()
            if now < next_frame:
                self._sleep(next_frame - now)
                now = self._clock()
            if duration_s is not None and now - start >= duration_s:
                break
            next_frame = max(next_frame + self.frame_interval_s, now)

            due, self._pending = self._pending, {}
            for callback in due.values():
                callback(now)
            frames += 1

        logger.info(f"Realtime loop stopped after {frames} frames.")
        return frames
