"""
Cooperative frame scheduling.

`FrameScheduler` stands in for the display's "call me next frame" request:
callbacks requested while a frame runs are deferred to the following frame.
`FrameTask` wraps one repeating per-frame loop with a cancellation token so a
caller can always stop the previous loop before starting a new one.
"""
import logging
from typing import Callable, Dict, Optional

FrameCallback = Callable[[float], None]


class FrameScheduler:
    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self.frame = 0

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]):
        if handle is not None:
            self._pending.pop(handle, None)

    def run_frame(self, now: float = 0.0) -> int:
        """Run everything requested before this frame began. Returns callbacks run."""
        due = self._pending
        self._pending = {}
        for handle, callback in due.items():
            try:
                callback(now)
            except Exception:
                logging.exception(f"Frame callback {handle} failed on frame {self.frame}")
        self.frame += 1
        return len(due)

    @property
    def pending(self) -> int:
        return len(self._pending)


class CancelToken:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FrameTask:
    """Runs `body(now)` once per frame until cancelled."""

    def __init__(self, scheduler: FrameScheduler, body: FrameCallback, name: str = ''):
        self.scheduler = scheduler
        self.body = body
        self.name = name
        self.token: Optional[CancelToken] = None
        self._handle: Optional[int] = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self.token is not None and not self.token.cancelled

    def start(self):
        if self.running:
            return
        self.token = CancelToken()
        self._schedule(self.token)

    def cancel(self):
        if self.token is not None:
            self.token.cancel()
        self.scheduler.cancel(self._handle)
        self._handle = None

    def _schedule(self, token: CancelToken):
        self._handle = self.scheduler.request(lambda now: self._tick(token, now))

    def _tick(self, token: CancelToken, now: float):
        # a stale tick from a cancelled run must not revive the loop
        if token.cancelled:
            return
        self.runs += 1
        try:
            self.body(now)
        except Exception:
            # one bad frame is dropped, the loop carries on next frame
            logging.exception(f"Frame task {self.name or self.body!r} failed")
        finally:
            if not token.cancelled:
                self._schedule(token)
