"""Host-driven timers: repeating and one-shot schedules keyed by name."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class _Schedule:
    name: str
    interval_ms: float
    callback: Callable[[], None]
    repeat: bool
    elapsed_ms: float = 0.0


class Scheduler:
    """
    Fires callbacks as the host advances time.

    At most one schedule exists per name: starting a schedule under a name
    that is already in use replaces the old one, so restarting never stacks
    duplicate timers. Callbacks run one at a time, in the order the
    schedules were started.
    """

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._schedules: Dict[str, _Schedule] = {}

    def every(self, name: str, interval_ms: float, callback: Callable[[], None]) -> None:
        """Run `callback` every `interval_ms` until cancelled."""
        self._start(name, interval_ms, callback, repeat=True)

    def after(self, name: str, delay_ms: float, callback: Callable[[], None]) -> None:
        """Run `callback` once, `delay_ms` from now."""
        self._start(name, delay_ms, callback, repeat=False)

    def cancel(self, name: str) -> bool:
        """Stop the schedule called `name`. Returns False if there was none."""
        return self._schedules.pop(name, None) is not None

    def active(self, name: str) -> bool:
        return name in self._schedules

    def __len__(self) -> int:
        return len(self._schedules)

    def advance(self, dt_ms: float) -> None:
        self.now_ms += dt_ms
        # snapshot: schedules started by a callback wait for the next pass
        for sched in list(self._schedules.values()):
            if self._schedules.get(sched.name) is not sched:
                continue
            sched.elapsed_ms += dt_ms
            while sched.elapsed_ms >= sched.interval_ms:
                sched.elapsed_ms -= sched.interval_ms
                if not sched.repeat:
                    del self._schedules[sched.name]
                sched.callback()
                if not sched.repeat or self._schedules.get(sched.name) is not sched:
                    break

    def _start(self, name: str, interval_ms: float, callback: Callable[[], None], repeat: bool) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval for {name!r} must be positive, got {interval_ms}")
        self.cancel(name)
        self._schedules[name] = _Schedule(
            name=name, interval_ms=float(interval_ms), callback=callback, repeat=repeat)
