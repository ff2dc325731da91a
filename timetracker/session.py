from dataclasses import dataclass
from typing import Optional


@dataclass
class SessionClock:
    """Saved, session and live counting time for the selected track.

    While counting, the live part is always derived from ``started_at`` so a
    frame never adds time twice; it only lands in ``session_seconds`` on stop.
    """

    saved_seconds: int = 0
    session_seconds: int = 0
    started_at: Optional[float] = None

    @property
    def counting(self) -> bool:
        return self.started_at is not None

    def start(self, now: float) -> None:
        if self.counting:
            return
        self.started_at = now

    def stop(self, now: float) -> int:
        if not self.counting:
            return 0
        elapsed = self.running_seconds(now)
        self.session_seconds += elapsed
        self.started_at = None
        return elapsed

    def toggle(self, now: float) -> bool:
        if self.counting:
            self.stop(now)
        else:
            self.start(now)
        return self.counting

    def running_seconds(self, now: float) -> int:
        if self.started_at is None:
            return 0
        return max(int(now - self.started_at), 0)

    def session_total(self, now: float) -> int:
        return self.session_seconds + self.running_seconds(now)

    def total(self, now: float) -> int:
        return self.saved_seconds + self.session_total(now)

    def merge_saved(self) -> None:
        self.saved_seconds += self.session_seconds
        self.session_seconds = 0

    def reset(self) -> None:
        self.session_seconds = 0

    def clear(self) -> None:
        self.saved_seconds = 0
        self.session_seconds = 0
        self.started_at = None
