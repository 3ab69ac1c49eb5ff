"""Countdown and stopwatch bookkeeping.

Every transition is a pure function: it takes a Timer plus the caller's
current Unix-millisecond clock and returns a new Timer.
"""

from dataclasses import dataclass, replace
from typing import Literal

TimerMode = Literal["countdown", "stopwatch"]
TimerStatus = Literal["idle", "running", "paused", "completed"]

_MODES = ("countdown", "stopwatch")


@dataclass(frozen=True)
class Timer:
    """A single countdown or stopwatch."""

    id: str
    name: str
    mode: TimerMode
    duration_s: int  # Countdown length (ignored by stopwatches)
    elapsed_ms: int = 0
    status: TimerStatus = "idle"
    start_ms: int | None = None  # Virtual start: now - elapsed when resumed
    end_ms: int | None = None  # Countdown deadline while running
    laps: tuple[int, ...] = ()  # Elapsed ms at each lap


def create_timer(name: str, mode: str, now_ms: int, duration_s: int = 60) -> Timer:
    """Create an idle timer. Blank names fall back to the mode's title."""
    if mode not in _MODES:
        raise ValueError(f"Unknown timer mode: {mode!r}")
    return Timer(
        id=str(now_ms),
        name=name or mode.title(),
        mode=mode,  # type: ignore[arg-type]
        duration_s=duration_s,
    )


def start_timer(timer: Timer, now_ms: int) -> Timer:
    """Start a fresh run, or resume a paused one keeping its elapsed time."""
    countdown = timer.mode == "countdown"
    if timer.status == "paused":
        remaining = timer.duration_s * 1000 - timer.elapsed_ms
        return replace(
            timer,
            status="running",
            start_ms=now_ms - timer.elapsed_ms,
            end_ms=now_ms + remaining if countdown else None,
        )
    return replace(
        timer,
        status="running",
        start_ms=now_ms,
        elapsed_ms=0,
        end_ms=now_ms + timer.duration_s * 1000 if countdown else None,
        laps=(),
    )


def pause_timer(timer: Timer, now_ms: int) -> Timer:
    if timer.status != "running":
        return timer
    elapsed = now_ms - timer.start_ms if timer.start_ms is not None else timer.elapsed_ms
    return replace(timer, status="paused", elapsed_ms=elapsed)


def reset_timer(timer: Timer) -> Timer:
    return replace(
        timer, status="idle", elapsed_ms=0, start_ms=None, end_ms=None, laps=()
    )


def rename_timer(timer: Timer, name: str, duration_s: int | None = None) -> Timer:
    """Rename; changing a countdown's duration also resets it."""
    if duration_s is None or timer.mode == "stopwatch":
        return replace(timer, name=name)
    return replace(reset_timer(timer), name=name, duration_s=duration_s)


def add_lap(timer: Timer, now_ms: int) -> Timer:
    """Record a lap on a running stopwatch; anything else is unchanged."""
    if timer.status != "running" or timer.mode != "stopwatch":
        return timer
    elapsed = now_ms - timer.start_ms if timer.start_ms is not None else 0
    return replace(timer, laps=timer.laps + (elapsed,))


def tick(timer: Timer, now_ms: int) -> Timer:
    """Advance a running timer to now_ms, completing expired countdowns."""
    if timer.status != "running":
        return timer
    if timer.mode == "countdown" and timer.end_ms is not None and now_ms >= timer.end_ms:
        return replace(timer, status="completed", elapsed_ms=timer.duration_s * 1000)
    elapsed = now_ms - timer.start_ms if timer.start_ms is not None else timer.elapsed_ms
    return replace(timer, elapsed_ms=elapsed)


def remaining_ms(timer: Timer) -> int:
    """Milliseconds left on a countdown (0 for stopwatches)."""
    if timer.mode != "countdown":
        return 0
    return max(0, timer.duration_s * 1000 - timer.elapsed_ms)


def format_duration(ms: int, show_hours: bool = True) -> str:
    """Render milliseconds as "HH:MM:SS" (or "MM:SS")."""
    total_s = ms // 1000
    hours, rest = divmod(total_s, 3600)
    minutes, seconds = divmod(rest, 60)
    if show_hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
