"""CLI entry point for day/night map generation.

    uv run worldclock-daynight --at "2024-06-21 12:00" -v
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from pytz import utc

load_dotenv()

from worldclock.clock import DEFAULT_TIME_ZONES  # noqa: E402
from worldclock.renderers.static import save_static_map  # noqa: E402
from worldclock.terminator import compute_terminator  # noqa: E402

log = logging.getLogger("worldclock.daynight")


def _parse_at(value: str) -> datetime:
    """ISO-ish "YYYY-MM-DD HH:MM" in UTC."""
    try:
        dt = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid time: {value!r}") from e
    return utc.localize(dt) if dt.tzinfo is None else dt


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="worldclock-daynight",
        description="Render the day/night terminator to a PNG.",
    )
    parser.add_argument("--at", type=_parse_at, help="UTC time (default: now)")
    parser.add_argument("--output", type=Path, help="PNG path (default: results/)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s worldclock %(levelname)s %(message)s",
    )

    curve = compute_terminator(args.at)
    log.debug(
        "sun alpha=%.3f delta=%.3f gmst=%.4fh", curve.sun.alpha, curve.sun.delta, curve.gmst
    )
    path = save_static_map(curve, DEFAULT_TIME_ZONES, output_path=args.output)
    log.info("Saved: %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
