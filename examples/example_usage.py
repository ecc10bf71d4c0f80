"""Example: track time from a terminal through the service layer (no Flask).

Usage: python examples/example_usage.py <access_code> <company_id> "<description>"
Press Ctrl+C to stop; the interval is recorded like a stop in the web UI.
Running it again after a crash resumes the timer from its saved slot.
"""

import importlib
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from dotenv import load_dotenv

from timeos.common.formatting import format_clock
from timeos.config import get_settings_module
from timeos.container import build_container
from timeos.timer.service import TimeTracker
from timeos.timer.ticker import TickLoop


def main(argv):
    if len(argv) != 4:
        print(__doc__)
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    user = container.auth_service.login(argv[1])
    engine = container.timer_engine(user.user_id, "terminal")
    tracker = TimeTracker(
        engine,
        container.entry_submission,
        user,
        known_companies=container.company_service.list_for_user(user),
    )

    engine.restore()
    if not engine.is_running:
        tracker.start(argv[2], argv[3])

    with TickLoop(engine, lambda s: print(f"\r{format_clock(s)}", end="", flush=True), interval_ms=500) as loop:
        try:
            while loop.is_alive:
                time.sleep(1.0)
        except KeyboardInterrupt:
            pass

    outcome = tracker.stop()
    print()
    print(outcome.to_view()["message"], f"({format_clock(outcome.elapsed_seconds)})")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
