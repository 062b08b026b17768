"""
Reset the discovery watermark so the next pass re-reads Immich from the start.

Queued videos are left alone; already known ids are skipped on re-ingest.

Usage: python reset_cursor.py [--discover]
"""
import argparse

from videoqueue.core.logging import setup_logging
from videoqueue.core.settings import get_settings
from videoqueue.db.session import make_engine, make_session_factory
from videoqueue.services.cursor import CursorStore
from videoqueue.services.immich import ImmichAssetSource
from videoqueue.workers.scheduler import DiscoveryScheduler


def reset_cursor(discover: bool = False):
    settings = get_settings()
    setup_logging(level=settings.log_level, structured=False)

    store = CursorStore(settings.cursor_file)
    print("--- CURSOR RESET ---")
    print(f"Cursor file: {store.path}")
    print(f"Current watermark: {store.load().isoformat()}")
    store.reset()
    print(f"Watermark now: {store.load().isoformat()}")

    if discover:
        print("Running one discovery pass...")
        source = ImmichAssetSource(
            make_engine(settings.immich_database_url),
            excluded_extensions=settings.excluded_extension_list,
        )
        session_factory = make_session_factory(make_engine(settings.database_url))
        backlog = DiscoveryScheduler(settings, session_factory, source).tick()
        if backlog < 0:
            print("   Discovery failed, see log above.")
        else:
            print(f"   Backlog size: {backlog}")
            print(f"   Watermark now: {store.load().isoformat()}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--discover", action="store_true", help="run one discovery pass after reset")
    args = parser.parse_args()
    reset_cursor(discover=args.discover)
