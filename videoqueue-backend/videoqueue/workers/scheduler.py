"""
Scheduler - Immich polling with forward-only discovery.
Runs the same discovery pass as GET /api/videos/unprocessed on an interval,
so the backlog fills up even when no client is polling.
"""
import logging
import time

from sqlalchemy.orm import sessionmaker

from videoqueue.core.errors import VideoQueueError
from videoqueue.core.logging import setup_logging
from videoqueue.core.settings import Settings, get_settings
from videoqueue.db.base import Base
from videoqueue.db.context import get_db_session
from videoqueue.db.repositories import VideoRepository
from videoqueue.db.session import make_engine, make_session_factory
from videoqueue.services.cursor import CursorStore
from videoqueue.services.discovery import DiscoveryService
from videoqueue.services.immich import ImmichAssetSource

logger = logging.getLogger(__name__)


class DiscoveryScheduler:
    def __init__(self, settings: Settings, session_factory: sessionmaker, source: ImmichAssetSource):
        self.settings = settings
        self.session_factory = session_factory
        self.source = source
        self.cursor_store = CursorStore(settings.cursor_file)

    def tick(self) -> int:
        """
        One discovery pass. Returns the backlog size, or -1 when the pass
        failed (the error is logged and the scheduler keeps running).
        """
        with get_db_session(self.session_factory) as db:
            service = DiscoveryService(
                source=self.source,
                repository=VideoRepository(db),
                cursor_store=self.cursor_store,
                external_root=self.settings.immich_upload_path,
                local_root=self.settings.video_path,
                batch_size=self.settings.discovery_batch_size,
            )
            try:
                backlog = service.discover_new()
            except VideoQueueError as e:
                logger.error(f"Discovery tick failed: {e}")
                return -1
        logger.info(f"Discovery tick done, backlog={len(backlog)}")
        return len(backlog)

    def run_forever(self):
        logger.info(
            f"Scheduler started (forward-only mode). Polling every {self.settings.poll_interval_seconds}s"
        )
        while True:
            self.tick()
            time.sleep(self.settings.poll_interval_seconds)


def init_db(engine, attempts: int = 10, delay: float = 3):
    """Create tables, waiting for the database to come up."""
    for attempt in range(attempts):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables ready.")
            return
        except Exception as e:
            if attempt == attempts - 1:
                raise
            logger.warning(f"DB not ready (attempt {attempt + 1}/{attempts}): {e}")
            time.sleep(delay)


def main():
    settings = get_settings()
    setup_logging(level=settings.log_level, structured=settings.log_structured)

    engine = make_engine(settings.database_url)
    init_db(engine)

    source = ImmichAssetSource(
        make_engine(settings.immich_database_url),
        excluded_extensions=settings.excluded_extension_list,
    )
    DiscoveryScheduler(settings, make_session_factory(engine), source).run_forever()


if __name__ == "__main__":
    main()
