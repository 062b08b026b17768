"""
Pytest configuration: in-memory SQLite stands in for both the local queue
database and the Immich asset database.
"""
import logging
from datetime import datetime, timedelta, timezone

import pytest

from videoqueue.core.settings import Settings
from videoqueue.db.base import Base
from videoqueue.db.immich import assets, immich_metadata
from videoqueue.db.repositories import VideoRepository
from videoqueue.db.session import make_engine, make_session_factory
from videoqueue.models import Video
from videoqueue.services.cursor import CursorStore
from videoqueue.services.immich import ImmichAssetSource

IMMICH_HOST = "http://immich.test"
IMMICH_TOKEN = "test-token"

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def local_engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(local_engine):
    session = make_session_factory(local_engine)()
    yield session
    session.close()


@pytest.fixture
def repo(db):
    return VideoRepository(db)


@pytest.fixture
def immich_engine():
    engine = make_engine("sqlite://")
    immich_metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def asset_source(immich_engine):
    return ImmichAssetSource(immich_engine, excluded_extensions=[".mkv"])


@pytest.fixture
def cursor_store(tmp_path):
    return CursorStore(str(tmp_path / "state" / "last_processed_time.json"))


@pytest.fixture
def add_asset(immich_engine):
    """Insert a row into the fake Immich `assets` table."""
    def _add(asset_id, original_path, created_at, file_name=None, type="VIDEO", status="active"):
        with immich_engine.begin() as conn:
            conn.execute(assets.insert().values(
                id=asset_id,
                type=type,
                status=status,
                originalPath=original_path,
                originalFileName=file_name or original_path.rsplit("/", 1)[-1],
                createdAt=created_at,
            ))
    return _add


@pytest.fixture
def add_video(repo):
    """Insert a local queue row with the given status."""
    def _add(video_id, path, status, size=0, resolution=None, bitrate=None):
        video = Video(
            id=video_id,
            path=path,
            status=status,
            original_size=size,
            resolution=resolution,
            bitrate=bitrate,
        )
        repo.insert_if_absent(video, status)
        return video
    return _add


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        IMMICH_DATABASE_URL="sqlite://",
        IMMICH_HOST=IMMICH_HOST,
        IMMICH_TOKEN=IMMICH_TOKEN,
        IMMICH_UPLOAD_PATH="/mnt",
        VIDEO_PATH="/data",
        CURSOR_FILE=str(tmp_path / "last_processed_time.json"),
        CORS_ORIGINS="*",
    )
