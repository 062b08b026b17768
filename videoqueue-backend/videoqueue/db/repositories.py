import math
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import case, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from videoqueue.core.enums import QUEUE_PRIORITY, QUEUE_PRIORITY_DEFAULT, VideoStatus
from videoqueue.core.errors import LocalStorageError, VideoNotFoundError
from videoqueue.db.base import Base

T = TypeVar("T", bound=Base)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def normalize_pagination(page: Any, page_size: Any) -> tuple[int, int]:
    """Coerce raw page/pageSize input; invalid values fall back to defaults."""
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = DEFAULT_PAGE
    try:
        page_size = int(page_size)
    except (TypeError, ValueError):
        page_size = DEFAULT_PAGE_SIZE

    if page < 1:
        page = DEFAULT_PAGE
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0


class BaseRepository(Generic[T]):
    """Generic repository for CRUD operations."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def get_by_id(self, id: str) -> Optional[T]:
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_all(self) -> list[T]:
        return self.db.query(self.model).all()

    def delete(self, id: str) -> bool:
        """Delete a row by id in its own transaction. Returns False if absent."""
        try:
            count = self.db.query(self.model).filter(self.model.id == id).delete(
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise LocalStorageError(f"Failed to delete {self.model.__name__} {id}: {e}") from e
        return count > 0


class VideoRepository(BaseRepository):
    """Repository for the local transcode queue."""

    def __init__(self, db: Session):
        from videoqueue.models import Video
        super().__init__(db, Video)

    def _insert_stmt(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert(self.model)
        if dialect == "sqlite":
            return sqlite_insert(self.model)
        raise LocalStorageError(f"Unsupported database dialect: {dialect}")

    def insert_if_absent(self, video, status: str) -> bool:
        """
        Insert a video with the given status unless its id already exists.

        Returns True if a row was inserted, False on conflict.
        """
        stmt = self._insert_stmt().values(
            id=video.id,
            path=video.path,
            resolution=video.resolution,
            bitrate=video.bitrate,
            status=status,
            original_size=video.original_size or 0,
        ).on_conflict_do_nothing(index_elements=["id"])
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise LocalStorageError(f"Failed to insert video {video.id}: {e}") from e
        return result.rowcount > 0

    def update_status(self, id: str, status: str) -> None:
        self._update(id, {"status": status})

    def update_full(self, video) -> None:
        """Overwrite path/resolution/bitrate/status/size of an existing row."""
        self._update(video.id, {
            "path": video.path,
            "resolution": video.resolution,
            "bitrate": video.bitrate,
            "status": video.status,
            "original_size": video.original_size or 0,
        })

    def _update(self, id: str, values: dict) -> None:
        try:
            count = self.db.query(self.model).filter(self.model.id == id).update(
                values, synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise LocalStorageError(f"Failed to update video {id}: {e}") from e
        if count == 0:
            raise VideoNotFoundError(id)

    def list_by_status(self, status: str, descending: bool = True):
        order = self.model.path.desc() if descending else self.model.path.asc()
        try:
            return self.db.query(self.model).filter(
                self.model.status == status
            ).order_by(order).all()
        except SQLAlchemyError as e:
            raise LocalStorageError(f"Failed to list {status} videos: {e}") from e

    def page(self, status: Optional[str], page: Any, page_size: Any):
        """
        One page of the queue, ordered processing < pending < completed < other,
        then by path.

        Returns (rows, total, page, page_size) with page/page_size normalized.
        """
        page, page_size = normalize_pagination(page, page_size)

        q = self.db.query(self.model)
        if status:
            q = q.filter(self.model.status == status)

        priority = case(
            *[(self.model.status == s, rank) for s, rank in QUEUE_PRIORITY.items()],
            else_=QUEUE_PRIORITY_DEFAULT,
        )
        try:
            total = q.count()
            rows = q.order_by(
                priority, self.model.path.asc(), self.model.id.asc()
            ).limit(page_size).offset((page - 1) * page_size).all()
        except SQLAlchemyError as e:
            raise LocalStorageError(f"Failed to read queue page: {e}") from e
        return rows, total, page, page_size

    def count_by_status(self) -> dict[str, int]:
        rows = self.db.query(self.model.status, func.count(self.model.id)).group_by(
            self.model.status
        ).all()
        counts = {s.value: 0 for s in VideoStatus}
        counts.update({status: count for status, count in rows})
        return counts
