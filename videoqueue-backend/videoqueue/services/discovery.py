"""
Asset Discovery - incremental, forward-only import of new Immich videos.

Each call reads the watermark, pulls the next batch of videos created after
it, stores them locally with status `wait` and then moves the watermark.
Inserts ignore id conflicts, so re-reading a batch (e.g. after a failed
watermark save) never duplicates work.
"""
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional

from videoqueue.core.enums import VideoStatus
from videoqueue.core.errors import CursorSaveError, LocalStorageError
from videoqueue.core.logging import VideoContext
from videoqueue.db.repositories import VideoRepository
from videoqueue.models import Video
from videoqueue.services.cursor import CursorStore, as_utc
from videoqueue.services.immich import ImmichAsset, ImmichAssetSource

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


def rewrite_path(original_path: str, external_root: str, local_root: str) -> str:
    """Replace the first occurrence of the Immich upload root with the local root."""
    if not external_root:
        return original_path
    return original_path.replace(external_root, local_root, 1)


def probe_file_size(path: str) -> int:
    """Byte size of a local file; 0 when it is missing or unreadable."""
    try:
        return os.path.getsize(path)
    except OSError:
        return 0


class DiscoveryService:
    def __init__(
        self,
        source: ImmichAssetSource,
        repository: VideoRepository,
        cursor_store: CursorStore,
        external_root: str = "",
        local_root: str = "",
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.source = source
        self.repository = repository
        self.cursor_store = cursor_store
        self.external_root = external_root
        self.local_root = local_root
        self.batch_size = batch_size

    def discover_new(self) -> list[Video]:
        """
        Import the next batch of new videos and return the whole `wait` backlog
        ordered by path descending.
        """
        since = self.cursor_store.load()
        batch = self.source.fetch_videos_since(since, limit=self.batch_size)

        watermark = self._ingest(batch)

        if watermark is not None and watermark > since:
            try:
                self.cursor_store.save(watermark)
            except CursorSaveError as e:
                # Rows are already stored; the next call re-reads this batch harmlessly
                logger.error(f"Discovery cursor not saved: {e}")

        if batch:
            logger.info(f"Discovery batch: {len(batch)} assets after {since.isoformat()}")

        return self.repository.list_by_status(VideoStatus.WAIT.value, descending=True)

    def _ingest(self, batch: list[ImmichAsset]) -> Optional[datetime]:
        """
        Store every asset of the batch. Returns the newest createdAt seen,
        including rows that failed to store; a failed row is logged and skipped.
        """
        watermark: Optional[datetime] = None

        for asset in batch:
            with VideoContext(video_id=asset.id, operation="discover"):
                if asset.created_at is not None:
                    created_at = as_utc(asset.created_at)
                    if watermark is None or created_at > watermark:
                        watermark = created_at

                try:
                    video = self._to_video(asset)
                    inserted = self.repository.insert_if_absent(video, VideoStatus.WAIT.value)
                except (LocalStorageError, ValueError) as e:
                    logger.error(f"Skipping asset {asset.id}: {e}")
                    continue

                if inserted:
                    logger.info(f"New video discovered: {video.path} ({video.original_size} bytes)")

        return watermark

    def _to_video(self, asset: ImmichAsset) -> Video:
        if not asset.original_path:
            raise ValueError("asset has no original path")
        path = rewrite_path(asset.original_path, self.external_root, self.local_root)
        return Video(
            id=asset.id,
            path=path,
            status=VideoStatus.WAIT.value,
            original_size=probe_file_size(path),
        )
