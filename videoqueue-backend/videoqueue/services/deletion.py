"""
Deletion Coordinator - two-phase delete across Immich and the local queue.

Immich is mutated first; the local row is only removed once Immich has
confirmed. A local failure after a remote success leaves an orphaned row that
is reported, never retried or compensated.
"""
import logging

from videoqueue.core.errors import LocalStorageError, OrphanedVideoError
from videoqueue.core.logging import VideoContext
from videoqueue.db.repositories import VideoRepository
from videoqueue.services.immich import ImmichClient

logger = logging.getLogger(__name__)


class DeletionCoordinator:
    def __init__(self, client: ImmichClient, repository: VideoRepository):
        self.client = client
        self.repository = repository

    def delete(self, video_id: str) -> None:
        with VideoContext(video_id=video_id, operation="delete"):
            # Phase 1: RemoteDeleteError propagates, local row untouched
            self.client.delete_assets([video_id])
            logger.info(f"Deleted asset {video_id} in Immich")

            # Phase 2
            try:
                removed = self.repository.delete(video_id)
            except LocalStorageError as e:
                logger.error(f"Orphaned local row for {video_id}: {e}")
                raise OrphanedVideoError(video_id, str(e)) from e

            if removed:
                logger.info(f"Deleted local row {video_id}")
            else:
                logger.warning(f"Local row {video_id} was already absent")
