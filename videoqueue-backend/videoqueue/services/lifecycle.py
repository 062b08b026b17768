"""
Lifecycle Controller - status transitions requested by queue producers and
the external transcoding worker.
"""
import logging

from videoqueue.core.enums import VideoStatus
from videoqueue.core.errors import InvalidStatusError
from videoqueue.core.logging import VideoContext
from videoqueue.db.repositories import VideoRepository

logger = logging.getLogger(__name__)


class LifecycleController:
    def __init__(self, repository: VideoRepository):
        self.repository = repository

    def accept(self, video):
        """
        Move a video into the active queue. The full record is rewritten and
        the status is always `pending`, whatever the caller sent.
        """
        with VideoContext(video_id=video.id, operation="accept"):
            video.status = VideoStatus.PENDING.value
            self.repository.update_full(video)
            logger.info(f"[lifecycle] Video {video.id} -> {video.status}")
        return video

    def set_status(self, video_id: str, status: str) -> None:
        with VideoContext(video_id=video_id, operation="set_status"):
            if status not in VideoStatus.values():
                raise InvalidStatusError(status)
            self.repository.update_status(video_id, status)
            logger.info(f"[lifecycle] Video {video_id} -> {status}")
