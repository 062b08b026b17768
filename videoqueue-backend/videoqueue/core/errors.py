"""
Error types for the video queue engine.

All errors inherit from VideoQueueError. Services raise them, the API layer
maps them to HTTP responses.
"""
from typing import Optional


class VideoQueueError(Exception):
    """Base exception for all queue failures."""
    pass


class VideoNotFoundError(VideoQueueError):
    """Raised when a video id is not present in the local queue."""

    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")


class InvalidStatusError(VideoQueueError):
    """Raised when a status value is not one of the known lifecycle states."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Invalid status: {status!r}")


class AssetSourceError(VideoQueueError):
    """Raised when the Immich asset database cannot be queried."""
    pass


class RemoteDeleteError(VideoQueueError):
    """Raised when Immich rejects or never answers a delete request.

    `body` holds the response body verbatim; `status_code` is None for
    transport failures.
    """

    def __init__(self, body: str, status_code: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        super().__init__(body)


class LocalStorageError(VideoQueueError):
    """Raised when the local queue database fails a read or write."""
    pass


class OrphanedVideoError(LocalStorageError):
    """Raised when the remote asset was deleted but the local row was not."""

    def __init__(self, video_id: str, reason: str):
        self.video_id = video_id
        self.reason = reason
        super().__init__(
            f"Video {video_id} deleted in Immich but local delete failed: {reason}"
        )


class CursorSaveError(VideoQueueError):
    """Raised when the discovery watermark cannot be persisted."""
    pass
