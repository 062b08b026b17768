"""
Queue View - paginated, status-grouped projection of the local queue.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from videoqueue.core.enums import VideoStatus
from videoqueue.db.repositories import VideoRepository, page_count
from videoqueue.models import Video


@dataclass
class QueueView:
    page: int
    page_size: int
    total: int
    pages: int
    pending: list[Video] = field(default_factory=list)
    processing: list[Video] = field(default_factory=list)
    completed: list[Video] = field(default_factory=list)


class QueueViewService:
    def __init__(self, repository: VideoRepository):
        self.repository = repository

    def snapshot(self, status: Optional[str] = None, page: Any = 1, page_size: Any = 10) -> QueueView:
        rows, total, page, page_size = self.repository.page(status, page, page_size)

        view = QueueView(
            page=page,
            page_size=page_size,
            total=total,
            pages=page_count(total, page_size),
        )
        buckets = {
            VideoStatus.PENDING.value: view.pending,
            VideoStatus.PROCESSING.value: view.processing,
            VideoStatus.COMPLETED.value: view.completed,
        }
        # `wait` (backlog) and unknown statuses belong to no bucket
        for video in rows:
            bucket = buckets.get(video.status)
            if bucket is not None:
                bucket.append(video)
        return view
