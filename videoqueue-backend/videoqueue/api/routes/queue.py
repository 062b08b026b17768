from fastapi import APIRouter, Depends, Query

from videoqueue.api.deps import get_queue_view_service
from videoqueue.schemas.queue import PaginationOut, QueueOut, QueueResponse
from videoqueue.schemas.video import VideoOut
from videoqueue.services.queue_view import QueueViewService

router = APIRouter(prefix="/api", tags=["queue"])


@router.get("/queue", response_model=QueueResponse)
def get_queue(
    status: str | None = Query(default=None),
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias="pageSize"),
    service: QueueViewService = Depends(get_queue_view_service),
):
    """
    Paginated queue grouped by status. Invalid page/pageSize values fall back
    to 1 and 10.
    """
    view = service.snapshot(status or None, page, page_size)
    return QueueResponse(
        queue=QueueOut(
            pending=[VideoOut.model_validate(v) for v in view.pending],
            processing=[VideoOut.model_validate(v) for v in view.processing],
            completed=[VideoOut.model_validate(v) for v in view.completed],
            total=view.total,
        ),
        pagination=PaginationOut(
            page=view.page,
            page_size=view.page_size,
            total=view.total,
            pages=view.pages,
        ),
    )
