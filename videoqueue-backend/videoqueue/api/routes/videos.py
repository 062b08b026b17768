from fastapi import APIRouter, Depends

from videoqueue.api.deps import (
    get_deletion_coordinator,
    get_discovery_service,
    get_lifecycle_controller,
)
from videoqueue.schemas.video import VideoAccept, VideoDelete, VideoOut, VideoStatusUpdate
from videoqueue.services.deletion import DeletionCoordinator
from videoqueue.services.discovery import DiscoveryService
from videoqueue.services.lifecycle import LifecycleController

router = APIRouter(prefix="/api", tags=["videos"])


@router.get("/videos/unprocessed", response_model=list[VideoOut])
def list_unprocessed(service: DiscoveryService = Depends(get_discovery_service)):
    """
    Pull new videos from Immich, then return the full `wait` backlog.
    """
    return service.discover_new()

@router.post("/videos/process", response_model=VideoOut)
def add_to_queue(body: VideoAccept, controller: LifecycleController = Depends(get_lifecycle_controller)):
    return controller.accept(body)

@router.patch("/videos/{video_id}/status")
def update_video_status(
    video_id: str,
    body: VideoStatusUpdate,
    controller: LifecycleController = Depends(get_lifecycle_controller),
):
    controller.set_status(video_id, body.status)
    return {"status": "updated"}

@router.delete("/videos")
def delete_video(body: VideoDelete, coordinator: DeletionCoordinator = Depends(get_deletion_coordinator)):
    coordinator.delete(body.id)
    return {"message": "Video deleted successfully"}
