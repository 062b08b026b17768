"""
Request-scoped wiring: services are assembled per request from the handles
created once at startup (see videoqueue.main.create_app).
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from videoqueue.db.repositories import VideoRepository
from videoqueue.db.session import get_db
from videoqueue.services.deletion import DeletionCoordinator
from videoqueue.services.discovery import DiscoveryService
from videoqueue.services.lifecycle import LifecycleController
from videoqueue.services.queue_view import QueueViewService


def get_video_repository(db: Session = Depends(get_db)) -> VideoRepository:
    return VideoRepository(db)


def get_discovery_service(
    request: Request,
    repo: VideoRepository = Depends(get_video_repository),
) -> DiscoveryService:
    state = request.app.state
    return DiscoveryService(
        source=state.immich_source,
        repository=repo,
        cursor_store=state.cursor_store,
        external_root=state.settings.immich_upload_path,
        local_root=state.settings.video_path,
        batch_size=state.settings.discovery_batch_size,
    )


def get_queue_view_service(repo: VideoRepository = Depends(get_video_repository)) -> QueueViewService:
    return QueueViewService(repo)


def get_lifecycle_controller(repo: VideoRepository = Depends(get_video_repository)) -> LifecycleController:
    return LifecycleController(repo)


def get_deletion_coordinator(
    request: Request,
    repo: VideoRepository = Depends(get_video_repository),
) -> DeletionCoordinator:
    return DeletionCoordinator(request.app.state.immich_client, repo)
