from fastapi import APIRouter
from videoqueue.api.routes.health import router as health
from videoqueue.api.routes.queue import router as queue
from videoqueue.api.routes.videos import router as videos

router = APIRouter()
router.include_router(health)
router.include_router(queue)
router.include_router(videos)
