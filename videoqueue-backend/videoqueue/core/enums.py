from enum import Enum

class VideoStatus(str, Enum):
    # Discovered, not yet accepted into the queue
    WAIT = "wait"

    # Active queue states (ordered)
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> set[str]:
        return {s.value for s in cls}


# Display order of the queue; statuses not listed sort last
QUEUE_PRIORITY = {
    VideoStatus.PROCESSING.value: 1,
    VideoStatus.PENDING.value: 2,
    VideoStatus.COMPLETED.value: 3,
}
QUEUE_PRIORITY_DEFAULT = 4
