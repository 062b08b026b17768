from pydantic import BaseModel, Field

from videoqueue.schemas.video import VideoOut

class QueueOut(BaseModel):
    pending: list[VideoOut] = Field(default_factory=list)
    processing: list[VideoOut] = Field(default_factory=list)
    completed: list[VideoOut] = Field(default_factory=list)
    total: int

class PaginationOut(BaseModel):
    page: int
    page_size: int = Field(alias="pageSize")
    total: int
    pages: int

    class Config:
        populate_by_name = True

class QueueResponse(BaseModel):
    queue: QueueOut
    pagination: PaginationOut
