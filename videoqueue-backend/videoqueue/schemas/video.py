from pydantic import BaseModel, Field

class VideoBase(BaseModel):
    id: str
    path: str
    resolution: str | None = None
    bitrate: str | None = None
    status: str
    original_size: int = Field(default=0, alias="originalSize")

    class Config:
        from_attributes = True
        populate_by_name = True

class VideoOut(VideoBase):
    pass

class VideoAccept(VideoBase):
    # Ignored on accept; the video is always queued as pending
    status: str = "pending"

class VideoStatusUpdate(BaseModel):
    status: str

class VideoDelete(BaseModel):
    id: str = Field(min_length=1)
