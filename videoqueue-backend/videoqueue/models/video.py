from sqlalchemy import BigInteger, String, Index
from sqlalchemy.orm import Mapped, mapped_column
from videoqueue.db.base import Base

class Video(Base):
    __tablename__ = "videos"

    # Immich asset id
    id: Mapped[str] = mapped_column(String, primary_key=True)
    path: Mapped[str] = mapped_column(String, nullable=False)

    # Filled in when accepted or processed
    resolution: Mapped[str | None] = mapped_column(String, nullable=True)
    bitrate: Mapped[str | None] = mapped_column(String, nullable=True)

    status: Mapped[str] = mapped_column(String, nullable=False)
    original_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    __table_args__ = (
        Index("idx_videos_path", "path"),
        Index("idx_videos_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Video {self.id} {self.status} {self.path}>"
