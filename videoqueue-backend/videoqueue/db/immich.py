"""
Read-only view of the Immich asset database.

Only the columns discovery depends on are declared. The table is attached to
its own MetaData so it is never created against the local queue database.
"""
from sqlalchemy import Column, DateTime, MetaData, String, Table, Text

immich_metadata = MetaData()

assets = Table(
    "assets",
    immich_metadata,
    Column("id", String, primary_key=True),
    Column("type", String, nullable=False),
    Column("status", String, nullable=False),
    Column("originalPath", Text, nullable=False),
    Column("originalFileName", Text, nullable=False),
    Column("createdAt", DateTime(timezone=True), nullable=False),
)

IMMICH_VIDEO_TYPE = "VIDEO"
IMMICH_ACTIVE_STATUS = "active"
