"""
Immich integration: asset database reads and API deletes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

import requests
from sqlalchemy import and_, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from videoqueue.core.errors import AssetSourceError, RemoteDeleteError
from videoqueue.db.immich import IMMICH_ACTIVE_STATUS, IMMICH_VIDEO_TYPE, assets

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so a configured suffix matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


@dataclass
class ImmichAsset:
    id: str
    original_path: Optional[str]
    created_at: datetime
    original_file_name: Optional[str]


class ImmichAssetSource:
    """Queries the Immich database for newly created video assets."""

    def __init__(self, engine: Engine, excluded_extensions: Iterable[str] = (".mkv",)):
        self.engine = engine
        self.excluded_extensions = [e.lower() for e in excluded_extensions]

    def fetch_videos_since(self, since: datetime, limit: int = 100) -> list[ImmichAsset]:
        """
        Active video assets created strictly after `since`, oldest first.

        Raises AssetSourceError if the query itself fails.
        """
        conditions = [
            assets.c.type == IMMICH_VIDEO_TYPE,
            assets.c.status == IMMICH_ACTIVE_STATUS,
            assets.c.createdAt > since,
        ]
        for ext in self.excluded_extensions:
            conditions.append(
                assets.c.originalFileName.not_ilike(f"%{escape_like(ext)}", escape=LIKE_ESCAPE)
            )

        stmt = (
            select(
                assets.c.id,
                assets.c.originalPath,
                assets.c.createdAt,
                assets.c.originalFileName,
            )
            .where(and_(*conditions))
            .order_by(assets.c.createdAt.asc())
            .limit(limit)
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Immich asset query failed: {e}")
            raise AssetSourceError(f"Immich asset query failed: {e}") from e

        return [
            ImmichAsset(
                id=str(row.id),
                original_path=row.originalPath,
                created_at=row.createdAt,
                original_file_name=row.originalFileName,
            )
            for row in rows
        ]


class ImmichClient:
    """Minimal Immich REST client (bulk asset delete)."""

    def __init__(
        self,
        host: str,
        api_key: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.host = host.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def delete_assets(self, ids: list[str]) -> None:
        """
        DELETE /api/assets with {"ids": [...]}.

        Raises RemoteDeleteError carrying the response body verbatim on any
        non-2xx answer, or without a status code on transport failure.
        """
        url = f"{self.host}/api/assets"
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
        }
        try:
            resp = self.session.delete(
                url, json={"ids": ids}, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Immich delete request failed: {e}")
            raise RemoteDeleteError(f"Immich request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.warning(f"Immich rejected delete of {ids}: {resp.status_code} {resp.text}")
            raise RemoteDeleteError(resp.text, status_code=resp.status_code)
