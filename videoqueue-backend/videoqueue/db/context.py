from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker


@contextmanager
def get_db_session(session_factory: sessionmaker) -> Iterator[Session]:
    """Session scope for scripts and workers outside the request cycle."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
