from videoqueue.core.settings import get_settings
from videoqueue.db.context import get_db_session
from videoqueue.db.repositories import VideoRepository
from videoqueue.db.session import make_engine, make_session_factory
from videoqueue.services.queue_view import QueueViewService

settings = get_settings()
session_factory = make_session_factory(make_engine(settings.database_url))

with get_db_session(session_factory) as db:
    repo = VideoRepository(db)

    print("Videos per status:")
    for status, count in repo.count_by_status().items():
        print(f"  {status:<12} {count}")

    view = QueueViewService(repo).snapshot(page=1, page_size=20)
    print(f"\nQueue page {view.page}/{view.pages} (total {view.total}):")
    print(f"{'ID':<36} | {'Status':<12} | {'Size':>12} | {'Path'}")
    print("-" * 100)
    for v in view.processing + view.pending + view.completed:
        print(f"{v.id:<36} | {v.status:<12} | {v.original_size:>12} | {v.path}")
