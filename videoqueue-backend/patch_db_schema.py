from sqlalchemy import text

from videoqueue.core.settings import get_settings
from videoqueue.db.context import get_db_session
from videoqueue.db.session import make_engine, make_session_factory

def patch_schema():
    print("Patching database schema...")
    settings = get_settings()
    session_factory = make_session_factory(make_engine(settings.database_url))
    with get_db_session(session_factory) as db:
        try:
            db.execute(text("ALTER TABLE videos ADD COLUMN IF NOT EXISTS original_size BIGINT NOT NULL DEFAULT 0;"))
            db.execute(text("CREATE INDEX IF NOT EXISTS idx_videos_path ON videos(path);"))
            db.execute(text("CREATE INDEX IF NOT EXISTS idx_videos_status ON videos(status);"))
            db.commit()
            print("Successfully ensured original_size column and videos indexes.")
        except Exception as e:
            print(f"Error patching schema: {e}")
            db.rollback()

if __name__ == "__main__":
    patch_schema()
