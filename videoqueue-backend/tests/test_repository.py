"""
Tests for VideoRepository: idempotent insert, status updates and the
paginated, priority-ordered queue read.
"""
import pytest

from videoqueue.core.errors import VideoNotFoundError
from videoqueue.db.repositories import normalize_pagination, page_count
from videoqueue.models import Video


class TestInsertIfAbsent:

    def test_second_insert_of_same_id_is_noop(self, repo, add_video):
        add_video("a", "/data/a.mp4", "wait", size=10)

        inserted = repo.insert_if_absent(
            Video(id="a", path="/data/other.mp4", status="pending", original_size=99), "pending"
        )

        assert inserted is False
        rows = repo.get_all()
        assert len(rows) == 1
        assert rows[0].path == "/data/a.mp4"
        assert rows[0].status == "wait"
        assert rows[0].original_size == 10

    def test_insert_uses_given_status(self, repo):
        inserted = repo.insert_if_absent(
            Video(id="b", path="/data/b.mp4", status="completed", original_size=5), "wait"
        )
        assert inserted is True
        assert repo.get_by_id("b").status == "wait"


class TestUpdates:

    def test_update_status(self, repo, add_video):
        add_video("a", "/data/a.mp4", "pending")
        repo.update_status("a", "processing")
        repo.db.expire_all()
        assert repo.get_by_id("a").status == "processing"

    def test_update_status_missing_id_raises(self, repo):
        with pytest.raises(VideoNotFoundError) as exc_info:
            repo.update_status("missing", "pending")
        assert exc_info.value.video_id == "missing"

    def test_update_full_overwrites_record(self, repo, add_video):
        add_video("a", "/data/a.mp4", "wait", size=1)
        repo.update_full(Video(
            id="a", path="/data/a2.mp4", resolution="1280x720",
            bitrate="2M", status="pending", original_size=42,
        ))
        repo.db.expire_all()
        v = repo.get_by_id("a")
        assert (v.path, v.resolution, v.bitrate, v.status, v.original_size) == (
            "/data/a2.mp4", "1280x720", "2M", "pending", 42
        )

    def test_update_full_missing_id_raises(self, repo):
        with pytest.raises(VideoNotFoundError):
            repo.update_full(Video(id="nope", path="/x", status="pending", original_size=0))

    def test_delete(self, repo, add_video):
        add_video("a", "/data/a.mp4", "wait")
        assert repo.delete("a") is True
        assert repo.get_by_id("a") is None
        assert repo.delete("a") is False


class TestPagination:

    @pytest.mark.parametrize("page,page_size,expected", [
        (1, 10, (1, 10)),
        (3, 100, (3, 100)),
        (0, 10, (1, 10)),
        (-2, 10, (1, 10)),
        (1, 0, (1, 10)),
        (1, 101, (1, 10)),
        ("abc", "xyz", (1, 10)),
        (None, None, (1, 10)),
        ("2", "25", (2, 25)),
    ])
    def test_normalize_pagination(self, page, page_size, expected):
        assert normalize_pagination(page, page_size) == expected

    @pytest.mark.parametrize("total,page_size,pages", [
        (0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (250, 100, 3),
    ])
    def test_page_count(self, total, page_size, pages):
        assert page_count(total, page_size) == pages

    def test_status_priority_then_path(self, repo, add_video):
        add_video("c1", "/data/a.mp4", "completed")
        add_video("p1", "/data/z.mp4", "pending")
        add_video("r1", "/data/y.mp4", "processing")
        add_video("p2", "/data/b.mp4", "pending")
        add_video("r2", "/data/c.mp4", "processing")
        add_video("w1", "/data/0.mp4", "wait")

        rows, total, _, _ = repo.page(None, 1, 100)

        assert total == 6
        assert [v.id for v in rows] == ["r2", "r1", "p2", "p1", "c1", "w1"]

    def test_total_and_pages_with_filter(self, repo, add_video):
        for i in range(7):
            add_video(f"p{i}", f"/data/p{i}.mp4", "pending")
        for i in range(3):
            add_video(f"c{i}", f"/data/c{i}.mp4", "completed")

        rows, total, page, page_size = repo.page("pending", 2, 5)

        assert total == 7
        assert (page, page_size) == (2, 5)
        assert [v.id for v in rows] == ["p5", "p6"]

    def test_page_beyond_last_is_empty(self, repo, add_video):
        for i in range(3):
            add_video(f"p{i}", f"/data/p{i}.mp4", "pending")

        rows, total, page, page_size = repo.page(None, 5, 2)

        assert rows == []
        assert total == 3
        assert page == 5
        assert page_count(total, page_size) == 2

    def test_pages_do_not_overlap(self, repo, add_video):
        for i in range(25):
            add_video(f"v{i:02d}", "/data/same.mp4", "pending")

        seen = []
        for page in (1, 2, 3):
            rows, _, _, _ = repo.page(None, page, 10)
            seen.extend(v.id for v in rows)

        assert len(seen) == 25
        assert len(set(seen)) == 25

    def test_status_filter_is_bound_parameter(self, repo, add_video):
        add_video("a", "/data/a.mp4", "pending")

        rows, total, _, _ = repo.page("pending' OR '1'='1", 1, 10)

        assert rows == []
        assert total == 0
        assert repo.get_by_id("a") is not None

    def test_count_by_status(self, repo, add_video):
        add_video("a", "/data/a.mp4", "pending")
        add_video("b", "/data/b.mp4", "pending")
        add_video("c", "/data/c.mp4", "wait")

        counts = repo.count_by_status()

        assert counts == {"wait": 1, "pending": 2, "processing": 0, "completed": 0}
