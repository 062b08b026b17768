"""
Tests for the status-grouped queue projection.
"""
from videoqueue.services.queue_view import QueueViewService


def test_unfiltered_page_scenario(repo, add_video):
    for i in range(3):
        add_video(f"r{i}", f"/data/r{i}.mp4", "processing")
    for i in range(2):
        add_video(f"p{i}", f"/data/p{i}.mp4", "pending")

    view = QueueViewService(repo).snapshot(None, 1, 10)

    assert (view.total, view.pages, view.page, view.page_size) == (5, 1, 1, 10)
    assert [v.id for v in view.processing] == ["r0", "r1", "r2"]
    assert [v.id for v in view.pending] == ["p0", "p1"]
    assert view.completed == []


def test_wait_rows_are_counted_but_not_bucketed(repo, add_video):
    add_video("w", "/data/w.mp4", "wait")
    add_video("c", "/data/c.mp4", "completed")

    view = QueueViewService(repo).snapshot("", 1, 10)

    assert view.total == 2
    assert [v.id for v in view.completed] == ["c"]
    assert view.pending == [] and view.processing == []


def test_status_filter(repo, add_video):
    add_video("r", "/data/r.mp4", "processing")
    add_video("c1", "/data/c1.mp4", "completed")
    add_video("c2", "/data/c2.mp4", "completed")

    view = QueueViewService(repo).snapshot("completed", 1, 1)

    assert (view.total, view.pages) == (2, 2)
    assert [v.id for v in view.completed] == ["c1"]
    assert view.processing == []


def test_page_beyond_last_keeps_metadata(repo, add_video):
    for i in range(4):
        add_video(f"p{i}", f"/data/p{i}.mp4", "pending")

    view = QueueViewService(repo).snapshot(None, 9, 3)

    assert (view.total, view.pages, view.page) == (4, 2, 9)
    assert view.pending == [] and view.processing == [] and view.completed == []


def test_invalid_pagination_falls_back_to_defaults(repo, add_video):
    add_video("p", "/data/p.mp4", "pending")

    view = QueueViewService(repo).snapshot(None, "x", 500)

    assert (view.page, view.page_size, view.pages) == (1, 10, 1)


def test_snapshot_does_not_write(repo, add_video):
    add_video("p", "/data/p.mp4", "pending")
    before = repo.count_by_status()

    QueueViewService(repo).snapshot(None, 1, 10)

    assert repo.count_by_status() == before
