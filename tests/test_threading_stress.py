"""
Threading Stress Test for the Store and EventBus.

Purpose: the web server handles requests on several threads that share one
Store and one EventBus.

Tests verify:
- Concurrent completions of one chore produce exactly one ledger record
- Concurrent writers never deadlock and never lose a row
- Concurrent publishers reach every subscriber without exceptions
"""

import threading

import pytest

from core.errors import ConflictError
from core.events_core import EventBus
from core.store import Store

THREAD_COUNT = 8
JOIN_TIMEOUT = 10


@pytest.fixture
def store(tmp_path):
    s = Store(str(tmp_path / "stress.db"))
    s.initialize()
    yield s
    s.close()


def run_threads(target, count=THREAD_COUNT):
    barrier = threading.Barrier(count)
    errors = []

    def worker(index):
        barrier.wait()
        try:
            target(index)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=JOIN_TIMEOUT)

    assert not any(t.is_alive() for t in threads), "Threads did not finish (deadlock?)"
    return errors


class TestConcurrentCompletion:
    def test_single_completion_wins(self, store):
        member_id = store.list_members()[0]["id"]
        chore_id = store.add_chore({"title": "Dishes", "points": 5})

        errors = run_threads(lambda _: store.complete_chore(chore_id, member_id))

        assert len(errors) == THREAD_COUNT - 1
        assert all(isinstance(e, ConflictError) for e in errors)
        assert store.count_completions(chore_id) == 1
        assert store.get_chore(chore_id)["status"] == "completed"
        assert store.member_points()[0]["total_points"] == 5

    def test_concurrent_writers_do_not_lose_rows(self, store):
        member_id = store.list_members()[0]["id"]

        def create_and_complete(index):
            chore_id = store.add_chore({"title": f"Chore {index}", "points": 1})
            store.complete_chore(chore_id, member_id)

        errors = run_threads(create_and_complete)

        assert errors == []
        assert len(store.list_chores()) == THREAD_COUNT
        assert len(store.list_completions()) == THREAD_COUNT


class TestConcurrentPublish:
    def test_all_events_delivered(self):
        per_thread = 50
        bus = EventBus(queue_size=THREAD_COUNT * per_thread)
        subscribers = [bus.subscribe() for _ in range(3)]

        def publish(index):
            for n in range(per_thread):
                bus.publish("chore-changed", {"id": index, "n": n})

        errors = run_threads(publish)

        assert errors == []
        for sub in subscribers:
            received = 0
            while sub.get(timeout=0.01) is not None:
                received += 1
            assert received == THREAD_COUNT * per_thread
            assert sub.dropped == 0
        bus.close()
