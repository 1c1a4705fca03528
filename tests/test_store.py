import threading
import time

import pytest

from santadraft.db import DraftStore, ReadWriteLock
from santadraft.services.drafts import create_draft


def make_draft(title, seed=1):
    return create_draft(title, "2026-12-24", [("A", 1), ("B", 1), ("C", 2), ("D", None)], seed=seed)


def test_store_assigns_ids_in_insertion_order():
    store = DraftStore()
    first = store.add_draft(make_draft("first"))
    second = store.add_draft(make_draft("second"))
    assert second.id > first.id
    assert [draft.title for draft in store.list_drafts()] == ["first", "second"]
    assert store.count() == 2


def test_store_round_trips_members_and_assignment():
    store = DraftStore()
    draft = make_draft("party", seed=8)
    stored = store.add_draft(draft)
    fetched = store.get_draft(stored.id)
    assert fetched.members == draft.members
    assert fetched.assignment.as_dict() == draft.assignment.as_dict()
    assert fetched.seed == 8
    assert fetched.attempts == draft.attempts


def test_store_keeps_64_bit_teams_and_seeds():
    store = DraftStore()
    draft = create_draft("big", "2026-12-24", [("A", 2**63 - 1), ("B", 0)], seed=-(2**63))
    fetched = store.get_draft(store.add_draft(draft).id)
    assert fetched.members == draft.members
    assert fetched.seed == -(2**63)


def test_missing_draft_is_none():
    assert DraftStore().get_draft(42) is None


def test_stores_are_isolated():
    first = DraftStore()
    second = DraftStore()
    first.add_draft(make_draft("only here"))
    assert first.count() == 1
    assert second.count() == 0
    assert second.list_drafts() == []


def test_stored_draft_cannot_be_added_twice():
    store = DraftStore()
    stored = store.add_draft(make_draft("party"))
    with pytest.raises(ValueError):
        store.add_draft(stored)


def test_concurrent_writers_all_land():
    store = DraftStore()
    threads = [
        threading.Thread(target=store.add_draft, args=(make_draft(f"draft-{index}", seed=index),))
        for index in range(10)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    drafts = store.list_drafts()
    assert len(drafts) == 10
    assert len({draft.id for draft in drafts}) == 10


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    with lock.read():
        with lock.read():
            assert lock.readers == 2
    assert lock.readers == 0


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    events = []

    def writer():
        with lock.write():
            events.append("write")

    lock.acquire_read()
    thread = threading.Thread(target=writer)
    thread.start()
    time.sleep(0.05)
    events.append("read done")
    lock.release_read()
    thread.join(timeout=2)
    assert events == ["read done", "write"]
    assert not lock.writing


def test_reader_waits_for_writer():
    lock = ReadWriteLock()
    events = []

    def reader():
        with lock.read():
            events.append("read")

    lock.acquire_write()
    thread = threading.Thread(target=reader)
    thread.start()
    time.sleep(0.05)
    events.append("write done")
    lock.release_write()
    thread.join(timeout=2)
    assert events == ["write done", "read"]
