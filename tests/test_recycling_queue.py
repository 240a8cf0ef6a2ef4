import threading

import pytest

from lritkit.recycling_queue import QueueClosedError, RecyclingQueue


def test_items_flow_and_are_recycled():
    queue = RecyclingQueue(2, list)
    item = queue.pop_for_write()
    item.append(1)
    queue.push_write(item)
    received = queue.pop_for_read()
    assert received is item
    assert received == [1]
    queue.push_read(received)
    assert queue.pop_for_write() is item
    assert queue.size() == 1


def test_creates_up_to_capacity():
    queue = RecyclingQueue(3, list)
    items = [queue.pop_for_write() for _ in range(3)]
    assert queue.size() == 3
    assert len({id(i) for i in items}) == 3


def test_reader_drains_after_close():
    queue = RecyclingQueue(2, list)
    item = queue.pop_for_write()
    queue.push_write(item)
    queue.close()
    assert queue.closed()
    assert queue.pop_for_read() is item
    assert queue.pop_for_read() is None


def test_writer_fails_after_close():
    queue = RecyclingQueue(1, list)
    item = queue.pop_for_write()
    queue.close()
    with pytest.raises(QueueClosedError):
        queue.pop_for_write()
    with pytest.raises(QueueClosedError):
        queue.push_write(item)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        RecyclingQueue(0, list)


def test_writer_waits_for_recycled_item():
    queue = RecyclingQueue(1, list)
    first = queue.pop_for_write()
    queue.push_write(first)
    got = []

    def writer():
        got.append(queue.pop_for_write())

    thread = threading.Thread(target=writer)
    thread.start()
    thread.join(timeout=0.1)
    assert thread.is_alive()
    queue.push_read(queue.pop_for_read())
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert got == [first] and got[0] is first
    assert queue.size() == 1


def test_blocked_reader_wakes_on_close():
    queue = RecyclingQueue(1, list)
    results = []
    thread = threading.Thread(target=lambda: results.append(queue.pop_for_read()))
    thread.start()
    thread.join(timeout=0.1)
    assert thread.is_alive()
    queue.close()
    thread.join(timeout=5)
    assert results == [None]