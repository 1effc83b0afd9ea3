import logging

from models import OrderingMode
from services.queue_engine import QueueEngine


def _fill(engine, *contents):
    return [engine.insert(content) for content in contents]


def test_fifo_appends_and_lifo_prepends():
    fifo = QueueEngine(OrderingMode.FIFO)
    _fill(fifo, "A", "B", "C")
    assert fifo.contents() == ["A", "B", "C"]
    assert fifo.head.content == "A"

    lifo = QueueEngine(OrderingMode.LIFO)
    _fill(lifo, "A", "B", "C")
    assert lifo.contents() == ["C", "B", "A"]
    assert lifo.head.content == "C"


def test_duplicate_of_fifo_tail_is_suppressed(engine):
    _fill(engine, "A", "B")
    assert engine.insert("B") is None
    assert engine.contents() == ["A", "B"]


def test_duplicate_of_lifo_head_is_suppressed():
    engine = QueueEngine(OrderingMode.LIFO)
    _fill(engine, "A", "B")
    assert engine.insert("B") is None
    assert engine.contents() == ["B", "A"]


def test_only_the_boundary_item_counts_as_duplicate(engine):
    _fill(engine, "A", "B")
    # FIFO head is "A" but the boundary is the tail
    item = engine.insert("A")
    assert item is not None
    assert engine.contents() == ["A", "B", "A"]


def test_non_consecutive_repeat_creates_distinct_items(engine):
    first, _, third = _fill(engine, "A", "B", "A")
    assert third is not None
    assert first.content == third.content
    assert first.item_id != third.item_id
    assert first != third


def test_empty_queue_never_reports_duplicate(engine):
    assert not engine.is_duplicate("A")
    assert engine.insert("A") is not None


def test_mode_switch_reverses_and_is_its_own_inverse(engine):
    _fill(engine, "A", "B", "C")

    assert engine.set_ordering_mode(OrderingMode.LIFO) is True
    assert engine.contents() == ["C", "B", "A"]

    assert engine.set_ordering_mode(OrderingMode.FIFO) is True
    assert engine.contents() == ["A", "B", "C"]


def test_setting_same_mode_is_a_no_op(engine):
    _fill(engine, "A", "B")
    assert engine.set_ordering_mode(OrderingMode.FIFO) is False
    assert engine.contents() == ["A", "B"]


def test_advance_exact_match_pops_head(engine):
    _fill(engine, "A", "B")
    outcome = engine.advance("A")

    assert outcome.removed.content == "A"
    assert outcome.matched_head
    assert outcome.head.content == "B"
    assert outcome.republish
    assert engine.contents() == ["B"]


def test_advance_last_item_leaves_nothing_to_republish(engine):
    _fill(engine, "A")
    outcome = engine.advance("A")

    assert outcome.removed.content == "A"
    assert outcome.head is None
    assert not outcome.republish
    assert len(engine) == 0


def test_advance_mismatch_removes_matching_item_further_down(engine):
    _fill(engine, "A", "B", "C")
    outcome = engine.advance("B")

    assert outcome.removed.content == "B"
    assert not outcome.matched_head
    assert outcome.head.content == "A"
    assert outcome.republish
    assert engine.contents() == ["A", "C"]


def test_advance_mismatch_takes_first_match_only(engine):
    _fill(engine, "A", "B", "C", "B")
    engine.advance("B")
    assert engine.contents() == ["A", "C", "B"]


def test_advance_without_match_changes_nothing(engine):
    _fill(engine, "A", "B")
    outcome = engine.advance("Z")

    assert outcome.removed is None
    assert not outcome.republish
    assert engine.contents() == ["A", "B"]


def test_advance_on_empty_queue_is_a_no_op(engine):
    outcome = engine.advance("A")
    assert outcome.removed is None
    assert outcome.head is None


def test_remove_by_id(engine):
    _, b, _ = _fill(engine, "A", "B", "C")
    assert engine.remove(b.item_id) == b
    assert engine.contents() == ["A", "C"]
    assert engine.remove(b.item_id) is None


def test_remove_all(engine):
    _fill(engine, "A", "B")
    assert engine.remove_all() == 2
    assert len(engine) == 0
    assert engine.head is None


def test_duplicate_inserts_copy_after_item(engine):
    a, _ = _fill(engine, "A", "B")
    copy = engine.duplicate(a.item_id)

    assert copy.content == "A"
    assert copy.item_id != a.item_id
    assert engine.contents() == ["A", "A", "B"]
    assert engine.duplicate("missing") is None


def test_reorder_moves_item_to_target_index(engine):
    _fill(engine, "A", "B", "C")
    assert engine.reorder(2, 0)
    assert engine.contents() == ["C", "A", "B"]
    assert engine.head.content == "C"

    assert engine.reorder(0, 10)
    assert engine.contents() == ["A", "B", "C"]


def test_reorder_target_is_final_index_not_drop_offset(engine):
    _fill(engine, "A", "B", "C")
    assert engine.reorder(0, 2)
    assert engine.contents() == ["B", "C", "A"]

    assert engine.reorder(2, 1)
    assert engine.contents() == ["B", "A", "C"]


def test_reorder_rejects_out_of_range_source(engine):
    _fill(engine, "A", "B")
    assert engine.reorder(5, 0) is False
    assert engine.reorder(1, 1) is False
    assert engine.contents() == ["A", "B"]


def test_insert_logs_count_taken_with_the_item(engine, caplog):
    with caplog.at_level(logging.INFO, logger="services.queue_engine"):
        _fill(engine, "A", "B")

    captured = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Captured")]
    assert [message.endswith("(1 queued)") for message in captured] == [True, False]
    assert captured[1].endswith("(2 queued)")
    assert len(engine) == 2
    assert bool(engine)


def test_subscribers_receive_snapshots(engine):
    seen = []
    unsubscribe = engine.subscribe(seen.append)

    engine.insert("A")
    engine.insert("B")
    engine.set_ordering_mode(OrderingMode.LIFO)
    unsubscribe()
    engine.insert("C")

    assert [[item.content for item in snap.items] for snap in seen] == [
        ["A"],
        ["A", "B"],
        ["B", "A"],
    ]
    assert seen[-1].mode is OrderingMode.LIFO
    assert seen[-1].head.content == "B"


def test_failing_subscriber_does_not_block_others(engine):
    seen = []

    def broken(snapshot):
        raise RuntimeError("boom")

    engine.subscribe(broken)
    engine.subscribe(seen.append)
    engine.insert("A")

    assert len(seen) == 1
