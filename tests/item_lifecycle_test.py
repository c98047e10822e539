import sys
import pathlib
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import pytest

from library_catalog import (
    AudioBookDetails,
    BookDetails,
    Capability,
    EMagazineDetails,
    FineManager,
    FinePolicy,
    InvalidArgument,
    ItemKind,
    LibraryItem,
)


def make_items():
    return [
        LibraryItem(1000, "Dune", "Frank Herbert", BookDetails(412)),
        LibraryItem(1001, "Becoming", "Michelle Obama", AudioBookDetails(19.5)),
        LibraryItem(1002, "National Geographic", "Various", EMagazineDetails(202)),
    ]


def test_new_items_are_available_with_zero_days():
    for it in make_items():
        assert it.available
        assert it.remaining_days == 0
        assert it.borrow_count == 0
        assert "Status: Available" in it.describe()


def test_borrow_sets_days_and_posts_fine():
    policy, fines = FinePolicy(10), FineManager()
    for it in make_items():
        ok, msg = it.borrow(5, policy, fines)
        assert ok
        assert not it.available
        assert it.remaining_days == 5
        assert it.borrow_count == 1
        assert "(5 days left)" in it.describe()
        assert fines.fine_for(it.item_id) == 50
        lines = msg.split("\n")
        assert len(lines) == 2
        assert lines[1] == "Due in 5 days | Fine/day = Rs.10"


def test_borrow_unavailable_item_changes_nothing():
    policy, fines = FinePolicy(10), FineManager()
    it = make_items()[0]
    it.borrow(3, policy, fines)
    before = (it.available, it.remaining_days, it.borrow_count, dict(fines.fines))

    ok, msg = it.borrow(7, policy, fines)

    assert not ok
    assert "not available" in msg
    assert (it.available, it.remaining_days, it.borrow_count, dict(fines.fines)) == before


def test_advance_goes_negative_without_clamping():
    policy, fines = FinePolicy(10), FineManager()
    it = make_items()[0]
    it.borrow(2, policy, fines)
    for _ in range(3):
        it.advance_one_day()
    assert it.remaining_days == -1
    assert it.is_overdue
    assert "Overdue!" in it.describe()
    assert "days left" not in it.describe()
    it.advance_one_day()
    assert it.remaining_days == -2


def test_advance_available_item_is_noop():
    it = make_items()[0]
    it.advance_one_day()
    assert it.available
    assert it.remaining_days == 0


def test_overdue_return_adds_penalty_on_top_of_borrow_fine():
    policy, fines = FinePolicy(10), FineManager()
    it = make_items()[1]
    it.borrow(5, policy, fines)
    assert fines.fine_for(it.item_id) == 50
    for _ in range(7):
        it.advance_one_day()
    assert it.remaining_days == -2

    ok, msg = it.return_item(fines)

    assert ok
    assert "overdue" in msg
    assert fines.fine_for(it.item_id) == 80
    assert it.available
    assert it.remaining_days == 0


def test_on_time_return_posts_nothing_more():
    policy, fines = FinePolicy(10), FineManager()
    it = make_items()[0]
    it.borrow(4, policy, fines)
    it.advance_one_day()

    ok, msg = it.return_item(fines)

    assert ok
    assert msg == "Returned \"Dune\" (ID=1000)"
    assert fines.fine_for(it.item_id) == 40
    assert it.available
    assert it.remaining_days == 0


def test_return_available_item_is_noop():
    fines = FineManager()
    it = make_items()[0]
    ok, _ = it.return_item(fines)
    assert not ok
    assert fines.fines == {}
    assert fines.total_purchases == 0


def test_mark_sold_only_touches_purchases():
    fines = FineManager()
    it = make_items()[2]
    ok, msg = it.mark_sold(250, fines)
    assert ok
    assert msg.startswith("Bought")
    assert not it.available
    assert it.borrow_count == 0
    assert fines.total_purchases == 250
    assert fines.fines == {}


def test_sold_item_leaves_circulation():
    policy, fines = FinePolicy(10), FineManager()
    it = make_items()[0]
    it.mark_sold(100, fines)
    assert "Status: Borrowed (0 days left)" in it.describe()
    it.advance_one_day()
    assert it.remaining_days == -1
    assert "Status: Overdue!" in it.describe()
    assert "Sold" not in it.describe()

    ok, _ = it.return_item(fines)
    assert not ok
    assert not it.available

    ok, _ = it.borrow(3, policy, fines)
    assert not ok
    assert fines.fines == {}


@pytest.mark.parametrize("days", [-1, "3", 2.5, True])
def test_uninterpretable_days_raise(days):
    it = make_items()[0]
    with pytest.raises(InvalidArgument):
        it.borrow(days, FinePolicy(10), FineManager())
    assert it.available


def test_negative_price_raises():
    fines = FineManager()
    it = make_items()[0]
    with pytest.raises(InvalidArgument):
        it.mark_sold(-5, fines)
    assert it.available
    assert fines.total_purchases == 0


def test_variants_carry_their_capability():
    book, audio, mag = make_items()
    assert (book.kind, book.capability) == (ItemKind.BOOK, Capability.NONE)
    assert (audio.kind, audio.capability) == (ItemKind.AUDIOBOOK, Capability.PLAYABLE)
    assert (mag.kind, mag.capability) == (ItemKind.EMAGAZINE, Capability.ARCHIVABLE)

    assert audio.play_sample() == (True, "Playing sample: Becoming")
    assert mag.archive() == (True, "Archiving Issue #202 of National Geographic")
    assert book.play_sample()[0] is False
    assert book.archive()[0] is False
    assert audio.archive()[0] is False


def test_describe_includes_variant_summary():
    book, audio, mag = make_items()
    assert book.describe() == "[Book] \"Dune\" by Frank Herbert | ID=1000 | Status: Available | 412p"
    assert audio.describe().endswith("| 19.5hrs")
    assert mag.describe().endswith("| Issue 202")


def test_policy_can_be_swapped():
    class FlatFine:
        def calculate(self, days):
            return 99

    fines = FineManager()
    it = make_items()[0]
    ok, msg = it.borrow(4, FlatFine(), fines)
    assert ok
    assert fines.fine_for(it.item_id) == 99
    assert "Fine/day = Rs.99" in msg
