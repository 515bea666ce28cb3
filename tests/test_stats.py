"""Stats aggregation"""
from datetime import datetime, timedelta, timezone

from safarsorted.schemas.inquiry import InquiryDocument, InquiryRecord
from safarsorted.services.stats import compute_stats

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _row(inquiry_id, status="new", age=timedelta(hours=1)):
    ts = NOW - age
    return InquiryRecord(
        id=inquiry_id, name="x", phone="9876543210", travelers=1, destination="Ooty",
        status=status, created_at=ts, updated_at=ts,
    )


def test_empty_store(store):
    stats = compute_stats(store, now=NOW)
    assert stats.model_dump(by_alias=True) == {
        "total": 0, "new": 0, "contacted": 0, "booked": 0, "thisWeek": 0,
    }


def test_counts_by_status(store):
    store.write(InquiryDocument(inquiries=[_row(1), _row(2), _row(3, "booked")], last_id=3))
    stats = compute_stats(store, now=NOW)
    assert (stats.total, stats.new, stats.contacted, stats.booked) == (3, 2, 0, 1)


def test_unknown_status_counts_only_in_total(store):
    store.write(InquiryDocument(inquiries=[_row(1, "archived"), _row(2, "contacted")], last_id=2))
    stats = compute_stats(store, now=NOW)
    assert stats.total == 2
    assert stats.contacted == 1
    assert stats.new == 0


def test_this_week_window(store):
    store.write(InquiryDocument(
        inquiries=[
            _row(1, age=timedelta(days=8)),
            _row(2, age=timedelta(days=1)),
            _row(3, age=timedelta(days=7)),  # exactly on the boundary counts
        ],
        last_id=3,
    ))
    assert compute_stats(store, now=NOW).this_week == 2
