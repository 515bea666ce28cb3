# safarsorted/services/stats.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from safarsorted.db.store import InquiryStore
from safarsorted.schemas.inquiry import InquiryStats

WEEK = timedelta(days=7)


def compute_stats(store: InquiryStore, now: Optional[datetime] = None) -> InquiryStats:
    """
    Dashboard counters from one fresh read of the store:
      - total / new / contacted / booked
      - thisWeek: created within the last 7 days
    """
    inquiries = store.read().inquiries
    now = now or datetime.now(timezone.utc)
    week_ago = now - WEEK

    by_status = {"new": 0, "contacted": 0, "booked": 0}
    this_week = 0
    for inquiry in inquiries:
        if inquiry.status in by_status:
            by_status[inquiry.status] += 1
        if inquiry.created_at >= week_ago:
            this_week += 1

    return InquiryStats(total=len(inquiries), this_week=this_week, **by_status)
