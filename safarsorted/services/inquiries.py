# safarsorted/services/inquiries.py
from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone

from safarsorted.core.errors import NotFound, ValidationError
from safarsorted.db.store import InquiryStore
from safarsorted.schemas.inquiry import InquiryCreate, InquiryRecord, InquiryUpdate

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"\+?[0-9]{10,15}")
_WS_RE = re.compile(r"\s")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_phone(raw: str | None) -> str:
    """Drop every whitespace character; nothing else is rewritten."""
    return _WS_RE.sub("", raw or "")


def is_valid_phone(phone: str) -> bool:
    """Optional leading '+' followed by 10-15 digits."""
    return bool(PHONE_RE.fullmatch(phone))


def _parse_travelers(raw: int | float | str) -> int:
    """Leading whole number, so "3 people" is 3 and "2.5" is 2."""
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise ValidationError("Invalid number of travelers")
        return int(raw)
    match = _LEADING_INT_RE.match(raw)
    if not match:
        raise ValidationError("Invalid number of travelers")
    return int(match.group(1))


def submit_inquiry(store: InquiryStore, payload: InquiryCreate) -> InquiryRecord:
    """
    Validate a public form submission and append it to the store.
    - name, phone, travelers, destination are required (non-empty)
    - phone is whitespace-stripped before validation and stored that way
    - the id is always lastId + 1; callers never choose it
    """
    if not (payload.name and payload.phone and payload.travelers and payload.destination):
        raise ValidationError("Missing required fields")

    phone = normalize_phone(payload.phone)
    if not is_valid_phone(phone):
        raise ValidationError("Invalid phone number")

    travelers = _parse_travelers(payload.travelers)

    with store.transaction() as tx:
        doc = tx.document
        doc.last_id += 1
        now = _utcnow()
        inquiry = InquiryRecord(
            id=doc.last_id,
            name=payload.name,
            phone=phone,
            email=payload.email or "",
            travelers=travelers,
            destination=payload.destination,
            travel_date=payload.travel_date or None,
            traveler_type=payload.traveler_type or None,
            message=payload.message or "",
            status="new",
            notes=None,
            created_at=now,
            updated_at=now,
        )
        doc.inquiries.append(inquiry)
        tx.changed = True

    logger.info("New inquiry received: %s - %s", inquiry.name, inquiry.destination)
    return inquiry


def list_inquiries(store: InquiryStore) -> list[InquiryRecord]:
    """All inquiries, newest first (ties keep file order)."""
    return sorted(store.read().inquiries, key=lambda i: i.created_at, reverse=True)


def update_inquiry(store: InquiryStore, inquiry_id: int, payload: InquiryUpdate) -> InquiryRecord:
    """
    Admin edit of status/notes.
    - status: replaced only when a non-empty value is sent (any string accepted)
    - notes: replaced whenever the key is present, even as null or ""
    """
    with store.transaction() as tx:
        inquiry = next((i for i in tx.document.inquiries if i.id == inquiry_id), None)
        if inquiry is None:
            raise NotFound("Inquiry not found")

        if payload.status:
            inquiry.status = payload.status
        if "notes" in payload.model_fields_set:
            inquiry.notes = payload.notes
        inquiry.updated_at = _utcnow()
        tx.changed = True

    logger.info("Inquiry %s updated (status=%s)", inquiry.id, inquiry.status)
    return inquiry


def delete_inquiry(store: InquiryStore, inquiry_id: int) -> bool:
    """Remove by id. Returns False (and leaves the file untouched) when absent."""
    with store.transaction() as tx:
        before = len(tx.document.inquiries)
        tx.document.inquiries = [i for i in tx.document.inquiries if i.id != inquiry_id]
        removed = len(tx.document.inquiries) < before
        tx.changed = removed

    if removed:
        logger.info("Inquiry %s deleted", inquiry_id)
    return removed
