# safarsorted/api/admin.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from safarsorted.core.deps import get_store, require_admin
from safarsorted.core.errors import NotFound, StorageError
from safarsorted.db.store import InquiryStore
from safarsorted.schemas.inquiry import (
    InquiryDeleted,
    InquiryList,
    InquiryStats,
    InquiryUpdate,
    InquiryUpdated,
)
from safarsorted.services.inquiries import delete_inquiry, list_inquiries, update_inquiry
from safarsorted.services.stats import compute_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _parse_id(raw: str) -> int:
    # non-numeric ids can't match anything
    try:
        return int(raw)
    except ValueError:
        raise NotFound("Inquiry not found")


@router.get("/inquiries", response_model=InquiryList)
def admin_list_inquiries(store: InquiryStore = Depends(get_store)):
    """All inquiries, newest first."""
    try:
        return InquiryList(inquiries=list_inquiries(store))
    except StorageError:
        logger.exception("Error fetching inquiries")
        raise StorageError("Failed to fetch inquiries")


@router.put("/inquiries/{inquiry_id}", response_model=InquiryUpdated)
def admin_update_inquiry(
    inquiry_id: str,
    payload: Optional[InquiryUpdate] = None,
    store: InquiryStore = Depends(get_store),
):
    """
    Change status and/or notes.
    - status is free text (new / contacted / booked by convention)
    - sending "notes": null clears the notes
    """
    try:
        inquiry = update_inquiry(store, _parse_id(inquiry_id), payload or InquiryUpdate())
    except StorageError:
        logger.exception("Error updating inquiry %s", inquiry_id)
        raise StorageError("Failed to update inquiry")
    return InquiryUpdated(inquiry=inquiry)


@router.delete("/inquiries/{inquiry_id}", response_model=InquiryDeleted)
def admin_delete_inquiry(inquiry_id: str, store: InquiryStore = Depends(get_store)):
    try:
        removed = delete_inquiry(store, _parse_id(inquiry_id))
    except StorageError:
        logger.exception("Error deleting inquiry %s", inquiry_id)
        raise StorageError("Failed to delete inquiry")
    if not removed:
        raise NotFound("Inquiry not found")
    return InquiryDeleted()


@router.get("/stats", response_model=InquiryStats)
def admin_stats(store: InquiryStore = Depends(get_store)):
    try:
        return compute_stats(store)
    except StorageError:
        logger.exception("Error fetching stats")
        raise StorageError("Failed to fetch stats")
