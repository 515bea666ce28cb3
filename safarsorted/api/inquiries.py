# safarsorted/api/inquiries.py
import logging

from fastapi import APIRouter, Depends, Request, status

from safarsorted.core.deps import get_store, rate_limit
from safarsorted.core.errors import StorageError, ValidationError
from safarsorted.db.store import InquiryStore
from safarsorted.schemas.inquiry import InquiryCreate, InquiryCreated
from safarsorted.services.inquiries import submit_inquiry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["inquiries"])


async def _read_payload(request: Request) -> InquiryCreate:
    """The public form posts JSON, but plain form-encoded bodies work too."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            form = await request.form()
            return InquiryCreate.model_validate(dict(form))
        body = await request.body()
        if not body:
            return InquiryCreate()
        return InquiryCreate.model_validate_json(body)
    except ValueError:
        raise ValidationError("Invalid request body")


@router.post(
    "/inquiry",
    response_model=InquiryCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit)],
)
async def create_inquiry(request: Request, store: InquiryStore = Depends(get_store)):
    """
    Public travel inquiry form.
    - 400 on missing/invalid fields, 429 when the client IP is over its limit
    """
    payload = await _read_payload(request)
    try:
        inquiry = submit_inquiry(store, payload)
    except StorageError:
        logger.exception("Error submitting inquiry")
        raise StorageError("Failed to submit inquiry")
    return InquiryCreated(id=inquiry.id)
