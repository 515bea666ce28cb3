# safarsorted/db/store.py
from __future__ import annotations

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError as SchemaError

from safarsorted.core.config import settings
from safarsorted.core.errors import StorageError
from safarsorted.schemas.inquiry import InquiryDocument, InquiryRecord

logger = logging.getLogger(__name__)


class StoreTransaction:
    """Handle given to a `with store.transaction()` block."""

    def __init__(self, document: InquiryDocument):
        self.document = document
        self.changed = False


class InquiryStore:
    """
    All inquiries live in one JSON file: {"inquiries": [...], "lastId": N}.
    Every call reads the file fresh; mutations rewrite it whole.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.RLock()

    def ensure_initialized(self) -> None:
        """Create the data directory and an empty document if missing."""
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.write(InquiryDocument())
                logger.info("Created empty inquiry store at %s", self.path)

    def read(self) -> InquiryDocument:
        """
        Return the stored document. A missing or unreadable file, non-JSON
        content, or a top level that isn't {"inquiries": [...], "lastId": int}
        is treated as "no data yet" and yields an empty document.
        Individual records that don't fit the schema are carried along
        untouched, so the next write doesn't drop them.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return InquiryDocument()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s (%s); starting from empty store", self.path, e)
            return InquiryDocument()

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Ignoring malformed store file %s: %s", self.path, e)
            return InquiryDocument()

        rows = data.get("inquiries") if isinstance(data, dict) else None
        last_id = data.get("lastId") if isinstance(data, dict) else None
        if not isinstance(rows, list) or not isinstance(last_id, int) or isinstance(last_id, bool):
            logger.warning("Ignoring store file %s: unexpected top-level layout", self.path)
            return InquiryDocument()

        doc = InquiryDocument()
        high_water = max(last_id, 0)
        for row in rows:
            try:
                record = InquiryRecord.model_validate(row)
            except SchemaError as e:
                logger.warning("Keeping unreadable inquiry as-is in %s: %s", self.path, e)
                doc._unparsed.append(row)
                row_id = row.get("id") if isinstance(row, dict) else None
                if isinstance(row_id, int) and not isinstance(row_id, bool):
                    high_water = max(high_water, row_id)
                continue
            doc.inquiries.append(record)
            high_water = max(high_water, record.id)

        doc.last_id = high_water
        return doc

    def write(self, document: InquiryDocument) -> None:
        """Replace the stored document (temp file + rename, never truncates in place)."""
        data = document.model_dump(mode="json", by_alias=True)
        data["inquiries"].extend(document._unparsed)
        payload = json.dumps(data, indent=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Could not write {self.path}") from e

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """
        Exclusive read-modify-write section. The document is written back on
        exit only if the block set `tx.changed`; an exception skips the write.
        """
        with self._lock:
            tx = StoreTransaction(self.read())
            yield tx
            if tx.changed:
                self.write(tx.document)


store = InquiryStore(settings.DATA_FILE)
