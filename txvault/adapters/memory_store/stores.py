"""Memory Store Implementations."""
import logging
import threading
from typing import Dict, Optional

from txvault.domain.envelope.models import SecureRecord
from txvault.domain.interfaces import RecordStore

logger = logging.getLogger(__name__)


class MemoryRecordStore(RecordStore):
    """Process-local record store. Contents are lost on restart."""

    def __init__(self):
        self._records: Dict[str, SecureRecord] = {}
        self._lock = threading.Lock()

    def put(self, record: SecureRecord) -> None:
        with self._lock:
            if record.id in self._records:
                raise KeyError(f"Record {record.id} already exists")
            self._records[record.id] = record

    def get(self, record_id: str) -> Optional[SecureRecord]:
        # SecureRecord is frozen, no copy needed
        with self._lock:
            return self._records.get(record_id)
