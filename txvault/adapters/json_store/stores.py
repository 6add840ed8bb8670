"""JSON File-based Store Implementations."""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from txvault.domain.envelope.models import SecureRecord
from txvault.domain.interfaces import RecordStore

logger = logging.getLogger(__name__)


class JsonRecordStore(RecordStore):
    """Keeps records in a single JSON file as {id: wire_record}.

    Records are already encrypted, so the file holds no plaintext. Writes
    go through a temp file and rename; there is no fsync or multi-process
    locking.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            return json.load(f)

    def _save(self, data: Dict[str, Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump(data, f, indent=2)
        tmp.replace(self.path)

    def put(self, record: SecureRecord) -> None:
        with self._lock:
            data = self._load()
            if record.id in data:
                raise KeyError(f"Record {record.id} already exists")
            data[record.id] = record.to_dict()
            self._save(data)
        logger.debug(f"Persisted record {record.id} to {self.path}")

    def get(self, record_id: str) -> Optional[SecureRecord]:
        with self._lock:
            raw = self._load().get(record_id)
        if raw is None:
            return None
        return SecureRecord.from_dict(raw)
