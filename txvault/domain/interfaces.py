"""Domain interfaces for persistence stores."""
from abc import ABC, abstractmethod
from typing import Optional

from txvault.domain.envelope.models import SecureRecord


class RecordStore(ABC):
    """Lookup table of secure records keyed by record id."""

    @abstractmethod
    def put(self, record: SecureRecord) -> None:
        """Store a new record. Raises KeyError if the id already exists."""
        ...

    @abstractmethod
    def get(self, record_id: str) -> Optional[SecureRecord]:
        """Return the record or None if absent."""
        ...
