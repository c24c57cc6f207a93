"""Exceptions raised while ingesting freight listings."""

from typing import Any, Dict, List, Optional


class FreightIngestError(Exception):
    """Base exception for ingestion errors"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "INGEST_ERROR"
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class RecordValidationError(FreightIngestError):
    """A listing failed one or more field checks"""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors), "VALIDATION_ERROR", {"errors": list(errors)})
        self.errors = list(errors)


class LocationResolutionError(FreightIngestError):
    """An address could not be found or geocoded"""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message, "RESOLUTION_ERROR")
        self.address = address
        if address is not None:
            self.details["address"] = address


class PersistenceError(FreightIngestError):
    """The store rejected an insert"""

    def __init__(self, message: str):
        super().__init__(message, "PERSISTENCE_ERROR")


class InputFileError(FreightIngestError):
    """The batch input is missing, unreadable or not a JSON array; aborts the run"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "INPUT_ERROR")
        self.path = path
