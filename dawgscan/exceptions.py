"""Exceptions raised by DawgScan.

Every error carries a machine-readable ``error_code``, an HTTP
``status_code`` for the API layer and a ``to_dict()`` rendering.
"""

from typing import Any, Dict, Optional


class DawgScanError(Exception):
    """Base exception for all DawgScan errors."""

    error_code: str = "DAWGSCAN_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        response = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class TargetUnavailableError(DawgScanError):
    """No page URL could be resolved for the scan."""

    error_code = "TARGET_UNAVAILABLE"
    status_code = 400

    def __init__(self, target: Optional[str], reason: str = "Could not retrieve the page URL"):
        super().__init__(f"{reason}: {target!r}", details={"target": target, "reason": reason})


class FetchFailedError(DawgScanError):
    """The header fetch returned a non-success status or never completed."""

    error_code = "FETCH_FAILED"
    status_code = 502

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        if status is not None:
            message = f"Failed to fetch headers: {status} {reason}".rstrip()
        else:
            message = f"Error fetching headers: {reason}"
        super().__init__(message, details={"url": url, "status": status, "reason": reason})
        self.url = url
        self.reason = reason
        self.status = status


class EvidenceCollectionError(DawgScanError):
    """A client-marker or cookie collector failed.

    The aggregator treats this as "no evidence"; it is logged, never reported.
    """

    error_code = "EVIDENCE_COLLECTION_FAILED"


class PreferenceError(DawgScanError):
    """Unknown scan toggle name."""

    error_code = "UNKNOWN_PREFERENCE"
    status_code = 400

    def __init__(self, name: str):
        super().__init__(f"Unknown scan preference: {name}", details={"name": name})
