"""
scrapbox-tabs error types.

Every failure in the session layer reaches the immediate caller as one of
these; none of them is fatal to the process.
"""

from typing import Any, Optional


class ScrapboxTabsError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class NotFound(ScrapboxTabsError):
    def __init__(self, key: str):
        super().__init__("not_found", f"Session {key} not found", {"key": key})
        self.key = key


class ConstructFailed(ScrapboxTabsError):
    def __init__(self, key: str, detail: str):
        super().__init__("construct_failed", f"Failed to create window {key}: {detail}", {"key": key})
        self.key = key


class FetchFailed(ScrapboxTabsError):
    def __init__(self, detail: str):
        super().__init__("fetch_failed", f"Failed to fetch pages: {detail}")


class RemoteRejected(ScrapboxTabsError):
    """Non-success HTTP status. Usually a private project and unusable cookies."""

    def __init__(self, status: int, authenticated: bool = False):
        attempt = "cookies were sent and rejected" if authenticated else "no cookies were available"
        super().__init__(
            "remote_rejected",
            f"API request failed with status {status} - this might be a private project "
            f"requiring authentication ({attempt})",
            {"status": status, "authenticated": authenticated},
        )
        self.status = status
        self.authenticated = authenticated


class DecodeFailed(ScrapboxTabsError):
    def __init__(self, detail: str):
        super().__init__("decode_failed", f"Failed to parse JSON: {detail}")
