"""
Session events relayed from child windows to the coordinator.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SessionEvent:
    """Outbound event names."""
    SESSION_NAVIGATED = "session-navigated"
    SESSION_TITLE_UPDATED = "session-title-updated"


class NavigationEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    key: str
    uri: str
    title: Optional[str] = None  # trackers report before the page sets one
