"""Data models for action handler results."""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel


class VanAction(BaseModel):
    """One selectable action in the UI catalog.

    `details` is the JSON body later posted to VAN when a texter picks it.
    """
    name: str
    details: str


class AvailabilityResult(BaseModel):
    """Whether the handler can be used by an organization."""
    result: bool
    expires_seconds: int = 86400

    def to_dict(self) -> dict:
        """Serialize in the host's camelCase shape."""
        return {"result": self.result, "expiresSeconds": self.expires_seconds}


class ClientChoiceData(BaseModel):
    """Action catalog handed to the UI.

    `data` is a JSON string holding either `{"items": [...]}` or
    `{"error": "..."}`. Error results carry no expiry so the host does not
    cache them.
    """
    data: str
    expires_seconds: Optional[int] = None

    @property
    def parsed(self) -> dict[str, Any]:
        return json.loads(self.data)

    @property
    def is_error(self) -> bool:
        return "error" in self.parsed

    def to_dict(self) -> dict:
        """Serialize in the host's camelCase shape, omitting unset expiry."""
        result: dict[str, Any] = {"data": self.data}
        if self.expires_seconds is not None:
            result["expiresSeconds"] = self.expires_seconds
        return result
