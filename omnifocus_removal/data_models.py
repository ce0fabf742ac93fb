"""
Data models for OmniFocus item removal requests and their outcomes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator


class ItemType(str, Enum):
    TASK = "task"
    PROJECT = "project"


@dataclass
class RemovalRequest:
    item_type: Union[ItemType, str]
    id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        self.item_type = ItemType(self.item_type)
        for field in ("id", "name"):
            value = getattr(self, field)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{field} must be a string, got {type(value).__name__}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RemovalRequest":
        """Build a request from ``{"id", "name", "itemType"}`` (``item_type`` also accepted)."""
        item_type = data.get("itemType", data.get("item_type"))
        if item_type is None:
            raise ValueError("itemType is required")
        return cls(item_type=item_type, id=data.get("id"), name=data.get("name"))

    def has_identifier(self) -> bool:
        return bool(self.id) or bool(self.name)


@dataclass
class RemovalOutcome:
    success: bool
    id: Optional[str] = None
    name: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, item_id: str, name: str) -> "RemovalOutcome":
        return cls(success=True, id=item_id, name=name)

    @classmethod
    def failed(cls, error: str) -> "RemovalOutcome":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        for key in ("id", "name", "error"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


class RemovalPayload(BaseModel):
    """JSON object printed by the generated removal script."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    id: Optional[str] = None
    name: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_shape(self):
        if self.success and (self.id is None or self.name is None):
            raise ValueError("successful result must carry id and name")
        if not self.success and self.error is None:
            raise ValueError("failed result must carry error")
        return self

    def to_outcome(self) -> RemovalOutcome:
        if self.success:
            return RemovalOutcome.succeeded(self.id, self.name)
        return RemovalOutcome.failed(self.error)
