# statusdog/models.py
"""Data carried between the backend, local storage and the UI."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any

StatusCode = str


@dataclass
class SavedList:
    """A named list of status codes owned by the backend."""

    id: str
    name: str
    codes: list[StatusCode] = field(default_factory=list)
    created_at: str | None = None
    image_links: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedList":
        # The backend is Mongo-backed and names its key "_id"
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            name=data.get("name", ""),
            codes=[str(c) for c in data.get("codes") or []],
            created_at=data.get("createdAt"),
            image_links=list(data.get("imageLinks") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        data = {"_id": self.id, "name": self.name, "codes": list(self.codes), "createdAt": self.created_at}
        if self.image_links:
            data["imageLinks"] = list(self.image_links)
        return data

    def alternate_link(self, index: int) -> str | None:
        """Fallback image for the code at `index`, if the backend stored one."""
        if 0 <= index < len(self.image_links):
            return self.image_links[index] or None
        return None

    def without(self, code: StatusCode) -> "SavedList":
        """Copy of this list with every occurrence of `code` removed, keeping image links aligned."""
        kept = [(c, self.alternate_link(i)) for i, c in enumerate(self.codes) if c != code]
        links = [link or "" for _, link in kept] if self.image_links else []
        return SavedList(self.id, self.name, [c for c, _ in kept], self.created_at, links)

    @property
    def created_on(self) -> str:
        """Creation date for display, or the raw value when it isn't ISO formatted."""
        if not self.created_at:
            return "N/A"
        try:
            dt_object = datetime.datetime.fromisoformat(self.created_at.replace('Z', '+00:00'))
            return dt_object.strftime('%Y-%m-%d')
        except (ValueError, TypeError):
            return str(self.created_at)
