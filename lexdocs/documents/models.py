from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from lexdocs.database.models import DocumentRecord
from lexdocs.documents.codec import stringify_json


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET
"""Marks a field the caller did not supply, as opposed to an explicit None."""

Unset = Literal[_Unset.UNSET]


@dataclass(frozen=True)
class CreateDocumentInput:
    """Explicit create: every business field is a value or None.

    metadata and area_data are JSON-encoded strings.
    """

    file_name: str
    title: str | None = None
    date: datetime | None = None
    court: str | None = None
    case_number: str | None = None
    summary: str | None = None
    case_type: str | None = None
    area: str | None = None
    metadata: str | None = None
    area_data: str | None = None


@dataclass(frozen=True)
class UploadDocumentInput:
    """Caller overrides for an upload; UNSET fields fall back to AI values."""

    title: str | None | Unset = UNSET
    date: datetime | None | Unset = UNSET
    court: str | None | Unset = UNSET
    case_number: str | None | Unset = UNSET
    summary: str | None | Unset = UNSET
    case_type: str | None | Unset = UNSET
    area: str | None | Unset = UNSET
    metadata: str | None | Unset = UNSET
    area_data: str | None | Unset = UNSET


@dataclass(frozen=True)
class UpdateDocumentInput:
    """Partial update: only fields that are not UNSET are touched."""

    id: int
    file_name: str | None | Unset = UNSET
    title: str | None | Unset = UNSET
    date: datetime | None | Unset = UNSET
    court: str | None | Unset = UNSET
    case_number: str | None | Unset = UNSET
    summary: str | None | Unset = UNSET
    case_type: str | None | Unset = UNSET
    area: str | None | Unset = UNSET
    metadata: str | None | Unset = UNSET
    area_data: str | None | Unset = UNSET


def supplied_fields(value: UploadDocumentInput | UpdateDocumentInput) -> dict[str, Any]:
    """Return the fields the caller supplied, explicit None included."""
    return {
        f.name: getattr(value, f.name)
        for f in fields(value)
        if f.name != "id" and getattr(value, f.name) is not UNSET
    }


@dataclass(frozen=True)
class DocumentView:
    """A document as returned to callers, with JSON columns rendered as strings."""

    id: int
    file_name: str
    title: str | None
    date: datetime | None
    court: str | None
    case_number: str | None
    summary: str | None
    case_type: str | None
    area: str | None
    metadata: str | None
    area_data: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentView":
        return cls(
            id=record.id,
            file_name=record.file_name,
            title=record.title,
            date=record.date,
            court=record.court,
            case_number=record.case_number,
            summary=record.summary,
            case_type=record.case_type,
            area=record.area,
            metadata=stringify_json(record.metadata),
            area_data=stringify_json(record.area_data),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "title": self.title,
            "date": _isoformat(self.date),
            "court": self.court,
            "caseNumber": self.case_number,
            "summary": self.summary,
            "caseType": self.case_type,
            "area": self.area,
            "metadata": self.metadata,
            "areaData": self.area_data,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
