from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class DocumentRecord:
    """Represents a row from the "Document" table.

    metadata and area_data hold decoded JSONB values (dict, list, scalar or None).
    """

    id: int
    file_name: str
    title: str | None = None
    date: datetime | None = None
    court: str | None = None
    case_number: str | None = None
    summary: str | None = None
    case_type: str | None = None
    area: str | None = None
    metadata: Any = None
    area_data: Any = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
