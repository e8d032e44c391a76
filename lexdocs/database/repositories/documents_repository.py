from collections.abc import Mapping
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from lexdocs.database.connection import get_connection
from lexdocs.database.models import DocumentRecord
from lexdocs.documents.exceptions import DocumentNotFoundError

# DocumentRecord attribute -> quoted column of the "Document" table
COLUMNS: dict[str, str] = {
    "file_name": '"fileName"',
    "title": "title",
    "date": "date",
    "court": "court",
    "case_number": '"caseNumber"',
    "summary": "summary",
    "case_type": '"caseType"',
    "area": "area",
    "metadata": "metadata",
    "area_data": '"areaData"',
}
JSON_FIELDS = frozenset({"metadata", "area_data"})

_SELECT_COLUMNS = (
    'id, "fileName", title, date, court, "caseNumber", summary, "caseType", '
    'area, metadata, "areaData", "createdAt", "updatedAt"'
)


class DocumentsRepository:
    """Database operations for the "Document" table."""

    def create(self, fields: Mapping[str, Any]) -> DocumentRecord:
        """Insert a document and return the stored row."""
        if "file_name" not in fields:
            raise ValueError("file_name is required to create a document")
        names = list(fields)
        columns = ", ".join(self._column(name) for name in names)
        placeholders = ", ".join(["%s"] * len(names))
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO "Document" ({columns}, "createdAt", "updatedAt")
                    VALUES ({placeholders}, NOW(), NOW())
                    RETURNING {_SELECT_COLUMNS}
                    """,
                    self._params(fields, names),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT did not return the created document")
        return self._to_record(row)

    def find_by_id(self, document_id: int) -> DocumentRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f'SELECT {_SELECT_COLUMNS} FROM "Document" WHERE id = %s',
                    (document_id,),
                )
                row = cur.fetchone()

        return self._to_record(row) if row is not None else None

    def find_many(
        self,
        limit: int | None = None,
        legacy_area_data: bool = False,
        legacy_metadata: bool = False,
    ) -> list[DocumentRecord]:
        """List documents ordered by id.

        The legacy_* filters keep only rows whose JSON column is stored as an
        array (the key/value pairs encoding). When both are set a row matches
        if either column is array-shaped.
        """
        conditions: list[str] = []
        if legacy_area_data:
            conditions.append("""jsonb_typeof("areaData") = 'array'""")
        if legacy_metadata:
            conditions.append("jsonb_typeof(metadata) = 'array'")

        query = f'SELECT {_SELECT_COLUMNS} FROM "Document"'
        params: list[Any] = []
        if conditions:
            query += " WHERE " + " OR ".join(conditions)
        query += " ORDER BY id"
        if limit is not None:
            query += " LIMIT %s"
            params.append(limit)

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, tuple(params))
                rows = cur.fetchall()

        return [self._to_record(row) for row in rows]

    def update(self, document_id: int, fields: Mapping[str, Any]) -> DocumentRecord:
        """Set the given fields and refresh updatedAt.

        An explicit None clears the column.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        if not fields:
            raise ValueError("At least one field is required to update a document")
        names = list(fields)
        assignments = ", ".join(f"{self._column(name)} = %s" for name in names)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE "Document"
                    SET {assignments}, "updatedAt" = NOW()
                    WHERE id = %s
                    RETURNING {_SELECT_COLUMNS}
                    """,
                    (*self._params(fields, names), document_id),
                )
                row = cur.fetchone()
                if row is None:
                    raise DocumentNotFoundError(f"Document with id {document_id} was not found.")
            conn.commit()

        return self._to_record(row)

    def delete(self, document_id: int) -> DocumentRecord:
        """Delete a document and return the removed row.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f'DELETE FROM "Document" WHERE id = %s RETURNING {_SELECT_COLUMNS}',
                    (document_id,),
                )
                row = cur.fetchone()
                if row is None:
                    raise DocumentNotFoundError(f"Document with id {document_id} was not found.")
            conn.commit()

        return self._to_record(row)

    @staticmethod
    def _column(name: str) -> str:
        try:
            return COLUMNS[name]
        except KeyError:
            raise ValueError(f"Unknown document field '{name}'") from None

    @staticmethod
    def _params(fields: Mapping[str, Any], names: list[str]) -> tuple[Any, ...]:
        params: list[Any] = []
        for name in names:
            value = fields[name]
            if name in JSON_FIELDS and value is not None:
                value = Jsonb(value)
            params.append(value)
        return tuple(params)

    @staticmethod
    def _to_record(row: dict[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            id=row["id"],
            file_name=row["fileName"],
            title=row["title"],
            date=row["date"],
            court=row["court"],
            case_number=row["caseNumber"],
            summary=row["summary"],
            case_type=row["caseType"],
            area=row["area"],
            metadata=row["metadata"],
            area_data=row["areaData"],
            created_at=row["createdAt"],
            updated_at=row["updatedAt"],
        )
