"""Rewrites legacy key/value-pair JSON columns into canonical objects."""

from dataclasses import dataclass, field
from typing import Any

import psycopg

from lexdocs.database.models import DocumentRecord
from lexdocs.database.repositories.documents_repository import DocumentsRepository
from lexdocs.documents.exceptions import DocumentNotFoundError
from lexdocs.documents.json_encoding import LegacyPairs, pairs_to_object, read_stored
from lexdocs.logging.logger import Log

# DocumentRecord attribute -> name used in reports
NORMALIZED_FIELDS = {"area_data": "areaData", "metadata": "metadata"}


@dataclass(frozen=True)
class FieldChange:
    before: Any
    after: dict[str, Any]


@dataclass(frozen=True)
class MetadataChangeReport:
    """Outcome of normalizing one document."""

    document_id: int
    file_name: str
    has_changes: bool
    changes: dict[str, FieldChange] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "documentId": self.document_id,
            "fileName": self.file_name,
            "hasChanges": self.has_changes,
            "changes": {
                name: {"before": change.before, "after": change.after}
                for name, change in self.changes.items()
            },
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class BatchSummary:
    processed_count: int
    changed_count: int
    failed_count: int
    results: list[MetadataChangeReport]

    @classmethod
    def from_reports(cls, reports: list[MetadataChangeReport]) -> "BatchSummary":
        failed = [r for r in reports if r.error is not None]
        changed = [r for r in reports if r.has_changes and r.error is None]
        return cls(
            processed_count=len(reports),
            changed_count=len(changed),
            failed_count=len(failed),
            results=reports,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "processedCount": self.processed_count,
            "changedCount": self.changed_count,
            "failedCount": self.failed_count,
            "results": [r.to_dict() for r in self.results],
        }


def convert_record(record: DocumentRecord) -> dict[str, FieldChange]:
    """Return the would-be change for every legacy-encoded column of a record."""
    changes: dict[str, FieldChange] = {}
    for attribute in NORMALIZED_FIELDS:
        before = getattr(record, attribute)
        stored = read_stored(before)
        if isinstance(stored, LegacyPairs):
            changes[attribute] = FieldChange(before=before, after=pairs_to_object(stored.pairs))
    return changes


class MetadataNormalizer:
    """Detects legacy key/value-pair encodings and rewrites them, single or batch.

    In dry-run mode nothing is persisted. In live mode every changed record is
    written on its own; a write failure is recorded on that record's report
    and the batch carries on.
    """

    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def normalize_document(
        self,
        document_id: int,
        dry_run: bool = False,
        include_changes: bool | None = None,
    ) -> MetadataChangeReport:
        """Normalize one document.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        record = self._doc_repo.find_by_id(document_id)
        if record is None:
            raise DocumentNotFoundError(f"Document with id {document_id} was not found.")
        return self._normalize_record(record, dry_run, _resolve(include_changes, dry_run))

    def normalize_all(
        self,
        dry_run: bool = False,
        limit: int | None = None,
        legacy_area_data: bool = False,
        legacy_metadata: bool = False,
        include_changes: bool | None = None,
    ) -> BatchSummary:
        records = self._doc_repo.find_many(
            limit=limit,
            legacy_area_data=legacy_area_data,
            legacy_metadata=legacy_metadata,
        )
        Log.info(f"Normalizing metadata for {len(records)} documents (dry_run={dry_run})")
        include = _resolve(include_changes, dry_run)
        summary = BatchSummary.from_reports(
            [self._normalize_record(record, dry_run, include) for record in records]
        )
        Log.info(
            f"Metadata normalization finished: processed={summary.processed_count} "
            f"changed={summary.changed_count} failed={summary.failed_count}"
        )
        return summary

    def _normalize_record(
        self,
        record: DocumentRecord,
        dry_run: bool,
        include_changes: bool,
    ) -> MetadataChangeReport:
        changes = convert_record(record)
        error = None
        if changes and not dry_run:
            error = self._persist(record.id, {name: c.after for name, c in changes.items()})
        return MetadataChangeReport(
            document_id=record.id,
            file_name=record.file_name,
            has_changes=bool(changes),
            changes=(
                {NORMALIZED_FIELDS[name]: c for name, c in changes.items()}
                if include_changes
                else {}
            ),
            error=error,
        )

    def _persist(self, document_id: int, updates: dict[str, Any]) -> str | None:
        try:
            self._doc_repo.update(document_id, updates)
        except (psycopg.Error, DocumentNotFoundError) as exc:
            Log.error(f"Failed to persist normalized metadata for document {document_id}: {exc}")
            return str(exc)
        Log.info(f"Normalized metadata for document {document_id}: {sorted(updates)}")
        return None


def _resolve(include_changes: bool | None, dry_run: bool) -> bool:
    return dry_run if include_changes is None else include_changes
