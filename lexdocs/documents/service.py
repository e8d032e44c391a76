from typing import Any

from lexdocs.config.settings import Settings
from lexdocs.database.repositories.documents_repository import DocumentsRepository
from lexdocs.documents.codec import parse_json_field
from lexdocs.documents.exceptions import UnsupportedInputError, UsageError
from lexdocs.documents.merge import Provenance, merge_upload_fields
from lexdocs.documents.models import (
    UNSET,
    CreateDocumentInput,
    DocumentView,
    Unset,
    UpdateDocumentInput,
    UploadDocumentInput,
    supplied_fields,
)
from lexdocs.enrichment.base import BaseEnricher
from lexdocs.enrichment.factory import EnricherFactory
from lexdocs.enrichment.models import EnrichmentOutcome, EnrichmentResult, EnrichmentUnavailable
from lexdocs.extraction.base import ExtractionResult
from lexdocs.extraction.factory import ExtractorFactory
from lexdocs.extraction.file_kind import FileKind, detect_file_kind
from lexdocs.extraction.stream import UploadedFile
from lexdocs.logging.logger import Log

JSON_FIELD_LABELS = {"metadata": "metadata", "area_data": "areaData"}


class DocumentService:
    """Creates, reads, updates and deletes legal documents.

    Upload pipeline: classify -> extract -> enrich (optional) -> merge -> persist.
    """

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        extractors: ExtractorFactory,
        enricher: BaseEnricher,
    ) -> None:
        self._doc_repo = doc_repo
        self._extractors = extractors
        self._enricher = enricher

    def get_all_documents(self) -> list[DocumentView]:
        return [DocumentView.from_record(r) for r in self._doc_repo.find_many()]

    def get_document(self, document_id: int) -> DocumentView | None:
        record = self._doc_repo.find_by_id(document_id)
        return DocumentView.from_record(record) if record is not None else None

    def create_document(self, options: CreateDocumentInput) -> DocumentView:
        """Create a document from explicit fields only.

        Raises:
            UsageError: if file_name is blank.
            DataError: if metadata or area_data is not valid JSON.
        """
        file_name = (options.file_name or "").strip()
        if not file_name:
            raise UsageError("fileName must be provided.")

        record = self._doc_repo.create(
            {
                "file_name": file_name,
                "title": options.title,
                "date": options.date,
                "court": options.court,
                "case_number": options.case_number,
                "summary": options.summary,
                "case_type": options.case_type,
                "area": options.area,
                "metadata": parse_json_field("metadata", options.metadata),
                "area_data": parse_json_field("areaData", options.area_data),
            }
        )
        Log.info(f"Created document {record.id} ({record.file_name})")
        return DocumentView.from_record(record)

    def upload_document(
        self,
        upload: UploadedFile,
        options: UploadDocumentInput | None = None,
    ) -> DocumentView:
        """Create a document from an uploaded PDF or HTML file.

        Raises:
            UsageError: if the upload has no filename.
            UnsupportedInputError: if the file is neither PDF nor HTML.
            DataError: on invalid caller JSON or when extraction fails.
        """
        kind = detect_file_kind(upload.filename, upload.mimetype)
        if kind is FileKind.UNKNOWN:
            raise UnsupportedInputError("uploadDocument only supports PDF or HTML files.")

        explicit = supplied_fields(options or UploadDocumentInput())
        # a null metadata field adds nothing; provenance is stored regardless
        metadata = explicit.pop("metadata", UNSET)
        caller_metadata = UNSET if metadata is None else self._parse_supplied("metadata", metadata)
        caller_area_data = self._parse_supplied("area_data", explicit.pop("area_data", UNSET))

        extraction = self._extract(upload, kind)
        enrichment: EnrichmentOutcome = (
            self._enricher.enrich(extraction.text)
            if extraction.text
            else EnrichmentUnavailable("no text extracted")
        )
        if isinstance(enrichment, EnrichmentUnavailable):
            Log.info(f"Proceeding without AI metadata for {upload.filename}: {enrichment.reason}")

        provenance = Provenance(
            original_file_name=upload.filename,
            mime_type=upload.mimetype,
            raw_text=extraction.text or None,
            ai_extraction=enrichment.raw_json if isinstance(enrichment, EnrichmentResult) else None,
        )
        record = self._doc_repo.create(
            merge_upload_fields(
                file_name=upload.filename,
                explicit=explicit,
                caller_metadata=caller_metadata,
                caller_area_data=caller_area_data,
                enrichment=enrichment,
                provenance=provenance,
            )
        )
        Log.info(f"Created document {record.id} from upload {upload.filename} ({kind.value})")
        return DocumentView.from_record(record)

    def update_document(self, options: UpdateDocumentInput) -> DocumentView:
        """Apply a partial update; only supplied fields are touched.

        Raises:
            UsageError: if no field is supplied or file_name is blank.
            DataError: if metadata or area_data is not valid JSON.
            DocumentNotFoundError: if the document does not exist.
        """
        data: dict[str, Any] = {}
        for name, value in supplied_fields(options).items():
            if name == "file_name":
                file_name = (value or "").strip()
                if not file_name:
                    raise UsageError("fileName must be provided when updating.")
                data[name] = file_name
            elif name in JSON_FIELD_LABELS:
                if value is None:
                    data[name] = None
                elif value.strip():
                    data[name] = parse_json_field(JSON_FIELD_LABELS[name], value)
            else:
                data[name] = value

        if not data:
            raise UsageError("At least one field must be provided to update.")

        record = self._doc_repo.update(options.id, data)
        Log.info(f"Updated document {record.id}: {sorted(data)}")
        return DocumentView.from_record(record)

    def delete_document(self, document_id: int) -> DocumentView:
        """Raises DocumentNotFoundError if the document does not exist."""
        record = self._doc_repo.delete(document_id)
        Log.info(f"Deleted document {document_id}")
        return DocumentView.from_record(record)

    def _extract(self, upload: UploadedFile, kind: FileKind) -> ExtractionResult:
        extractor = self._extractors.for_kind(kind)
        stream = upload.open_stream()
        try:
            text = extractor.extract_stream(stream)
        finally:
            close = getattr(stream, "close", None)
            if callable(close):
                close()
        Log.info(f"Extracted {len(text)} chars from {upload.filename} ({kind.value})")
        return ExtractionResult(text=text, kind=kind)

    @staticmethod
    def _parse_supplied(name: str, value: str | None | Unset) -> Any:
        if value is UNSET or value is None:
            return value
        if not value.strip():
            return UNSET
        return parse_json_field(JSON_FIELD_LABELS[name], value)


def build_document_service(settings: Settings) -> DocumentService:
    """Build a DocumentService with all required adapters."""
    return DocumentService(
        doc_repo=DocumentsRepository(),
        extractors=ExtractorFactory(settings),
        enricher=EnricherFactory.create(settings),
    )
