import argparse
import json
import mimetypes
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from lexdocs.config.settings import Settings
from lexdocs.database.connection import close_pool, init_pool
from lexdocs.database.repositories.documents_repository import DocumentsRepository
from lexdocs.documents.exceptions import DocumentError
from lexdocs.documents.metadata_normalizer import MetadataNormalizer
from lexdocs.documents.models import UploadDocumentInput
from lexdocs.documents.service import build_document_service
from lexdocs.extraction.stream import UploadedFile
from lexdocs.logging.logger import Log

_UPLOAD_OPTIONS = (
    "title",
    "court",
    "case_number",
    "summary",
    "case_type",
    "area",
    "metadata",
    "area_data",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexdocs",
        description="Legal document ingestion and metadata maintenance",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    ingest = commands.add_parser("ingest", help="Create a document from a local PDF or HTML file")
    ingest.add_argument("path", type=Path, help="File to ingest")
    ingest.add_argument("--mime-type", default=None, help="Declared MIME type (guessed if omitted)")
    ingest.add_argument(
        "--date",
        type=datetime.fromisoformat,
        default=None,
        help="Explicit ISO 8601 date (overrides the AI value)",
    )
    for name in _UPLOAD_OPTIONS:
        ingest.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            default=None,
            help=f"Explicit {name} (overrides the AI value)",
        )

    normalize = commands.add_parser(
        "normalize-metadata",
        help="Convert legacy key/value-pair metadata into JSON objects",
    )
    target = normalize.add_mutually_exclusive_group(required=True)
    target.add_argument("--document-id", type=int, help="Process only this document")
    target.add_argument("--all", action="store_true", help="Process every candidate document")
    normalize.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without writing anything",
    )
    normalize.add_argument("--limit", type=int, default=None, help="Maximum documents to scan")
    normalize.add_argument(
        "--legacy-area-data",
        action="store_true",
        help="Only scan documents whose areaData is stored as an array",
    )
    normalize.add_argument(
        "--legacy-metadata",
        action="store_true",
        help="Only scan documents whose metadata is stored as an array",
    )
    return parser


def run_ingest(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    path: Path = args.path
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    mimetype = args.mime_type or mimetypes.guess_type(path.name)[0]
    upload = UploadedFile(
        filename=path.name,
        mimetype=mimetype,
        open_stream=lambda: path.open("rb"),
    )
    supplied = {name: getattr(args, name) for name in (*_UPLOAD_OPTIONS, "date")}
    options = UploadDocumentInput(
        **{name: value for name, value in supplied.items() if value is not None}
    )
    service = build_document_service(settings)
    return service.upload_document(upload, options).to_dict()


def run_normalize(args: argparse.Namespace) -> dict[str, Any]:
    normalizer = MetadataNormalizer(DocumentsRepository())
    if args.document_id is not None:
        return normalizer.normalize_document(args.document_id, dry_run=args.dry_run).to_dict()

    legacy_area_data, legacy_metadata = args.legacy_area_data, args.legacy_metadata
    if not legacy_area_data and not legacy_metadata:
        legacy_area_data = legacy_metadata = True
    return normalizer.normalize_all(
        dry_run=args.dry_run,
        limit=args.limit,
        legacy_area_data=legacy_area_data,
        legacy_metadata=legacy_metadata,
    ).to_dict()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool -> run command -> print JSON."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        if args.command == "ingest":
            result = run_ingest(args, settings)
        else:
            result = run_normalize(args)
    except (DocumentError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        close_pool()

    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
