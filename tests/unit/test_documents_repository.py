from datetime import datetime
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from psycopg.types.json import Jsonb

from lexdocs.database.models import DocumentRecord
from lexdocs.database.repositories.documents_repository import DocumentsRepository
from lexdocs.documents.exceptions import DocumentNotFoundError

CONNECTION_PATH = "lexdocs.database.repositories.documents_repository.get_connection"


def _make_row(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": 1,
        "fileName": "brief.pdf",
        "title": "Smith v. Jones",
        "date": datetime(2023, 4, 5),
        "court": "Supreme Court",
        "caseNumber": "C-123/22",
        "summary": None,
        "caseType": "civil",
        "area": None,
        "metadata": {"originalFileName": "brief.pdf"},
        "areaData": [{"key": "court", "value": "X"}],
        "createdAt": datetime(2024, 1, 1),
        "updatedAt": datetime(2024, 1, 2),
    }
    row.update(overrides)
    return row


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestFindById:
    @patch(CONNECTION_PATH)
    def test_returns_record_when_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        result = DocumentsRepository().find_by_id(1)

        assert isinstance(result, DocumentRecord)
        assert result.file_name == "brief.pdf"
        assert result.case_number == "C-123/22"
        assert result.case_type == "civil"
        assert result.area_data == [{"key": "court", "value": "X"}]
        assert result.updated_at == datetime(2024, 1, 2)
        assert mock_cursor.execute.call_args.args[1] == (1,)

    @patch(CONNECTION_PATH)
    def test_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert DocumentsRepository().find_by_id(999) is None


class TestFindMany:
    @patch(CONNECTION_PATH)
    def test_no_filters(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [_make_row(), _make_row(id=2)]

        result = DocumentsRepository().find_many()

        query, params = mock_cursor.execute.call_args.args
        assert "WHERE" not in query
        assert "ORDER BY id" in query
        assert params == ()
        assert [r.id for r in result] == [1, 2]

    @patch(CONNECTION_PATH)
    def test_legacy_filters_are_or_combined(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = []

        DocumentsRepository().find_many(limit=5, legacy_area_data=True, legacy_metadata=True)

        query, params = mock_cursor.execute.call_args.args
        assert """jsonb_typeof("areaData") = 'array'""" in query
        assert "jsonb_typeof(metadata) = 'array'" in query
        assert " OR " in query
        assert query.rstrip().endswith("LIMIT %s")
        assert params == (5,)

    @patch(CONNECTION_PATH)
    def test_single_filter(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = []

        DocumentsRepository().find_many(legacy_metadata=True)

        query = mock_cursor.execute.call_args.args[0]
        assert "jsonb_typeof(metadata) = 'array'" in query
        assert "areaData\") = 'array'" not in query


class TestCreate:
    @patch(CONNECTION_PATH)
    def test_inserts_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        result = DocumentsRepository().create(
            {"file_name": "brief.pdf", "case_number": "C-1", "metadata": {"a": 1}}
        )

        query, params = mock_cursor.execute.call_args.args
        assert 'INSERT INTO "Document" ("fileName", "caseNumber", metadata' in query
        assert params[:2] == ("brief.pdf", "C-1")
        assert isinstance(params[2], Jsonb)
        mock_conn.commit.assert_called_once()
        assert result.id == 1

    def test_requires_file_name(self) -> None:
        with pytest.raises(ValueError, match="file_name"):
            DocumentsRepository().create({"title": "x"})


class TestUpdate:
    @patch(CONNECTION_PATH)
    def test_sets_fields_and_refreshes_timestamp(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(areaData={"court": "X"})

        result = DocumentsRepository().update(1, {"area_data": {"court": "X"}, "title": None})

        query, params = mock_cursor.execute.call_args.args
        assert '"areaData" = %s' in query
        assert "title = %s" in query
        assert '"updatedAt" = NOW()' in query
        assert isinstance(params[0], Jsonb)
        assert params[1:] == (None, 1)
        mock_conn.commit.assert_called_once()
        assert result.area_data == {"court": "X"}

    @patch(CONNECTION_PATH)
    def test_json_none_stored_as_null(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(metadata=None)

        DocumentsRepository().update(1, {"metadata": None})

        assert mock_cursor.execute.call_args.args[1] == (None, 1)

    @patch(CONNECTION_PATH)
    def test_raises_when_missing(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="Document with id 9 was not found"):
            DocumentsRepository().update(9, {"title": "x"})
        mock_conn.commit.assert_not_called()

    def test_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="Unknown document field"):
            with patch(CONNECTION_PATH):
                DocumentsRepository().update(1, {"judge": "x"})

    def test_rejects_empty_update(self) -> None:
        with pytest.raises(ValueError):
            DocumentsRepository().update(1, {})


class TestDelete:
    @patch(CONNECTION_PATH)
    def test_returns_deleted_row(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(id=3)

        assert DocumentsRepository().delete(3).id == 3
        mock_conn.commit.assert_called_once()

    @patch(CONNECTION_PATH)
    def test_raises_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError):
            DocumentsRepository().delete(3)
