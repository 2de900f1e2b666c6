"""
Unit tests for the 'gwcli docs' commands.

The Docs API is replaced by the in-memory store from conftest and Drive
calls are mocked, so these tests check argument handling, output and exit
codes.
"""

import json

import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock

from gwcli.cli.__main__ import gwcli


def _invoke(*args, input=None):
    return CliRunner().invoke(gwcli, ["--account", "adc", *args], input=input)


class TestDocsWrite:

    def test_write_from_stdin(self, cli_store, doc_id):
        result = _invoke("docs", "write", doc_id, input="# Title\n\nBody **bold** text\n")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == f"wrote document {doc_id}"
        assert cli_store.text == "Title\n\nBody bold text\n\n\n"
        cli_store.factory.assert_called_once_with(account="adc")

    def test_write_from_file(self, cli_store, doc_id, tmp_path):
        source = tmp_path / "notes.md"
        source.write_text("- one\n- two", encoding="utf-8")

        result = _invoke("docs", "write", doc_id, "--file", str(source))

        assert result.exit_code == 0, result.output
        assert cli_store.text == "one\ntwo\n\n"
        assert len(cli_store.style_requests("createParagraphBullets")) == 2

    def test_write_json_output(self, cli_store, doc_id):
        result = CliRunner().invoke(gwcli, ["--account", "adc", "--json", "docs", "write", doc_id],
                                    input="hello")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"documentId": doc_id}

    def test_write_missing_file(self, cli_store, doc_id):
        result = _invoke("docs", "write", doc_id, "--file", "/nonexistent/notes.md")
        assert result.exit_code == 2
        assert cli_store.calls == []

    def test_append(self, make_store, monkeypatch, doc_id):
        store = make_store(text="existing\n")
        monkeypatch.setattr("gwcli.sdk.docs.GoogleDocsStore", MagicMock(return_value=store))

        result = _invoke("docs", "append", doc_id, input="## More")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == f"appended to document {doc_id}"
        assert store.text == "existing\nMore\n\n"

    def test_clear(self, make_store, monkeypatch, doc_id):
        store = make_store(text="old\ntext\n")
        monkeypatch.setattr("gwcli.sdk.docs.GoogleDocsStore", MagicMock(return_value=store))

        result = _invoke("docs", "clear", doc_id)

        assert result.exit_code == 0, result.output
        assert store.text == "\n"

    def test_unknown_document_exits_1(self, cli_store):
        result = _invoke("docs", "write", "another_document_id", input="x")

        assert result.exit_code == 1
        assert "doc not found or not a Google Doc (id=another_document_id)" in result.output

    def test_empty_doc_id_is_usage_error(self, cli_store):
        result = _invoke("docs", "write", "  ", input="x")

        assert result.exit_code == 2
        assert "empty docId" in result.output

    def test_local_path_is_rejected(self, cli_store):
        result = _invoke("docs", "append", "./notes.md", input="x")

        assert result.exit_code == 1
        assert "local path" in result.output

    def test_style_batch_failure_exits_1(self, make_store, monkeypatch, doc_id):
        store = make_store(fail_on_calls={2})
        monkeypatch.setattr("gwcli.sdk.docs.GoogleDocsStore", MagicMock(return_value=store))

        result = _invoke("docs", "write", doc_id, input="# Title")

        assert result.exit_code == 1
        assert "apply styles batch 1/1" in result.output
        assert store.text == "Title\n\n"

    def test_no_account_selected(self, cli_store, doc_id):
        result = CliRunner().invoke(gwcli, ["docs", "write", doc_id], input="x")

        assert result.exit_code == 1
        assert "No account selected" in result.output
        assert cli_store.calls == []

    def test_missing_scope(self, cli_store, doc_id, isolated_config):
        isolated_config["create_account"](
            "reader", scopes=["https://www.googleapis.com/auth/documents.readonly"]
        )

        result = CliRunner().invoke(gwcli, ["--account", "reader", "docs", "write", doc_id],
                                    input="x")

        assert result.exit_code == 1
        assert "Missing required scopes" in result.output


class TestDocsRead:

    def test_cat(self, make_store, monkeypatch, doc_id):
        store = make_store(text="line one\nline two\n")
        monkeypatch.setattr("gwcli.sdk.docs.GoogleDocsStore", MagicMock(return_value=store))

        result = _invoke("docs", "cat", doc_id)

        assert result.exit_code == 0
        assert result.output == "line one\nline two\n"

    def test_cat_max_bytes(self, make_store, monkeypatch, doc_id):
        store = make_store(text="line one\nline two\n")
        monkeypatch.setattr("gwcli.sdk.docs.GoogleDocsStore", MagicMock(return_value=store))

        result = _invoke("docs", "cat", doc_id, "--max-bytes", "4")

        assert result.output == "line"

    def test_info_text(self, cli_store, doc_id):
        result = _invoke("docs", "info", doc_id)

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == f"id\t{doc_id}"
        assert "name\tTest Doc" in lines
        assert "revision\trev-1" in lines

    def test_info_json(self, cli_store, doc_id):
        result = CliRunner().invoke(gwcli, ["-a", "adc", "--json", "docs", "info", doc_id])

        data = json.loads(result.output)
        assert data["file"]["id"] == doc_id
        assert data["file"]["mimeType"] == "application/vnd.google-apps.document"


class TestDriveBackedCommands:

    @pytest.fixture(autouse=True)
    def drive_service(self, monkeypatch):
        service = MagicMock()
        monkeypatch.setattr("gwcli.sdk.drive.get_drive_service", MagicMock(return_value=service))
        return service

    def test_create(self, monkeypatch):
        create = MagicMock(return_value={
            "id": "new_doc_id_0123", "name": "Plan",
            "mimeType": "application/vnd.google-apps.document",
        })
        monkeypatch.setattr("gwcli.sdk.drive.create_document", create)

        result = _invoke("docs", "create", "Plan", "--parent", "folder_0123456789")

        assert result.exit_code == 0, result.output
        assert "id\tnew_doc_id_0123" in result.output
        assert create.call_args.kwargs["parent_id"] == "folder_0123456789"

    def test_copy(self, monkeypatch, doc_id):
        copy_file = MagicMock(return_value={"id": "copy_id_0123456", "name": "Copy"})
        monkeypatch.setattr("gwcli.sdk.drive.copy_file", copy_file)

        result = CliRunner().invoke(gwcli, ["-a", "adc", "--json", "docs", "copy", doc_id, "Copy"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"file": {"id": "copy_id_0123456", "name": "Copy"}}
        assert copy_file.call_args.args == (doc_id, "Copy")

    def test_export(self, monkeypatch, doc_id):
        export = MagicMock(return_value={
            "id": doc_id, "name": "Plan", "mime_type": "text/plain",
            "file_path": "Plan.txt", "size": 12,
        })
        monkeypatch.setattr("gwcli.sdk.drive.export_file", export)

        result = _invoke("docs", "export", doc_id, "--format", "txt")

        assert result.exit_code == 0, result.output
        assert "path\tPlan.txt" in result.output
        assert export.call_args.kwargs["export_format"] == "txt"

    def test_export_rejects_unknown_format(self, doc_id):
        result = _invoke("docs", "export", doc_id, "--format", "odt")
        assert result.exit_code == 2

    def test_create_empty_title(self):
        result = _invoke("docs", "create", " ")
        assert result.exit_code == 2
        assert "empty title" in result.output
