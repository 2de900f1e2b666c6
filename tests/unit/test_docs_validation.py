import random
import string

import pytest

from gwcli.sdk.docs.validators import validate_doc_id
from gwcli.sdk.exceptions import InvalidDocIdError, LocalPathError, UsageError, ValidationError


def random_doc_id(length=44):
    """Build a random well-formed ID so no real document IDs live in the tests."""
    chars = string.ascii_letters + string.digits + "-_"
    return "".join(random.choice(chars) for _ in range(length))


class TestDocIdValidation:
    """Document ID checks shared by every docs operation."""

    def test_valid_ids_are_returned(self):
        for doc_id in [random_doc_id(44), random_doc_id(10), "Valid-ID_12345"]:
            assert validate_doc_id(doc_id) == doc_id

    def test_whitespace_is_stripped(self):
        assert validate_doc_id("  Valid-ID_12345\n") == "Valid-ID_12345"

    @pytest.mark.parametrize("doc_id", ["", "   ", "\t\n"])
    def test_empty_id_is_a_usage_error(self, doc_id):
        with pytest.raises(UsageError) as exc:
            validate_doc_id(doc_id)
        assert str(exc.value) == "empty docId"

    def test_empty_id_message_names_the_argument(self):
        with pytest.raises(UsageError, match="empty fileId"):
            validate_doc_id("", arg_name="fileId")

    @pytest.mark.parametrize("path", [
        "/tmp/file", "C:\\Users", "~/notes", "notes.md", "./local", "folder/sub",
    ])
    def test_local_paths_are_rejected(self, path):
        with pytest.raises(LocalPathError) as exc:
            validate_doc_id(path)
        assert "looks like a local path" in str(exc.value).lower()

    @pytest.mark.parametrize("doc_id", [
        "short", "has spaces in it", "bad!chars#here", random_doc_id(129), None,
    ])
    def test_malformed_ids_are_rejected(self, doc_id):
        with pytest.raises(InvalidDocIdError):
            validate_doc_id(doc_id)

    def test_errors_share_a_base_class(self):
        for cls in (UsageError, LocalPathError, InvalidDocIdError):
            assert issubclass(cls, ValidationError)
