"""
Unit test fixtures.

``FakeDocumentStore`` stands in for the Google Docs API. It keeps the body
text of one document, applies insertText and deleteContentRange requests
with UTF-16 addressing, and records style requests with their ranges so
tests can check the final document state.
"""

import copy
from unittest.mock import MagicMock

import pytest

from gwcli.sdk.docs.markdown import utf16_len
from gwcli.sdk.exceptions import DocumentNotFoundError, TransportError

DOC_ID = "doc_abcdefghij_0123456789"


def _units_to_pos(text: str, units: int) -> int:
    """Convert a UTF-16 offset into a Python string index."""
    count = 0
    for pos, ch in enumerate(text):
        if count >= units:
            return pos
        count += 2 if ord(ch) >= 0x10000 else 1
    return len(text)


class FakeDocumentStore:
    """In-memory DocumentStore for a single document."""

    def __init__(self, doc_id: str = DOC_ID, text: str = "\n", title: str = "Test Doc",
                 fail_on_calls=()):
        self.doc_id = doc_id
        self.title = title
        # Body text, always ending with the mandatory final newline
        self.text = text
        self.styles = []
        self.calls = []
        self.get_calls = []
        self.fail_on_calls = set(fail_on_calls)

    # DocumentStore interface

    def get(self, doc_id, fields=None):
        self.get_calls.append((doc_id, fields))
        self._check_id(doc_id)
        return self.document()

    def batch_update(self, doc_id, requests):
        self._check_id(doc_id)
        self.calls.append(copy.deepcopy(requests))
        if len(self.calls) in self.fail_on_calls:
            raise TransportError("HTTP 500: backend error")
        for request in requests:
            self._apply(request)
        return {"documentId": doc_id, "replies": [{} for _ in requests]}

    # Helpers for tests

    @property
    def end_index(self) -> int:
        return 1 + utf16_len(self.text)

    def document(self) -> dict:
        content = [{"endIndex": 1, "sectionBreak": {}}]
        index = 1
        for line in self.text.splitlines(keepends=True):
            end = index + utf16_len(line)
            content.append({
                "startIndex": index,
                "endIndex": end,
                "paragraph": {"elements": [{"textRun": {"content": line}}]},
            })
            index = end
        return {
            "documentId": self.doc_id,
            "title": self.title,
            "revisionId": "rev-1",
            "body": {"content": content},
        }

    def text_at(self, start: int, end: int) -> str:
        """Return the document text in the absolute range [start, end)."""
        lo = _units_to_pos(self.text, start - 1)
        hi = _units_to_pos(self.text, end - 1)
        return self.text[lo:hi]

    def style_requests(self, kind: str):
        return [r[kind] for r in self.styles if kind in r]

    # Internals

    def _check_id(self, doc_id):
        if doc_id != self.doc_id:
            raise DocumentNotFoundError(doc_id)

    def _apply(self, request):
        if "insertText" in request:
            index = request["insertText"]["location"]["index"]
            text = request["insertText"]["text"]
            if not 1 <= index < self.end_index:
                raise TransportError(f"HTTP 400: insert index {index} out of range")
            pos = _units_to_pos(self.text, index - 1)
            self.text = self.text[:pos] + text + self.text[pos:]
            self._shift_styles(index, utf16_len(text))
        elif "deleteContentRange" in request:
            rng = request["deleteContentRange"]["range"]
            start, end = rng["startIndex"], rng["endIndex"]
            if not 1 <= start < end < self.end_index:
                raise TransportError(f"HTTP 400: delete range [{start}, {end}) out of range")
            lo = _units_to_pos(self.text, start - 1)
            hi = _units_to_pos(self.text, end - 1)
            self.text = self.text[:lo] + self.text[hi:]
            self.styles = [r for r in self.styles
                           if not (start <= _range_of(r)[0] and _range_of(r)[1] <= end + 1)]
            self._shift_styles(end, start - end)
        else:
            start, end = _range_of(request)
            if not 1 <= start < end <= self.end_index:
                raise TransportError(f"HTTP 400: style range [{start}, {end}) out of range")
            self.styles.append(copy.deepcopy(request))

    def _shift_styles(self, at: int, delta: int):
        for request in self.styles:
            rng = next(iter(request.values()))["range"]
            if rng["startIndex"] >= at:
                rng["startIndex"] += delta
                rng["endIndex"] += delta


def _range_of(request: dict):
    rng = next(iter(request.values()))["range"]
    return rng["startIndex"], rng["endIndex"]


@pytest.fixture
def fake_store():
    """A FakeDocumentStore holding an empty document."""
    return FakeDocumentStore()


@pytest.fixture
def make_store():
    """Factory for FakeDocumentStore with custom text or failing calls."""
    return FakeDocumentStore


@pytest.fixture
def doc_id():
    return DOC_ID


@pytest.fixture
def cli_store(monkeypatch, fake_store):
    """Make the docs CLI use fake_store instead of the Docs API."""
    factory = MagicMock(return_value=fake_store)
    monkeypatch.setattr("gwcli.sdk.docs.GoogleDocsStore", factory)
    fake_store.factory = factory
    return fake_store
