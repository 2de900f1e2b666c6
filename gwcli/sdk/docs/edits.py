"""Build Google Docs batchUpdate requests from parsed markdown segments.

The whole text is inserted with a single ``insertText`` request and every
paragraph, list and emphasis style is addressed afterwards by absolute
index. Offsets are computed up front from the UTF-16 length of each
segment, so the document never has to be re-read between the two steps.
"""

import logging
from typing import List, Tuple, Sequence

from .markdown import Segment, utf16_len, NORMAL_TEXT, BULLET, NUMBERED
from ..exceptions import MalformedEditError

logger = logging.getLogger(__name__)

# The Docs API rejects batchUpdate calls with more requests than this
MAX_BATCH_REQUESTS = 50

BULLET_PRESETS = {
    BULLET: "BULLET_DISC_CIRCLE_SQUARE",
    NUMBERED: "NUMBERED_DECIMAL_NESTED",
}


def assemble(segments: Sequence[Segment], start_index: int) -> Tuple[str, List[Tuple[int, int]]]:
    """
    Concatenate segment texts and compute where each lands in the document.

    Args:
        segments: Parsed segments, in document order
        start_index: Document index the text will be inserted at

    Returns:
        Tuple of (text, positions) where positions[i] is the absolute
        (start, end) range of segments[i]
    """
    positions = []
    index = start_index
    for segment in segments:
        end = index + utf16_len(segment.text)
        positions.append((index, end))
        index = end
    return "".join(segment.text for segment in segments), positions


def _range(start: int, end: int) -> dict:
    if start < 1 or end <= start:
        raise MalformedEditError(f"invalid range [{start}, {end})")
    return {"startIndex": start, "endIndex": end}


def build_insert_request(text: str, index: int) -> dict:
    """Build the insertText request for the assembled text."""
    if index < 1:
        raise MalformedEditError(f"invalid insert index {index}")
    return {
        "insertText": {
            "location": {"index": index},
            "text": text,
        }
    }


def build_delete_request(start: int, end: int) -> dict:
    """Build a deleteContentRange request for [start, end)."""
    return {"deleteContentRange": {"range": _range(start, end)}}


def build_style_requests(segments: Sequence[Segment],
                         positions: Sequence[Tuple[int, int]]) -> List[dict]:
    """
    Build paragraph, list and emphasis style requests for assembled segments.

    For each segment, in order: an updateParagraphStyle for headings, a
    createParagraphBullets for list items, then one updateTextStyle per
    emphasis range.
    """
    if len(segments) != len(positions):
        raise MalformedEditError(
            f"{len(segments)} segments but {len(positions)} positions"
        )

    requests = []
    for segment, (start, end) in zip(segments, positions):
        if segment.style != NORMAL_TEXT:
            requests.append({
                "updateParagraphStyle": {
                    "range": _range(start, end),
                    "paragraphStyle": {"namedStyleType": segment.style},
                    "fields": "namedStyleType",
                }
            })

        if segment.list_kind:
            requests.append({
                "createParagraphBullets": {
                    "range": _range(start, end),
                    "bulletPreset": BULLET_PRESETS[segment.list_kind],
                }
            })

        for emphasis in segment.ranges:
            # Empty spans like "****" produce no style
            if emphasis.end == emphasis.start:
                continue
            requests.append({
                "updateTextStyle": {
                    "range": _range(start + emphasis.start, start + emphasis.end),
                    "textStyle": {emphasis.kind: True},
                    "fields": emphasis.kind,
                }
            })

    return requests


def chunk_requests(requests: Sequence[dict], batch_size: int = MAX_BATCH_REQUESTS) -> List[List[dict]]:
    """Split requests into consecutive batches of at most batch_size, preserving order."""
    if batch_size < 1:
        raise MalformedEditError(f"invalid batch size {batch_size}")
    return [list(requests[i:i + batch_size]) for i in range(0, len(requests), batch_size)]
