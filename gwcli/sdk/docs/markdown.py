"""Markdown parsing for the Google Docs writer.

Turns markdown text into a list of ``Segment`` objects, one per input line.
Only a small subset of markdown is understood: ``#``/``##``/``###``
headings, ``-``/``*`` bullets, ``1.`` numbered items, ``**bold**``,
``*italic*``, blank lines and ``---`` (treated as a blank line). Anything
else is kept as literal text.

All offsets are UTF-16 code units, which is how the Docs API addresses
document text.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Paragraph named styles, as the Docs API spells them
NORMAL_TEXT = "NORMAL_TEXT"
HEADING_1 = "HEADING_1"
HEADING_2 = "HEADING_2"
HEADING_3 = "HEADING_3"

# List kinds
BULLET = "BULLET"
NUMBERED = "NUMBERED"

# Emphasis kinds, named after the TextStyle fields they set
BOLD = "bold"
ITALIC = "italic"

# Longest prefix first so "### " is not taken for "# "
HEADING_PREFIXES = (
    ("### ", HEADING_3),
    ("## ", HEADING_2),
    ("# ", HEADING_1),
)

BULLET_PREFIXES = ("- ", "* ")

HORIZONTAL_RULE = "---"


@dataclass
class EmphasisRange:
    """A bold or italic span, relative to the start of its segment's text."""
    start: int
    end: int
    kind: str


@dataclass
class Segment:
    """One paragraph of converted text, terminated by a newline."""
    text: str
    style: str = NORMAL_TEXT
    list_kind: Optional[str] = None
    ranges: List[EmphasisRange] = field(default_factory=list)


def utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units (astral characters count twice)."""
    return sum(2 if ord(ch) >= 0x10000 else 1 for ch in text)


def tokenize_line(line: str) -> Tuple[Optional[str], Optional[str], str]:
    """
    Classify a single line.

    Args:
        line: One line of markdown, without its newline

    Returns:
        Tuple of (style, list_kind, remaining_text). ``style`` is None for a
        paragraph break (blank line or ``---``).
    """
    line = line.rstrip("\r")
    trimmed = line.strip()

    if not trimmed or trimmed == HORIZONTAL_RULE:
        return None, None, ""

    style = NORMAL_TEXT
    text = line
    for prefix, heading in HEADING_PREFIXES:
        if trimmed.startswith(prefix):
            style = heading
            if text.startswith(prefix):
                text = text[len(prefix):]
            break

    list_kind = None
    if style == NORMAL_TEXT:
        if text.startswith(BULLET_PREFIXES):
            list_kind = BULLET
            text = text[2:]
        elif len(text) >= 3 and text[0] in "0123456789" and text[1:3] == ". ":
            list_kind = NUMBERED
            text = text[3:]

    return style, list_kind, text


def tokenize(markdown: str) -> List[Tuple[Optional[str], Optional[str], str]]:
    """Split markdown on newlines and classify every line, in order."""
    return [tokenize_line(line) for line in markdown.split("\n")]


def extract_spans(text: str) -> Tuple[str, List[EmphasisRange]]:
    """
    Strip bold/italic markers from text and record where the styled runs are.

    A ``**`` found at or before the next ``*`` opens bold; otherwise the
    ``*`` opens italic. A marker with no closing partner is kept as literal
    text.

    Returns:
        Tuple of (plain_text, ranges) with ranges in UTF-16 code units
    """
    parts = []
    ranges = []
    offset = 0
    rest = text

    while True:
        bold_at = rest.find("**")
        italic_at = rest.find("*")
        if bold_at == -1 and italic_at == -1:
            parts.append(rest)
            break

        if bold_at != -1 and bold_at <= italic_at:
            marker, kind, at = "**", BOLD, bold_at
        else:
            marker, kind, at = "*", ITALIC, italic_at

        before = rest[:at]
        parts.append(before)
        offset += utf16_len(before)

        rest = rest[at + len(marker):]
        close_at = rest.find(marker)
        if close_at == -1:
            parts.append(marker)
            offset += len(marker)
            continue

        inner = rest[:close_at]
        inner_len = utf16_len(inner)
        ranges.append(EmphasisRange(offset, offset + inner_len, kind))
        parts.append(inner)
        offset += inner_len
        rest = rest[close_at + len(marker):]

    return "".join(parts), ranges


def parse_markdown(markdown: str) -> List[Segment]:
    """
    Convert markdown text into segments, one per line.

    Example:
        >>> [s.text for s in parse_markdown("# Title\\n\\nBody")]
        ['Title\\n', '\\n', 'Body\\n']
    """
    segments = []
    for style, list_kind, text in tokenize(markdown):
        if style is None:
            segments.append(Segment(text="\n"))
            continue
        plain, ranges = extract_spans(text)
        segments.append(Segment(text=plain + "\n", style=style,
                                list_kind=list_kind, ranges=ranges))
    return segments
