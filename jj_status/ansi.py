"""
ANSI escape handling for jj-status.

jj and difftastic colorize their output with SGR escape sequences when
run with --color=always. This module turns such text into StyledText:
the plain characters plus a list of style spans that rich can render.
SGR decoding is delegated to rich's AnsiDecoder; every other escape
sequence is dropped before decoding so it never shows up as garbage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

from rich.ansi import AnsiDecoder
from rich.text import Span, Text

_ESCAPE_RE = re.compile(
    r"(\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)?"  # OSC, BEL or ST terminated
    r"|\x1b\[[0-?]*[ -/]*[@-~]"  # CSI
    r"|\x1b\[[0-?]*[ -/]*(?=\n|\Z)"  # CSI cut off at end of line
    r"|\x1b[ -/]*[0-~]"  # two-byte and nF escapes
    r"|\x1b)"
)
_SGR_RE = re.compile(r"\x1b\[[0-9;]*m\Z")
# C0 controls except tab and newline, plus DEL.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


@dataclass(frozen=True)
class StyleSpan:
    """A style applied to plain[start:end]."""

    start: int
    end: int
    style: str


@dataclass(frozen=True)
class StyledText:
    """
    Text with escape sequences replaced by style annotations.

    Spans are sorted by start offset, never overlap, and never empty.
    """

    plain: str
    spans: Tuple[StyleSpan, ...] = ()

    @classmethod
    def from_rich(cls, text: Text) -> "StyledText":
        spans = sorted(
            (
                StyleSpan(span.start, span.end, str(span.style))
                for span in text.spans
                if span.end > span.start
            ),
            key=lambda span: span.start,
        )
        return cls(text.plain, tuple(spans))

    def to_rich(self) -> Text:
        return Text(
            self.plain,
            spans=[Span(span.start, span.end, span.style) for span in self.spans],
        )

    def split_lines(self) -> List["StyledText"]:
        """
        Split on newlines, clipping spans to each line.

        A trailing newline yields a final empty line, mirroring
        str.split("\\n").
        """

        lines: List[StyledText] = []
        offset = 0
        for line in self.plain.split("\n"):
            end = offset + len(line)
            spans = tuple(
                StyleSpan(max(span.start, offset) - offset, min(span.end, end) - offset, span.style)
                for span in self.spans
                if span.start < end and span.end > offset
            )
            lines.append(StyledText(line, spans))
            offset = end + 1
        return lines


def _clean(text: str) -> str:
    """
    Keep SGR sequences, drop every other escape and stray control byte.
    """

    pieces = _ESCAPE_RE.split(text.replace("\r\n", "\n"))
    cleaned: List[str] = []
    # re.split with one capturing group alternates text and escapes.
    for index, piece in enumerate(pieces):
        if index % 2:
            if _SGR_RE.match(piece):
                cleaned.append(piece)
        else:
            cleaned.append(_CONTROL_RE.sub("", piece))
    return "".join(cleaned)


def normalize(text: str) -> StyledText:
    """
    Convert ANSI-colored text into StyledText.

    Plain input comes back unchanged with no spans. Line structure,
    including a trailing newline, is preserved. Color state carries
    across lines the way it does on a terminal.
    """

    cleaned = _clean(text)
    if "\x1b" not in cleaned:
        return StyledText(cleaned)

    decoder = AnsiDecoder()
    decoded = Text("\n").join(decoder.decode_line(line) for line in cleaned.split("\n"))
    return StyledText.from_rich(decoded)


def strip_ansi(text: str) -> str:
    return normalize(text).plain
