"""
Document model and assembly for jj-status.

A Document is a small tree of Sections: a root holding one untitled
status section followed by one collapsible section per changed file.
Documents are values. A refresh assembles a brand new one and the
caller swaps it in; nothing here mutates a displayed document's content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Literal, Optional, Sequence

from .ansi import StyledText, normalize, strip_ansi
from .diff_parser import NO_CHANGES, PREAMBLE, RAW_OUTPUT, FileDiffRecord

# Labels that stand in for a file name and do not point at a real file.
PLACEHOLDER_IDENTIFIERS = frozenset({PREAMBLE, RAW_OUTPUT})

SectionKind = Literal["root", "status", "file"]


@dataclass(eq=False)
class Section:
    """
    A node in the document tree.

    kind tags the node; for file sections value holds the file
    identifier. Children keep a back-reference to their parent so the
    enclosing file can be found from any node.
    """

    kind: SectionKind
    title: Optional[str] = None
    body: StyledText = field(default_factory=lambda: StyledText(""))
    value: Optional[str] = None
    collapsed: bool = False
    parent: Optional["Section"] = field(default=None, repr=False)
    children: List["Section"] = field(default_factory=list, repr=False)

    @property
    def collapsible(self) -> bool:
        return self.kind == "file"

    def add_child(self, child: "Section") -> "Section":
        child.parent = self
        self.children.append(child)
        return child

    def toggle(self) -> None:
        if self.collapsible:
            self.collapsed = not self.collapsed

    def ancestors(self) -> Iterator["Section"]:
        """Yield this section and then each parent up to the root."""

        node: Optional[Section] = self
        while node is not None:
            yield node
            node = node.parent


@dataclass(frozen=True)
class DocumentLine:
    """One visible line of a rendered document."""

    text: StyledText
    section: Section
    is_title: bool = False


@dataclass(eq=False)
class Document:
    root: Section

    @property
    def status(self) -> Section:
        return self.root.children[0]

    @property
    def file_sections(self) -> List[Section]:
        return [child for child in self.root.children if child.kind == "file"]

    def expand_all(self) -> None:
        for section in self.file_sections:
            section.collapsed = False

    def collapse_all(self) -> None:
        for section in self.file_sections:
            section.collapsed = True

    def lines(self) -> List[DocumentLine]:
        """
        Return the visible lines in display order.

        Collapsed file sections contribute only their title line.
        """

        result: List[DocumentLine] = []
        for section in self.root.children:
            if section.title is not None:
                result.append(DocumentLine(StyledText(section.title), section, is_title=True))
            if section.collapsed or not section.body.plain:
                continue
            body_lines = section.body.split_lines()
            if len(body_lines) > 1 and not body_lines[-1].plain:
                body_lines.pop()
            result.extend(DocumentLine(line, section) for line in body_lines)
        return result

    def section_at(self, line_index: int) -> Optional[Section]:
        lines = self.lines()
        if 0 <= line_index < len(lines):
            return lines[line_index].section
        return None

    def line_at(self, line_index: int) -> Optional[DocumentLine]:
        lines = self.lines()
        if 0 <= line_index < len(lines):
            return lines[line_index]
        return None


def strip_duplicate_header(record: FileDiffRecord) -> str:
    """
    Drop the first body line when it repeats the file identifier.

    The identifier is already shown as the section title.
    """

    first, newline, rest = record.body.partition("\n")
    if record.file_identifier in strip_ansi(first):
        return rest
    return record.body


def assemble(status: StyledText, records: Sequence[FileDiffRecord]) -> Document:
    """
    Build a Document from a normalized status block and diff records.

    The status section comes first and is always expanded; each record
    becomes a collapsed file section titled with its identifier. The
    "No changes" placeholder names no file and adds no section. Other
    placeholder labels get a section whose value is None, so jumps from
    them find no file.
    """

    root = Section(kind="root")
    root.add_child(Section(kind="status", body=status))

    for record in records:
        if record.file_identifier == NO_CHANGES:
            continue
        value: Optional[str] = record.file_identifier
        if value in PLACEHOLDER_IDENTIFIERS:
            value = None
        root.add_child(
            Section(
                kind="file",
                title=record.file_identifier,
                body=normalize(strip_duplicate_header(record)),
                value=value,
                collapsed=True,
            )
        )

    return Document(root=root)
