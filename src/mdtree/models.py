"""Pydantic models for the document tree, conversion results, and the API."""

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# --- Inline spans ---


class _Node(BaseModel):
    """Base for tree nodes; nodes are immutable once built."""

    model_config = ConfigDict(frozen=True)


class TextSpan(_Node):
    """Plain text between (or instead of) recognized inline constructs."""

    type: Literal["text"] = "text"
    content: str


class BoldSpan(_Node):
    type: Literal["bold"] = "bold"
    content: str


class ItalicSpan(_Node):
    type: Literal["italic"] = "italic"
    content: str


class CodeSpan(_Node):
    type: Literal["code"] = "code"
    content: str


class LinkSpan(_Node):
    """A `[text](url)` link whose url is not http(s) (relative path, mailto, ...)."""

    type: Literal["link"] = "link"
    text: str
    url: str


class ExternalLinkSpan(_Node):
    """A `[text](url)` link pointing at an http:// or https:// url."""

    type: Literal["external_link"] = "external_link"
    text: str
    url: str


class InternalLinkSpan(_Node):
    """A `[[target]]` wikilink; text is the alias when one is given."""

    type: Literal["internal_link"] = "internal_link"
    text: str
    target_note: str = Field(
        serialization_alias="targetNote",
        validation_alias=AliasChoices("target_note", "targetNote"),
    )


Span = Annotated[
    TextSpan | BoldSpan | ItalicSpan | CodeSpan | LinkSpan | ExternalLinkSpan | InternalLinkSpan,
    Field(discriminator="type"),
]


# --- Blocks ---


class Heading(_Node):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    text: str


class Paragraph(_Node):
    """A paragraph line.

    Exactly one of ``text`` (a line with no inline markup) or ``spans`` is set.
    """

    type: Literal["paragraph"] = "paragraph"
    text: str | None = None
    spans: list[Span] | None = None

    @property
    def inline(self) -> list[Span]:
        """The paragraph as a span sequence, whichever form it was stored in."""
        if self.spans is not None:
            return list(self.spans)
        return [TextSpan(content=self.text or "")]


class CodeBlock(_Node):
    type: Literal["code_block"] = "code_block"
    language: str = "text"
    code: str
    fence: str = "```"


class Blockquote(_Node):
    type: Literal["blockquote"] = "blockquote"
    text: str


class HorizontalRule(_Node):
    type: Literal["horizontal_rule"] = "horizontal_rule"


class ListItem(_Node):
    """One list entry; stored like a Paragraph (plain text or spans)."""

    type: Literal["list_item"] = "list_item"
    text: str | None = None
    spans: list[Span] | None = None

    @property
    def inline(self) -> list[Span]:
        if self.spans is not None:
            return list(self.spans)
        return [TextSpan(content=self.text or "")]


class ListBlock(_Node):
    type: Literal["list"] = "list"
    ordered: bool
    items: list[ListItem]


Block = Annotated[
    Heading | Paragraph | CodeBlock | Blockquote | HorizontalRule | ListBlock,
    Field(discriminator="type"),
]


class Document(_Node):
    """Root of a converted document."""

    type: Literal["document"] = "document"
    children: list[Block] = Field(default_factory=list)


# --- Conversion result ---


class NoteMetadata(BaseModel):
    """Metadata derived from frontmatter and body.

    Frontmatter keys that are not consumed here are kept as extra fields.
    """

    model_config = ConfigDict(extra="allow", ser_json_bytes="base64")

    title: str = "Untitled Note"
    tags: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    wikilinks: list[str] = Field(default_factory=list)
    external_links: list[str] = Field(default_factory=list)
    word_count: int = Field(default=0, ge=0)
    reading_time: int = Field(default=1, ge=1)
    created_at: str  # ISO timestamp
    updated_at: str  # ISO timestamp


class ConversionStats(BaseModel):
    """Display statistics; jsonSize and processTime are not a format contract."""

    elements: int
    json_size: str = Field(
        serialization_alias="jsonSize",
        validation_alias=AliasChoices("json_size", "jsonSize"),
    )
    process_time: str = Field(
        serialization_alias="processTime",
        validation_alias=AliasChoices("process_time", "processTime"),
    )


class ConversionResult(BaseModel):
    """Everything a single conversion produces."""

    document: Document
    stats: ConversionStats
    metadata: NoteMetadata

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using the public (aliased) field names.

        Unset optional node fields are omitted from the document; metadata is
        dumped as is, so null frontmatter values are kept.
        """
        return {
            "document": self.document.model_dump(mode="json", by_alias=True, exclude_none=True),
            "stats": self.stats.model_dump(mode="json", by_alias=True),
            "metadata": self.metadata.model_dump(mode="json", by_alias=True),
        }


# --- Linting ---


class Autofix(BaseModel):
    """A text replacement over ``[start_index, end_index)`` of the source."""

    old_text: str
    new_text: str
    start_index: int
    end_index: int


class Finding(BaseModel):
    """A single lint result."""

    severity: Literal["error", "warning"]
    message: str
    line: int | None = None  # 1-based
    suggestion: str | None = None
    autofix: Autofix | None = None


class ValidationReport(BaseModel):
    is_valid: bool
    errors: list[Finding]
    warnings: list[Finding]


class MarkdownStats(BaseModel):
    """Rough editor statistics computed on the raw text."""

    characters: int
    words: int
    lines: int
    elements: int


# --- Persistence ---


class Conversion(BaseModel):
    """A stored conversion."""

    id: int
    markdown_content: str
    json_output: str
    created_at: str  # ISO timestamp


class NoteCreate(BaseModel):
    """Fields written when a note is created or updated."""

    title: str
    markdown_content: str
    json_output: str
    tags: str | None  # comma-joined
    wikilinks: str  # comma-joined
    word_count: int
    reading_time: int
    created_at: str
    updated_at: str


class Note(NoteCreate):
    """A stored note."""

    id: int


# --- API ---


class ConvertRequest(BaseModel):
    """Request body for the /convert and /validate endpoints."""

    markdown: str = Field(min_length=1)


class ConvertResponse(BaseModel):
    """Response body for /convert; mirrors ConversionResult.to_dict()."""

    document: dict[str, Any]
    stats: dict[str, Any]
    metadata: dict[str, Any]


class UploadResponse(ConvertResponse):
    markdown: str


class NoteSaveRequest(BaseModel):
    """Request body for creating (no id) or updating (id) a note."""

    id: int | None = None
    title: str = Field(min_length=1)
    markdown: str = Field(min_length=1)
    tags: list[str] | None = None


class NoteSaveResponse(ConvertResponse):
    note: Note


class NoteDetailResponse(BaseModel):
    note: Note
    backlinks: list[Note]


class NoteListResponse(BaseModel):
    notes: list[Note]


class ValidateResponse(BaseModel):
    report: ValidationReport
    stats: MarkdownStats
