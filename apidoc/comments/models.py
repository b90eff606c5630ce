"""Data models for triple-slash comment extraction."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from apidoc.config import Settings

ReferenceSink = Callable[[str], None]


def _ignore_reference(reference: str) -> None:
    pass


class CommentParseError(ValueError):
    """A documentation comment (or documentation file) is not well-formed XML."""


@dataclass
class ParserContext:
    """Per-comment options shared by every extraction call.

    Attributes:
        normalize: Trim each line of extracted content.
        preserve_raw_inline_comments: Skip rewriting of ``<see>``,
            ``<seealso>`` and ``<paramref>`` markup.
        reference_sink: Called once with every resolved reference id
            (kind prefix stripped).
    """

    normalize: bool = True
    preserve_raw_inline_comments: bool = False
    reference_sink: ReferenceSink = _ignore_reference

    @classmethod
    def from_settings(
        cls, settings: Settings, reference_sink: ReferenceSink | None = None
    ) -> ParserContext:
        return cls(
            normalize=settings.normalize,
            preserve_raw_inline_comments=settings.preserve_raw_inline_comments,
            reference_sink=reference_sink or _ignore_reference,
        )


@dataclass
class CrefInfo:
    """A resolved ``<exception>``, ``<see>`` or ``<seealso>`` entry."""

    type: str  # Reference id without the "T:" style prefix
    description: str | None = None


@dataclass
class ReferenceCollector:
    """Reference sink that remembers every id it is given, in order."""

    references: list[str] = field(default_factory=list)

    def __call__(self, reference: str) -> None:
        self.references.append(reference)

    @property
    def unique_references(self) -> list[str]:
        return list(dict.fromkeys(self.references))


@dataclass
class ParsedComment:
    """All documentation fields of one member.

    Every field is extracted independently, so nothing here says anything
    about the relative order of, say, a ``<see>`` and an ``<exception>``.
    """

    summary: str | None = None
    remarks: str | None = None
    returns: str | None = None
    example: str | None = None
    parameters: dict[str, str | None] = field(default_factory=dict)
    type_parameters: dict[str, str | None] = field(default_factory=dict)
    exceptions: list[CrefInfo] | None = None
    sees: list[CrefInfo] | None = None
    see_alsos: list[CrefInfo] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
