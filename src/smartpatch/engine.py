"""High-level patch pipeline.

Runs one request end to end:

    extract_blocks -> lex_pattern + provider.tokenize -> find_offsets -> splice

Each call is a pure function of its inputs: nothing is cached and no
state survives between calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from smartpatch.config import PatchConfig, get_patch_config
from smartpatch.extract import extract_blocks
from smartpatch.location import SourceLocation
from smartpatch.matcher import MatchResult, find_offsets
from smartpatch.pattern import lex_pattern
from smartpatch.providers import TokenProvider, get_token_provider
from smartpatch.splicer import InsertStyle, detect_style, splice
from smartpatch.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PatchRequest:
    """One patch job: the target source and the two fragments.

    Attributes:
        source: Full text of the target file
        match_text: Match snippet
        patch_text: Replacement fragment

    """

    source: str
    match_text: str
    patch_text: str


@dataclass(frozen=True, slots=True)
class PatchResult:
    """Outcome of a successful patch.

    Attributes:
        text: The patched source
        match: Offsets located in the original source
        style: Insertion style used
        inserted: Span of the replacement within text

    """

    text: str
    match: MatchResult
    style: InsertStyle
    inserted: SourceLocation

    @property
    def insertion_offset(self) -> int:
        return self.match.insertion_offset


def apply_request(
    request: PatchRequest,
    *,
    provider: TokenProvider | None = None,
    config: PatchConfig | None = None,
) -> PatchResult:
    """Apply a PatchRequest.

    Args:
        request: Source and fragments
        provider: Source tokenizer (defaults to config.tokenizer)
        config: Overrides the active PatchConfig

    Raises:
        NoMatchFound, TokenNotFound, MissingInserter, SearchLimitExceeded
    """
    config = config or get_patch_config()
    if provider is None:
        provider = get_token_provider(config.tokenizer)

    pattern = lex_pattern(request.match_text)
    source_tokens = provider.tokenize(request.source)
    logger.debug(
        "Lexed %d pattern tokens, %d source tokens (%s)",
        len(pattern),
        len(source_tokens),
        provider.name,
    )

    match = find_offsets(source_tokens, pattern, len(request.source), config=config)
    style = detect_style(request.match_text)
    spliced = splice(request.source, match, request.patch_text, style)
    return PatchResult(text=spliced.text, match=match, style=style, inserted=spliced.inserted)


def apply_patch(
    source: str,
    match_text: str,
    patch_text: str,
    *,
    provider: TokenProvider | None = None,
    config: PatchConfig | None = None,
) -> PatchResult:
    """Patch source with a match snippet and a replacement fragment.

    Example:
        >>> apply_patch("int x;", "...\\n>>>", "int y;").text
        'int x;\\nint y;'
    """
    return apply_request(
        PatchRequest(source=source, match_text=match_text, patch_text=patch_text),
        provider=provider,
        config=config,
    )


def apply_document(
    source: str,
    document: str,
    *,
    provider: TokenProvider | None = None,
    config: PatchConfig | None = None,
    source_file: str | None = None,
) -> PatchResult:
    """Patch source with the match/patch sections of a markdown document.

    Raises:
        ExtractionError: If the document lacks a match or patch section
    """
    blocks = extract_blocks(document, source_file=source_file)
    return apply_patch(source, blocks.match, blocks.patch, provider=provider, config=config)
