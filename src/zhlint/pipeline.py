"""Lint pipeline.

Sequences the stages for one document:

1. mask: blank out non-lintable sub-syntaxes (stops early when disabled)
2. extract: find lintable blocks and their marks
3. lint: run rule handlers over every block
4. reassemble: join fixed blocks with untouched gaps

Each stage completes before the next starts; every stage works with offsets
into the original text.

Thread Safety:
A run only touches state it creates. Documents can be linted in parallel,
one run per document.

"""

from __future__ import annotations

from dataclasses import dataclass

from zhlint.config import NormalizedOptions, Options, normalize_options
from zhlint.engine import lint_block
from zhlint.extractor import extract
from zhlint.ignore import find_ignored_ranges
from zhlint.masking import mask
from zhlint.reassemble import Piece, reassemble
from zhlint.utils.logger import get_logger
from zhlint.validation import Validation

__all__ = ["LintResult", "run"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LintResult:
    """Outcome of linting one document.

    Attributes:
        result: Fixed text; the input unchanged when disabled or clean
        validations: Absolute validations, ordered by edit offset
        disabled: Whether a disabling directive stopped the run
        pieces: Partition of the document into block and verbatim pieces
    """

    result: str
    validations: tuple[Validation, ...] = ()
    disabled: bool = False
    pieces: tuple[Piece, ...] = ()


def run(text: str, options: Options | NormalizedOptions | None = None) -> LintResult:
    """Lint and fix a Markdown document.

    Args:
        text: Document text
        options: Options, already normalized options, or None for the
            context default

    Returns:
        LintResult

    Raises:
        MaskingError: If a masking pass changes the text length

    Example:
        >>> run("你好,世界").result
        '你好，世界'

    """
    if isinstance(options, NormalizedOptions):
        normalized = options
    else:
        normalized = normalize_options(options)

    document = mask(text, normalized.passes)
    if document.disabled:
        logger.debug("document disabled, skipping lint")
        return LintResult(
            result=text,
            disabled=True,
            pieces=(Piece(0, len(text), text, False),),
        )

    ignored = find_ignored_ranges(
        text, (*normalized.ignored_cases, *document.ignored_cases)
    )
    blocks = extract(document.text, text, document.spans)
    results = [lint_block(block, normalized.handlers, ignored) for block in blocks]
    assembled = reassemble(text, results)
    validations = sorted(
        assembled.validations, key=lambda v: (v.edit_offset, v.offset)
    )
    logger.debug(
        "linted %d block(s), %d validation(s)", len(blocks), len(validations)
    )
    return LintResult(
        result=assembled.text,
        validations=tuple(validations),
        pieces=assembled.pieces,
    )
