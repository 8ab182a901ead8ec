"""
zhlint: lint and fix Chinese prose in Markdown

Checks punctuation width and the spacing between Chinese, Latin and
punctuation characters inside the prose of a Markdown document, and
produces a fixed copy that leaves all Markdown structure untouched.

Quick Start:
    >>> from zhlint import run
    >>> result = run("中文English混排,没有空格")
    >>> result.result
    '中文 English 混排，没有空格'
    >>> len(result.validations)
    3

Options:
    >>> from zhlint import Options, run
    >>> options = Options.from_dict({
    ...     "rules": {"fullwidth_punctuation": "“”"},
    ...     "hyperParsers": ["ignore", "hexo"],
    ... })
    >>> run('he said "hi"', options).result
    'he said “hi”'

Disabling:
    A document containing ``<!-- zhlint disabled -->`` is returned unchanged
    with ``disabled`` set.

Installation:
    pip install zhlint
"""

from zhlint.blocks import Block, BlockKind, HyperKind, HyperMark, RawKind, RawMark
from zhlint.config import (
    DEFAULT_RULES,
    NormalizedOptions,
    Options,
    get_options,
    normalize_options,
    options_context,
    reset_options,
    set_options,
)
from zhlint.errors import ConfigError, MaskingError, ZhlintError
from zhlint.ignore import IgnoredCase, parse_ignored_case
from zhlint.masking import MaskedSpan, MaskResult, MaskingPass, mask
from zhlint.pipeline import LintResult, run
from zhlint.reassemble import Piece
from zhlint.validation import Validation, ValidationTarget

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "run",
    "LintResult",
    "Piece",
    # Configuration
    "Options",
    "NormalizedOptions",
    "DEFAULT_RULES",
    "normalize_options",
    "get_options",
    "set_options",
    "reset_options",
    "options_context",
    # Masking
    "mask",
    "MaskingPass",
    "MaskResult",
    "MaskedSpan",
    # Blocks
    "Block",
    "BlockKind",
    "HyperKind",
    "HyperMark",
    "RawKind",
    "RawMark",
    # Validations
    "Validation",
    "ValidationTarget",
    # Case ignores
    "IgnoredCase",
    "parse_ignored_case",
    # Errors
    "ZhlintError",
    "MaskingError",
    "ConfigError",
    "__version__",
]
