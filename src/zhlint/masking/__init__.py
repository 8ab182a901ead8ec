"""Masking passes for zhlint.

Masking blanks out sub-languages that must not be linted (templating tags,
framework containers) before the Markdown parser sees the document. Each
pass replaces every match with filler characters of exactly the same length
and records a MaskedSpan so the extractor can reinject the region as an
opaque raw mark.

Built-in passes, in default order:
- ignore: ``<!-- zhlint disabled -->`` and ``<!-- zhlint ignore: ... -->``
- hexo: ``{% tag %}...{% endtag %}`` blocks
- vuepress: ``::: name`` / ``:::`` container markers

Usage:
    >>> from zhlint.masking import get_pass, mask
    >>> doc = mask("{% note %}x{% endnote %}", [get_pass("hexo")])
    >>> doc.text
    '@@@@@@@@@@@@@@@@@@@@@@@@'

Invariant:
    ``len(pass(text).text) == len(text)`` for every pass. ``mask`` checks it
    after each pass and raises MaskingError on violation.

Thread Safety:
All built-in passes are stateless. Multiple threads can share instances.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from zhlint.errors import MaskingError
from zhlint.utils.logger import get_logger

if TYPE_CHECKING:
    from zhlint.ignore import IgnoredCase

__all__ = [
    "FILLER",
    "MaskedSpan",
    "MaskResult",
    "MaskedDocument",
    "MaskingPass",
    "FunctionPass",
    "BUILTIN_PASSES",
    "register_pass",
    "get_pass",
    "fill",
    "mask",
]

logger = get_logger(__name__)

FILLER = "@"


@dataclass(frozen=True, slots=True)
class MaskedSpan:
    """A region of the text that a pass replaced with filler.

    Attributes:
        name: Short name of the masked construct (e.g. the hexo tag name)
        meta: Pass-qualified label (e.g. ``hexo-note``)
        index: Absolute start offset
        length: Length of the region, identical before and after masking
        original_text: The text that was masked
    """

    name: str
    meta: str
    index: int
    length: int
    original_text: str

    @property
    def end(self) -> int:
        return self.index + self.length


@dataclass(frozen=True, slots=True)
class MaskResult:
    """Output of a single masking pass."""

    text: str
    spans: tuple[MaskedSpan, ...] = ()
    disabled: bool = False
    ignored_cases: tuple[IgnoredCase, ...] = ()


@dataclass(frozen=True, slots=True)
class MaskedDocument:
    """Output of the whole masking stage.

    ``text`` has the same length as the original. When ``disabled`` is set,
    masking stopped at the pass that found the disabling directive.
    """

    text: str
    spans: tuple[MaskedSpan, ...] = ()
    disabled: bool = False
    ignored_cases: tuple[IgnoredCase, ...] = ()


@runtime_checkable
class MaskingPass(Protocol):
    """Protocol for masking passes.

    A pass is called with the current masked text and returns a MaskResult
    whose text has the same length.
    """

    @property
    def name(self) -> str:
        """Pass identifier."""
        ...

    def __call__(self, text: str) -> MaskResult:
        """Mask every match in ``text``."""
        ...


@dataclass(frozen=True, slots=True)
class FunctionPass:
    """Adapts a user callable to the MaskingPass protocol.

    The callable may return a MaskResult or a ``(text, spans)`` tuple.
    """

    func: Callable[[str], MaskResult | tuple[str, Sequence[MaskedSpan]]]
    label: str = field(default="")

    @property
    def name(self) -> str:
        return self.label or getattr(self.func, "__name__", "custom")

    def __call__(self, text: str) -> MaskResult:
        result = self.func(text)
        if isinstance(result, MaskResult):
            return result
        masked, spans = result
        return MaskResult(text=masked, spans=tuple(spans))


# Registry of built-in passes, in default order
BUILTIN_PASSES: dict[str, type[MaskingPass]] = {}


def register_pass(
    name: str,
) -> Callable[[type[MaskingPass]], type[MaskingPass]]:
    """Decorator to register a masking pass.

    Args:
        name: Pass name for lookup

    Returns:
        Decorator function that registers and returns the class

    Usage:
        @register_pass("hexo")
        class HexoPass:
                ...

    """

    def decorator(cls: type[MaskingPass]) -> type[MaskingPass]:
        BUILTIN_PASSES[name] = cls
        return cls

    return decorator


def get_pass(name: str) -> MaskingPass:
    """Get a masking pass instance by name.

    Args:
        name: Pass name (e.g., "hexo", "vuepress")

    Returns:
        Pass instance

    Raises:
        KeyError: If pass name is not recognized

    """
    if name not in BUILTIN_PASSES:
        available = ", ".join(sorted(BUILTIN_PASSES.keys()))
        raise KeyError(f"Unknown masking pass: {name!r}. Available: {available}")
    return BUILTIN_PASSES[name]()


def fill(text: str, regions: Sequence[tuple[int, int]]) -> str:
    """Replace each ``[start, end)`` region with filler.

    Newlines inside a region are filled as well, so the masked region always
    reads as a single run of filler to the Markdown parser.
    """
    if not regions:
        return text
    parts: list[str] = []
    pos = 0
    for start, end in sorted(regions):
        parts.append(text[pos:start])
        parts.append(FILLER * (end - start))
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


def mask(text: str, passes: Sequence[MaskingPass]) -> MaskedDocument:
    """Run passes in order over an evolving working copy of ``text``.

    Args:
        text: Original document text
        passes: Resolved passes, in configured order

    Returns:
        MaskedDocument with the masked text and every recorded span

    Raises:
        MaskingError: If a pass returns text of a different length

    """
    masked = text
    spans: list[MaskedSpan] = []
    ignored: list[IgnoredCase] = []
    for masking_pass in passes:
        result = masking_pass(masked)
        if len(result.text) != len(masked):
            raise MaskingError(masking_pass.name, len(masked), len(result.text))
        masked = result.text
        spans.extend(result.spans)
        ignored.extend(result.ignored_cases)
        logger.debug("pass %s masked %d span(s)", masking_pass.name, len(result.spans))
        if result.disabled:
            logger.debug("pass %s found the disabling directive", masking_pass.name)
            return MaskedDocument(
                text=masked,
                spans=tuple(spans),
                disabled=True,
                ignored_cases=tuple(ignored),
            )
    return MaskedDocument(
        text=masked, spans=tuple(spans), ignored_cases=tuple(ignored)
    )


# Import built-in passes to register them
# These imports trigger the @register_pass decorators
from zhlint.masking.ignore import IgnorePass  # noqa: E402
from zhlint.masking.hexo import HexoPass  # noqa: E402
from zhlint.masking.vuepress import VuepressPass  # noqa: E402

__all__ += [
    "IgnorePass",
    "HexoPass",
    "VuepressPass",
]
