"""Directive comments that switch linting off.

``<!-- zhlint disabled -->`` anywhere in a document disables linting for
the whole document. ``<!-- zhlint ignore: CASE -->`` adds a case-ignore
pattern (see zhlint.ignore) for this document only.

Nothing is masked: HTML comments are never lintable content.

Thread Safety:
This pass is stateless and thread-safe.

"""

from __future__ import annotations

import re

from zhlint.ignore import IgnoredCase, parse_ignored_case
from zhlint.masking import MaskResult, register_pass
from zhlint.utils.logger import get_logger

logger = get_logger(__name__)

_DIRECTIVE_PATTERN = re.compile(
    r"<!--\s*zhlint\s+(disabled|ignore)\b\s*:?\s*([^\n]*?)\s*-->"
)


@register_pass("ignore")
class IgnorePass:
    """Pass reading zhlint directive comments."""

    @property
    def name(self) -> str:
        return "ignore"

    def __call__(self, text: str) -> MaskResult:
        cases: list[IgnoredCase] = []
        for match in _DIRECTIVE_PATTERN.finditer(text):
            if match.group(1) == "disabled":
                return MaskResult(text=text, disabled=True)
            case = parse_ignored_case(match.group(2))
            if case is None:
                logger.warning("Invalid ignore directive: %r", match.group(0))
                continue
            cases.append(case)
        return MaskResult(text=text, ignored_cases=tuple(cases))
