"""Hexo tag masking pass.

Masks Hexo/Jekyll-style paired tags together with everything they enclose:

    {% note info %}
    不检查这里的内容, 也不修改。
    {% endnote %}

The closing tag must repeat the opening tag's name (``note`` / ``endnote``);
bracket balance alone is not enough.

Thread Safety:
This pass is stateless and thread-safe.

"""

from __future__ import annotations

import re

from zhlint.masking import MaskedSpan, MaskResult, fill, register_pass

# {% name args %} ... {% endname %}
# The body may contain single braces but never another "{%".
_TAG_PATTERN = re.compile(
    r"\{% ([^ ]+?) [^%]*?%\}(?:\n|\{(?!%)|[^{])*?\{% end(?:\1) %\}"
)


@register_pass("hexo")
class HexoPass:
    """Pass masking ``{% tag %}...{% endtag %}`` blocks."""

    @property
    def name(self) -> str:
        return "hexo"

    def __call__(self, text: str) -> MaskResult:
        spans = tuple(
            MaskedSpan(
                name=match.group(1),
                meta=f"hexo-{match.group(1)}",
                index=match.start(),
                length=match.end() - match.start(),
                original_text=match.group(0),
            )
            for match in _TAG_PATTERN.finditer(text)
        )
        return MaskResult(
            text=fill(text, [(span.index, span.end) for span in spans]),
            spans=spans,
        )
