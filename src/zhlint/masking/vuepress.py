"""VuePress custom container masking pass.

Masks the marker lines of custom containers and leaves the body lintable:

    ::: tip 提示
    这里的内容照常检查。
    :::

Only ``::: tip 提示`` and the closing ``:::`` become filler.

Thread Safety:
This pass is stateless and thread-safe.

"""

from __future__ import annotations

import re

from zhlint.masking import MaskedSpan, MaskResult, fill, register_pass

_CONTAINER_PATTERN = re.compile(r"^(:::[^\n]*)\n([\s\S]+?)\n(:::)[ \t]*$", re.MULTILINE)


@register_pass("vuepress")
class VuepressPass:
    """Pass masking ``:::`` container markers."""

    @property
    def name(self) -> str:
        return "vuepress"

    def __call__(self, text: str) -> MaskResult:
        spans: list[MaskedSpan] = []
        for match in _CONTAINER_PATTERN.finditer(text):
            words = match.group(1)[3:].split()
            name = words[0] if words else "default"
            for group in (1, 3):
                spans.append(
                    MaskedSpan(
                        name=name,
                        meta=f"vuepress-{name}",
                        index=match.start(group),
                        length=len(match.group(group)),
                        original_text=match.group(group),
                    )
                )
        return MaskResult(
            text=fill(text, [(span.index, span.end) for span in spans]),
            spans=tuple(spans),
        )
