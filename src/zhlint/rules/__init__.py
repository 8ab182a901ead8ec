"""Rule handlers for zhlint.

Built-in rules, in default order:
- punctuation-width: half-width/full-width punctuation conversion
- space-halfwidth-content: one space between half-width content
- space-fullwidth-content: no space between full-width content
- space-mixedwidth-content: space (or none) between content of mixed width
- space-hyper-mark: no space just inside links and other inline marks
- space-outside-quotation: spacing between a quotation and adjacent content
- space-outside-bracket: spacing between a bracket and adjacent content
- space-punctuation: spacing before and after pause-or-stop punctuation
- space-wrapper: no space just inside quotations and brackets

A rule turns the rule options into a handler once, at configuration time.
A handler is called for every token of a block as
``handler(token, index, group)`` where ``group`` owns the token at
``group.children[index]``. Handlers only write the ``intended_*`` fields of
tokens and record validations through the helpers in ``zhlint.rules.util``.

Usage:
    >>> from zhlint.rules import get_rule
    >>> handler = get_rule("punctuation-width").create_handler(
    ...     {"fullwidth_punctuation": "，"}
    ... )

Composition:
Handlers run in configured order and later handlers see the edits of
earlier ones. When two handlers edit the same token the later edit wins.

Thread Safety:
Rules and the handlers they create hold only their parsed options.
Handlers mutate tokens owned by the calling lint pass.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from zhlint.tokens import GroupToken, Token

__all__ = [
    "Handler",
    "Rule",
    "BUILTIN_RULES",
    "register_rule",
    "get_rule",
]

type Handler = Callable[[Token, int, GroupToken], None]


@runtime_checkable
class Rule(Protocol):
    """Protocol for lint rules."""

    @property
    def name(self) -> str:
        """Rule identifier."""
        ...

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        """Build a handler from rule options.

        Returns None when the options switch the rule off entirely.
        """
        ...


# Registry of built-in rules, in default order
BUILTIN_RULES: dict[str, type[Rule]] = {}


def register_rule(
    name: str,
) -> Callable[[type[Rule]], type[Rule]]:
    """Decorator to register a rule.

    Args:
        name: Rule name for lookup

    Returns:
        Decorator function that registers and returns the class

    Usage:
        @register_rule("space-wrapper")
        class SpaceWrapperRule:
                ...

    """

    def decorator(cls: type[Rule]) -> type[Rule]:
        BUILTIN_RULES[name] = cls
        return cls

    return decorator


def get_rule(name: str) -> Rule:
    """Get a rule instance by name.

    Args:
        name: Rule name (e.g., "punctuation-width")

    Returns:
        Rule instance

    Raises:
        KeyError: If rule name is not recognized

    """
    if name not in BUILTIN_RULES:
        available = ", ".join(sorted(BUILTIN_RULES.keys()))
        raise KeyError(f"Unknown rule: {name!r}. Available: {available}")
    return BUILTIN_RULES[name]()


# Import built-in rules to register them
# These imports trigger the @register_rule decorators
from zhlint.rules.punctuation_width import PunctuationWidthRule  # noqa: E402
from zhlint.rules.space_content import (  # noqa: E402
    SpaceFullwidthContentRule,
    SpaceHalfwidthContentRule,
    SpaceMixedwidthContentRule,
)
from zhlint.rules.space_hyper_mark import SpaceHyperMarkRule  # noqa: E402
from zhlint.rules.space_outside import (  # noqa: E402
    SpaceOutsideBracketRule,
    SpaceOutsideQuotationRule,
)
from zhlint.rules.space_punctuation import SpacePunctuationRule  # noqa: E402
from zhlint.rules.space_wrapper import SpaceWrapperRule  # noqa: E402

__all__ += [
    "PunctuationWidthRule",
    "SpaceHalfwidthContentRule",
    "SpaceFullwidthContentRule",
    "SpaceMixedwidthContentRule",
    "SpaceHyperMarkRule",
    "SpaceOutsideQuotationRule",
    "SpaceOutsideBracketRule",
    "SpacePunctuationRule",
    "SpaceWrapperRule",
]
