"""Lint options and their normalization.

``Options`` is what callers hand in. ``normalize_options`` resolves it once,
at configuration time, into the masking passes, rule handlers and case
ignores the pipeline runs with. Invalid entries never abort normalization:
each one becomes a ConfigError that is logged, collected and skipped.

A default Options can be set per context, the way ``run`` picks it up when
called without options.

Usage:
    >>> options = Options.from_dict({
    ...     "preset": "default",
    ...     "rules": {"space_between_mixedwidth_content": False},
    ...     "caseIgnores": ["vue-,test"],
    ... })
    >>> normalized = normalize_options(options)
    >>> normalized.errors
    ()

    >>> with options_context(options):
    ...     result = run("中文English")

Thread Safety:
    Options and NormalizedOptions are frozen. The context default lives in a
    ContextVar, so each thread and task sees its own.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

from zhlint.errors import ConfigError
from zhlint.ignore import IgnoredCase, parse_ignored_case
from zhlint.masking import BUILTIN_PASSES, FunctionPass, MaskingPass, get_pass
from zhlint.rules import BUILTIN_RULES, Handler, get_rule
from zhlint.utils.logger import get_logger

__all__ = [
    "DEFAULT_RULES",
    "Options",
    "NormalizedOptions",
    "normalize_options",
    "get_options",
    "set_options",
    "reset_options",
    "options_context",
]

logger = get_logger(__name__)

DEFAULT_RULES: Mapping[str, Any] = MappingProxyType(
    {
        # punctuation-width
        "halfwidth_punctuation": "()[]{}",
        "fullwidth_punctuation": "，。：；？！“”‘’",
        "adjusted_fullwidth_punctuation": "“”‘’",
        # space-*-content
        "space_between_halfwidth_content": True,
        "no_space_between_fullwidth_content": True,
        "space_between_mixedwidth_content": True,
        # space-hyper-mark
        "no_space_inside_hyper_mark": True,
        # space-outside-*
        "space_outside_halfwidth_quotation": True,
        "no_space_outside_fullwidth_quotation": True,
        "space_outside_halfwidth_bracket": True,
        "no_space_outside_fullwidth_bracket": True,
        # space-punctuation
        "no_space_before_pause_or_stop": True,
        "space_after_halfwidth_pause_or_stop": True,
        "no_space_after_fullwidth_pause_or_stop": True,
        # space-wrapper
        "no_space_inside_quotation": True,
        "no_space_inside_bracket": True,
    }
)

PRESETS: Mapping[str, Mapping[str, Any]] = MappingProxyType({"default": DEFAULT_RULES})

# Structural parsing always runs; rc files still list it among the passes
_STRUCTURAL_PASS = "markdown"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# camelCase spelling used by rc files -> option key
_RULE_KEY_ALIASES = {_camel(key): key for key in DEFAULT_RULES}

_OPTION_ALIASES = {
    "hyperParsers": "masking_passes",
    "hyper_parsers": "masking_passes",
    "maskingPasses": "masking_passes",
    "ruleNames": "rule_names",
    "caseIgnores": "case_ignores",
}


@dataclass(frozen=True, slots=True)
class Options:
    """Caller-facing lint options.

    Attributes:
        rules: Rule option values, plus ``preset`` to start from a preset
        masking_passes: Pass names or callables in run order. None runs
            every built-in pass.
        rule_names: Rule names in run order. None runs every built-in rule.
        case_ignores: Case-ignore patterns
    """

    rules: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({"preset": "default"})
    )
    masking_passes: tuple[str | Callable[..., Any], ...] | None = None
    rule_names: tuple[str, ...] | None = None
    case_ignores: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> Options:
        """Create Options from a plain mapping such as a parsed rc file.

        camelCase keys (``hyperParsers``, ``caseIgnores``) are accepted. A
        top-level ``preset`` is moved into ``rules``. Unknown top-level keys
        are ignored. Without ``rules`` or ``preset`` the default preset is used.

        Example:
            >>> Options.from_dict({"preset": "default", "unknown": 1}).rules
            {'preset': 'default'}

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            key = _OPTION_ALIASES.get(key, key)
            if key in valid_fields:
                filtered[key] = value
        if "rules" in filtered or "preset" in config_dict:
            rules = dict(filtered.get("rules") or {})
            if "preset" in config_dict:
                rules.setdefault("preset", config_dict["preset"])
            filtered["rules"] = rules
        for key in ("masking_passes", "rule_names", "case_ignores"):
            if filtered.get(key) is not None:
                filtered[key] = tuple(filtered[key])
        return cls(**filtered)


@dataclass(frozen=True, slots=True)
class NormalizedOptions:
    """Options resolved against the registries.

    Attributes:
        passes: Masking passes in run order
        handlers: Rule handlers in run order
        rules: Effective rule options after preset merging
        ignored_cases: Parsed case ignores
        errors: Entries that were rejected and skipped
    """

    passes: tuple[MaskingPass, ...]
    handlers: tuple[Handler, ...]
    rules: Mapping[str, Any]
    ignored_cases: tuple[IgnoredCase, ...] = ()
    errors: tuple[ConfigError, ...] = ()


def normalize_options(options: Options | None = None) -> NormalizedOptions:
    """Resolve options into runnable passes and handlers.

    Args:
        options: Options to resolve. None uses the context default.

    Returns:
        NormalizedOptions; rejected entries are listed in ``errors``
    """
    if options is None:
        options = get_options()
    errors: list[ConfigError] = []
    rules = _merge_rules(options.rules, errors)
    passes = _resolve_passes(options.masking_passes, errors)
    handlers = _resolve_handlers(options.rule_names, rules, errors)
    cases: list[IgnoredCase] = []
    for value in options.case_ignores:
        case = parse_ignored_case(value)
        if case is None:
            errors.append(ConfigError(value, "invalid case-ignore format"))
        else:
            cases.append(case)
    for error in errors:
        logger.warning("Skipping configuration entry %s", error)
    return NormalizedOptions(
        passes=tuple(passes),
        handlers=tuple(handlers),
        rules=MappingProxyType(rules),
        ignored_cases=tuple(cases),
        errors=tuple(errors),
    )


def _merge_rules(
    user_rules: Mapping[str, Any], errors: list[ConfigError]
) -> dict[str, Any]:
    rules: dict[str, Any] = {}
    preset = user_rules.get("preset")
    if preset is not None:
        if preset in PRESETS:
            rules.update(PRESETS[preset])
        else:
            errors.append(ConfigError(str(preset), "unknown preset"))
    for key, value in user_rules.items():
        if key != "preset":
            rules[_RULE_KEY_ALIASES.get(key, key)] = value
    return rules


def _resolve_passes(
    entries: tuple[str | Callable[..., Any], ...] | None,
    errors: list[ConfigError],
) -> list[MaskingPass]:
    if entries is None:
        entries = tuple(BUILTIN_PASSES)
    passes: list[MaskingPass] = []
    for entry in entries:
        if isinstance(entry, str):
            if entry == _STRUCTURAL_PASS:
                continue
            try:
                passes.append(get_pass(entry))
            except KeyError:
                errors.append(ConfigError(entry, "unknown masking pass"))
        elif isinstance(entry, MaskingPass):
            passes.append(entry)
        elif callable(entry):
            passes.append(FunctionPass(entry))
        else:
            errors.append(ConfigError(repr(entry), "masking pass is not callable"))
    return passes


def _resolve_handlers(
    names: tuple[str, ...] | None,
    rules: Mapping[str, Any],
    errors: list[ConfigError],
) -> list[Handler]:
    if names is None:
        names = tuple(BUILTIN_RULES)
    handlers: list[Handler] = []
    for name in names:
        try:
            rule = get_rule(name)
        except KeyError:
            errors.append(ConfigError(name, "unknown rule"))
            continue
        handler = rule.create_handler(rules)
        if handler is not None:
            handlers.append(handler)
    return handlers


# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: Options = Options()

_options: ContextVar[Options] = ContextVar("zhlint_options", default=_DEFAULT_OPTIONS)


def get_options() -> Options:
    """Get the default options of the current context."""
    return _options.get()


def set_options(options: Options) -> None:
    """Set the default options of the current context."""
    _options.set(options)


def reset_options() -> None:
    """Reset the context default to the built-in default options."""
    _options.set(_DEFAULT_OPTIONS)


@contextmanager
def options_context(options: Options) -> Iterator[None]:
    """Use ``options`` as the context default within the block.

    The previous default is restored even if the block raises.
    """
    previous = _options.get()
    _options.set(options)
    try:
        yield
    finally:
        _options.set(previous)
