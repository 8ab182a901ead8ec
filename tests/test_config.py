"""Tests for options and their normalization."""

import logging

import pytest

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
from zhlint.masking import FunctionPass, MaskResult, get_pass
from zhlint.pipeline import run
from zhlint.rules import BUILTIN_RULES


class TestFromDict:
    def test_defaults(self) -> None:
        options = Options.from_dict({})
        assert options.rules == {"preset": "default"}
        assert options.masking_passes is None
        assert options.rule_names is None
        assert options.case_ignores == ()

    def test_camel_case_keys(self) -> None:
        options = Options.from_dict(
            {
                "hyperParsers": ["ignore", "hexo"],
                "ruleNames": ["punctuation-width"],
                "caseIgnores": ["a,b"],
            }
        )
        assert options.masking_passes == ("ignore", "hexo")
        assert options.rule_names == ("punctuation-width",)
        assert options.case_ignores == ("a,b",)

    def test_top_level_preset_moves_into_rules(self) -> None:
        options = Options.from_dict({"preset": "default", "rules": {"x": 1}})
        assert options.rules == {"x": 1, "preset": "default"}

    def test_rules_preset_wins_over_top_level(self) -> None:
        options = Options.from_dict(
            {"preset": "other", "rules": {"preset": "default"}}
        )
        assert options.rules["preset"] == "default"

    def test_unknown_keys_ignored(self) -> None:
        options = Options.from_dict({"unknown": 1, "case_ignores": ["x"]})
        assert options.case_ignores == ("x",)


class TestNormalize:
    def test_default_options(self) -> None:
        normalized = normalize_options(Options())
        assert normalized.errors == ()
        assert [p.name for p in normalized.passes] == ["ignore", "hexo", "vuepress"]
        assert len(normalized.handlers) == len(BUILTIN_RULES)
        assert dict(normalized.rules) == dict(DEFAULT_RULES)

    def test_rule_overrides_merge_onto_preset(self) -> None:
        normalized = normalize_options(
            Options(rules={"preset": "default", "no_space_inside_bracket": False})
        )
        assert normalized.rules["no_space_inside_bracket"] is False
        assert normalized.rules["no_space_inside_quotation"] is True

    def test_camel_case_rule_keys(self) -> None:
        normalized = normalize_options(
            Options(rules={"spaceBetweenMixedwidthContent": False})
        )
        assert normalized.rules["space_between_mixedwidth_content"] is False
        assert "spaceBetweenMixedwidthContent" not in normalized.rules

    def test_unknown_rule_keys_pass_through(self) -> None:
        normalized = normalize_options(Options(rules={"future_option": 42}))
        assert normalized.rules["future_option"] == 42
        assert normalized.errors == ()

    def test_without_preset_rules_start_empty(self) -> None:
        normalized = normalize_options(Options(rules={}))
        assert normalized.handlers == ()

    def test_markdown_pass_name_is_accepted(self) -> None:
        normalized = normalize_options(Options(masking_passes=("markdown", "hexo")))
        assert normalized.errors == ()
        assert [p.name for p in normalized.passes] == ["hexo"]

    def test_callable_pass_is_wrapped(self) -> None:
        def noop(text: str) -> MaskResult:
            return MaskResult(text=text)

        normalized = normalize_options(Options(masking_passes=(noop,)))
        [masking_pass] = normalized.passes
        assert isinstance(masking_pass, FunctionPass)

    def test_pass_instance_kept(self) -> None:
        hexo = get_pass("hexo")
        normalized = normalize_options(Options(masking_passes=(hexo,)))
        assert normalized.passes == (hexo,)

    def test_rule_order_follows_rule_names(self) -> None:
        normalized = normalize_options(
            Options(rule_names=("space-wrapper", "punctuation-width"))
        )
        assert len(normalized.handlers) == 2


class TestConfigErrors:
    def test_invalid_entries_are_skipped(self, caplog) -> None:
        options = Options(
            rules={"preset": "missing"},
            masking_passes=("hexo", "nope", 42),
            rule_names=("punctuation-width", "bogus"),
            case_ignores=("", "ok"),
        )
        with caplog.at_level(logging.WARNING, logger="zhlint"):
            normalized = normalize_options(options)
        assert [(e.key, e.message) for e in normalized.errors] == [
            ("missing", "unknown preset"),
            ("nope", "unknown masking pass"),
            ("42", "masking pass is not callable"),
            ("bogus", "unknown rule"),
            ("", "invalid case-ignore format"),
        ]
        assert [p.name for p in normalized.passes] == ["hexo"]
        assert len(normalized.ignored_cases) == 1
        assert caplog.text.count("Skipping configuration entry") == 5

    def test_errors_do_not_stop_a_run(self) -> None:
        options = Options(rule_names=("bogus", "punctuation-width"))
        assert run("你好,世界", options).result == "你好，世界"


class TestContextDefaults:
    def teardown_method(self) -> None:
        reset_options()

    def test_builtin_default(self) -> None:
        assert get_options() == Options()

    def test_set_and_reset(self) -> None:
        options = Options(rule_names=("space-wrapper",))
        set_options(options)
        assert get_options() is options
        reset_options()
        assert get_options() == Options()

    def test_context_manager_restores(self) -> None:
        options = Options(rules={"preset": "default"}, rule_names=())
        with options_context(options):
            assert get_options() is options
            assert run("你好,世界").result == "你好,世界"
        assert run("你好,世界").result == "你好，世界"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), options_context(Options(rule_names=())):
            raise RuntimeError("boom")
        assert get_options() == Options()

    def test_normalized_type(self) -> None:
        assert isinstance(normalize_options(), NormalizedOptions)
