"""Thread safety tests for the lint pipeline.

Runs share only the rule handlers, the masking passes and the cached
Markdown parser. These tests lint documents concurrently and compare every
result with a sequential run.
"""

from concurrent.futures import ThreadPoolExecutor

from zhlint import Options, get_options, normalize_options, options_context, run

DOCUMENTS = [
    "你好,世界",
    "中文English混排,没有空格",
    "# 标题 ,a\n\n> 引用English",
    "{% note %}plain,text{% endnote %}\n\n正文,b",
    "| 表头 |\n| --- |\n| 中文,English |",
    "- 列表 （ 中文 ）",
]


class TestConcurrentRuns:
    def test_shared_normalized_options(self) -> None:
        normalized = normalize_options(Options())
        expected = [run(doc, normalized).result for doc in DOCUMENTS]
        work = DOCUMENTS * 20

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda doc: run(doc, normalized).result, work))

        assert results == expected * 20

    def test_context_default_is_per_thread(self) -> None:
        quiet = Options(rule_names=())

        def lint_quietly(doc: str) -> str:
            with options_context(quiet):
                return run(doc).result

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lint_quietly, DOCUMENTS * 5))

        assert results == DOCUMENTS * 5
        assert get_options() == Options()
