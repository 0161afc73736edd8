#
# tests/unit/test_pytest_plugin.py
#
"""Tests for the pytest hook adapter, with stand-in pytest objects and one real pytest run."""

import os
from importlib.metadata import entry_points
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

import suitebar
from suitebar.pytest_plugin import PLUGIN_NAME, SuitebarPlugin, pytest_configure, suite_id
from suitebar.reporter import SuiteProgressReporter


def _report(nodeid: str, when: str = "call", outcome: str = "passed", text: str = "") -> SimpleNamespace:
    return SimpleNamespace(
        nodeid=nodeid,
        when=when,
        passed=outcome == "passed",
        failed=outcome == "failed",
        skipped=outcome == "skipped",
        longreprtext=text,
    )


def _session(terminal: bool) -> SimpleNamespace:
    pluginmanager = SimpleNamespace(has_plugin=lambda name: terminal and name == "terminalreporter")
    return SimpleNamespace(config=SimpleNamespace(pluginmanager=pluginmanager))


def _run_test(plugin: SuitebarPlugin, nodeid: str, *reports: SimpleNamespace) -> None:
    plugin.pytest_runtest_logstart(nodeid, None)
    for report in reports:
        plugin.pytest_runtest_logreport(report)
    plugin.pytest_runtest_logfinish(nodeid, None)


@pytest.fixture
def plugin(reporter: SuiteProgressReporter) -> SuitebarPlugin:
    plugin = SuitebarPlugin(reporter)
    session = SimpleNamespace(
        items=[
            SimpleNamespace(nodeid="tests/test_a.py::test_one"),
            SimpleNamespace(nodeid="tests/test_a.py::test_two"),
            SimpleNamespace(nodeid="tests/test_b.py::TestX::test_three"),
        ]
    )
    plugin.pytest_collection_finish(session)
    return plugin


def test_suite_id() -> None:
    assert suite_id("tests/test_a.py::TestX::test_one[1]") == "tests/test_a.py"
    assert suite_id("tests/test_a.py") == "tests/test_a.py"


def test_collection_counts_files(plugin: SuitebarPlugin, console_output) -> None:
    assert plugin.results.num_total_test_suites == 2
    assert "Found 2 test suites" in console_output.getvalue()


def test_one_advance_per_file(plugin: SuitebarPlugin, reporter: SuiteProgressReporter, bar_stream) -> None:
    _run_test(plugin, "tests/test_a.py::test_one", _report("tests/test_a.py::test_one"))
    assert reporter.bar.state.current == 0

    _run_test(plugin, "tests/test_a.py::test_two", _report("tests/test_a.py::test_two"))
    assert reporter.bar.state.current == 1
    assert bar_stream.getvalue().endswith("(1/2) 50%")

    _run_test(plugin, "tests/test_b.py::TestX::test_three", _report("tests/test_b.py::TestX::test_three"))
    assert reporter.bar.state.current == 2


def test_outcome_counting(plugin: SuitebarPlugin) -> None:
    _run_test(
        plugin,
        "tests/test_a.py::test_one",
        _report("tests/test_a.py::test_one", "setup"),
        _report("tests/test_a.py::test_one", "call", "failed", "assert 1 == 2"),
        _report("tests/test_a.py::test_one", "teardown"),
    )
    _run_test(
        plugin,
        "tests/test_a.py::test_two",
        _report("tests/test_a.py::test_two", "setup", "skipped"),
        _report("tests/test_a.py::test_two", "teardown"),
    )
    _run_test(
        plugin,
        "tests/test_b.py::TestX::test_three",
        _report("tests/test_b.py::TestX::test_three", "setup"),
        _report("tests/test_b.py::TestX::test_three", "call"),
        _report("tests/test_b.py::TestX::test_three", "teardown", "failed", "teardown boom"),
    )

    results = plugin.results
    assert results.num_passed_tests == 0
    assert results.num_failed_tests == 2
    assert results.num_pending_tests == 1
    assert results.test_results[0].failure_message == "tests/test_a.py::test_one\nassert 1 == 2"
    assert "teardown boom" in results.test_results[1].failure_message


def test_session_finish_prints_summary(plugin: SuitebarPlugin, reporter, console_output, bar_stream) -> None:
    _run_test(plugin, "tests/test_a.py::test_one", _report("tests/test_a.py::test_one"))
    _run_test(plugin, "tests/test_a.py::test_two", _report("tests/test_a.py::test_two", outcome="skipped"))
    _run_test(
        plugin,
        "tests/test_b.py::TestX::test_three",
        _report("tests/test_b.py::TestX::test_three", outcome="failed", text="E   boom"),
    )

    plugin.pytest_sessionfinish(_session(terminal=False), 1)

    lines = console_output.getvalue().splitlines()
    assert lines[-3:] == ["✔ 1 passing", "✘ 1 failing", "- 1 pending"]
    assert "E   boom" in console_output.getvalue()
    assert bar_stream.getvalue().endswith("(2/2) 100%\n")


def test_session_finish_starts_on_fresh_line_after_terminal_output(plugin: SuitebarPlugin, console_output) -> None:
    _run_test(
        plugin,
        "tests/test_b.py::TestX::test_three",
        _report("tests/test_b.py::TestX::test_three", outcome="failed", text="E   boom"),
    )
    before = len(console_output.getvalue())

    plugin.pytest_sessionfinish(_session(terminal=True), 1)

    assert console_output.getvalue()[before:].startswith("\ntests/test_b.py::TestX::test_three\nE   boom\n")


def test_configure_is_inert_without_flag() -> None:
    config = MagicMock()
    config.getoption.return_value = False
    pytest_configure(config)
    config.pluginmanager.register.assert_not_called()


def test_configure_registers_plugin_with_flag() -> None:
    options = {"suitebar": True, "suitebar_bar_width": 25, "suitebar_no_color": True}
    config = MagicMock()
    config.getoption.side_effect = lambda name, default=None: options.get(name, default)

    pytest_configure(config)

    registered, name = config.pluginmanager.register.call_args[0]
    assert name == PLUGIN_NAME
    assert isinstance(registered, SuitebarPlugin)
    assert registered.reporter.theme.bar_width == 25
    assert registered.reporter.theme.color is False


def test_real_pytest_run(pytester: pytest.Pytester, monkeypatch: pytest.MonkeyPatch) -> None:
    src_dir = Path(suitebar.__file__).resolve().parent.parent
    monkeypatch.setenv("PYTHONPATH", os.pathsep.join(filter(None, [str(src_dir), os.environ.get("PYTHONPATH")])))
    pytester.makepyfile(
        test_a="""
        def test_pass():
            pass

        def test_fail():
            assert 1 == 2
        """,
        test_b="""
        import pytest

        @pytest.mark.skip(reason="later")
        def test_skip():
            pass
        """,
    )
    args = ["--suitebar", "--suitebar-no-color", "-p", "no:cacheprovider"]
    if not any(ep.name == "suitebar" for ep in entry_points(group="pytest11")):
        args += ["-p", "suitebar.pytest_plugin"]

    result = pytester.runpytest_subprocess(*args)

    assert result.ret == pytest.ExitCode.TESTS_FAILED
    result.stdout.fnmatch_lines(
        [
            "*Found 2 test suites",
            "*test_a.py::test_fail",
            "*Ran 3 tests in *s",
            "* 1 passing",
            "* 1 failing",
            "* 1 pending",
        ]
    )
    assert "(2/2) 100%" in result.stderr.str()
