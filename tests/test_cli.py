"""Tests for the click command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from code_snippets.cli import cli
from code_snippets.config import AppSettings, save_settings
from code_snippets.scanner import ScanTask

FIXTURES = Path(__file__).parent / "fixtures"
PROJECT = FIXTURES / "project"


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_languages(runner):
    result = runner.invoke(cli, ["languages"])
    assert result.exit_code == 0
    lines = {line.split()[0]: line for line in result.output.splitlines() if line.strip()}
    assert ".java" in lines["java"]
    assert "functions" in lines["python"]
    assert "highlight only" in lines["sql"]


def test_highlight_html(runner):
    result = runner.invoke(cli, ["highlight", "--html", str(PROJECT / "Calculator.java")])
    assert result.exit_code == 0
    assert result.output.startswith('<pre class="code language-java">')
    assert '<span class="tok-keyword">public</span>' in result.output
    assert '<span class="tok-annotation">@Override</span>' in result.output


def test_highlight_plain_output_keeps_text(runner):
    source = PROJECT / "sample.py"
    result = runner.invoke(cli, ["highlight", str(source)])
    assert result.exit_code == 0
    assert result.output == source.read_text()


def test_highlight_language_override(runner, tmp_path):
    path = tmp_path / "query.txt"
    path.write_text("select 1")
    result = runner.invoke(cli, ["highlight", "--html", "-l", "sql", str(path)])
    assert result.exit_code == 0
    assert '<span class="tok-keyword">select</span>' in result.output


def test_highlight_uses_default_language_setting(runner, tmp_path):
    save_settings(AppSettings(default_language="python"))
    path = tmp_path / "notes.txt"
    path.write_text("def x")
    result = runner.invoke(cli, ["highlight", "--html", str(path)])
    assert result.output.startswith('<pre class="code language-python">')


def test_functions(runner):
    result = runner.invoke(cli, ["functions", str(PROJECT / "geometry.cpp")])
    assert result.exit_code == 0
    assert "area" in result.output
    assert "Shape::sides" in result.output


def test_functions_with_code(runner):
    result = runner.invoke(cli, ["functions", "--code", str(PROJECT / "geometry.cpp")])
    assert "return M_PI * r * r;" in result.output


def test_functions_unknown_language(runner):
    result = runner.invoke(cli, ["functions", str(PROJECT / "README.txt")])
    assert result.exit_code == 2
    assert "Unknown language" in result.output


def test_functions_none_found(runner):
    result = runner.invoke(cli, ["functions", "-l", "python", str(PROJECT / "README.txt")])
    assert result.exit_code == 0
    assert "No functions found." in result.output


def test_scan(runner):
    result = runner.invoke(cli, ["scan", str(PROJECT)])
    assert result.exit_code == 0
    assert "renderList" in result.output
    assert "vendored" not in result.output
    assert "done: 15 function(s) in 6 file(s), 0 skipped" in result.output


def test_scan_json(runner):
    result = runner.invoke(cli, ["scan", "--json", "-p", "demo", str(PROJECT)])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert len(data) == 15
    assert data[0]["function_name"] == "Calculator"
    assert data[0]["project_name"] == "demo"
    assert data[-1]["gist_filename"] == "load.py"


def test_scan_missing_dir(runner, tmp_path):
    result = runner.invoke(cli, ["scan", str(tmp_path / "nope")])
    assert result.exit_code == 2


def test_settings(runner, isolated_settings):
    result = runner.invoke(cli, ["settings"])
    assert result.exit_code == 0
    assert str(isolated_settings / "config.json") in result.output
    assert "default_language: java" in result.output


def test_scan_repeated_ctrl_c_cancels_cleanly(runner, monkeypatch):
    original_wait = ScanTask.wait
    interrupted = []

    def iter_results(self, timeout=None):
        raise KeyboardInterrupt
        yield

    def wait(self, timeout=None):
        if not interrupted:
            interrupted.append(True)
            raise KeyboardInterrupt
        return original_wait(self, timeout)

    monkeypatch.setattr(ScanTask, "iter_results", iter_results)
    monkeypatch.setattr(ScanTask, "wait", wait)
    result = runner.invoke(cli, ["scan", str(PROJECT)])
    assert result.exit_code == 0
    assert result.output.count("Cancelling scan...") == 1
    assert "function(s) in" in result.output
