"""Tests for the command-line entry point (main.main)."""

import io

from main import main

TEXT = "Graph ranking ranks graph nodes. Graph nodes link ranking scores."


def test_prints_keyword_and_phrase_tables(capsys) -> None:
    assert main([TEXT, "--top", "3"]) == 0

    out = capsys.readouterr().out
    assert "Keywords" in out
    assert "Key phrases" in out
    assert "graph" in out
    assert "relevance" in out


def test_reads_stdin_when_no_text_given(mocker, capsys) -> None:
    mocker.patch("sys.stdin", io.StringIO(TEXT))

    assert main(["--parallel"]) == 0
    assert "graph" in capsys.readouterr().out


def test_empty_text(capsys) -> None:
    assert main(["   "]) == 1
    assert "No text" in capsys.readouterr().out


def test_invalid_damping(capsys) -> None:
    assert main([TEXT, "--damping", "1.5"]) == 2
    assert "damping" in capsys.readouterr().out
