import io
import json
import os

import pytest
from rich.console import Console

from TextSearch.main import main, run_console
from TextSearch.shell.commands import COMMANDS, CommandStatus, QueryCommand, TypeCommand
from TextSearch.shell.environment import SearchEnvironment
from TextSearch.tfidf_search.tfidf_search import load_corpus


@pytest.fixture
def environment(corpus_dir, pipeline, console):
    index = load_corpus(str(corpus_dir), pipeline)
    return SearchEnvironment(index, pipeline, input_stream=io.StringIO(), console=console)


def output_of(environment):
    return environment.console.file.getvalue()


def run_lines(environment, *lines):
    environment.input_stream = io.StringIO("".join(line + "\n" for line in lines))
    run_console(environment)
    return output_of(environment)


def test_command_registry():
    assert set(COMMANDS) == {"query", "results", "type", "exit"}


def test_query_results_and_type(environment, corpus_dir):
    path = os.path.abspath(str(corpus_dir / "a.txt"))
    output = run_lines(environment, "query cat", "results", "type 0", "exit")

    assert "Query is: [cat]" in output
    assert "Top 10 results:" in output
    assert output.count(f"[ 0] (1.0000) {path}") == 2
    assert f"Document: {path}" in output
    assert "cat dog cat" in output


def test_query_replaces_previous_results(environment, corpus_dir):
    run_lines(environment, "query cat")
    assert environment.results[0].file_path.endswith("a.txt")
    run_lines(environment, "query bird")
    assert len(environment.results) == 1
    assert environment.results[0].file_path.endswith("b.txt")


def test_empty_query(environment):
    output = run_lines(environment, "query unicorn", "exit")
    assert "Query is empty, please enter another query" in output
    assert environment.results is None


def test_results_before_query(environment):
    output = run_lines(environment, "results", "exit")
    assert "Results are not defined yet." in output


def test_type_argument_errors(environment):
    output = run_lines(environment, "type", "type x", "type 0", "query cat", "type 5", "exit")
    assert "Expected 1 argument, got 0" in output
    assert "Cannot interpret 'x' as a result index." in output
    assert "There is no result at position 0" in output
    assert "There is no result at position 5" in output


def test_unknown_and_empty_commands(environment):
    output = run_lines(environment, "", "dance", "exit")
    assert "No command entered." in output
    assert "Unknown command." in output


def test_end_of_input_ends_session(environment):
    run_lines(environment, "query cat")
    assert environment.results is not None


def test_type_of_deleted_document_ends_session(environment, corpus_dir):
    run_lines(environment, "query cat")
    os.remove(str(corpus_dir / "a.txt"))

    output = run_lines(environment, "type 0", "query dog")
    assert "Closing program..." in output
    # the session stopped before the second query
    assert "Query is: [dog]" not in output


def test_type_command_status(environment, corpus_dir):
    environment.arguments = ["cat"]
    assert QueryCommand().execute(environment) == CommandStatus.CONTINUE

    environment.arguments = ["0"]
    assert TypeCommand().execute(environment) == CommandStatus.CONTINUE

    os.remove(str(corpus_dir / "a.txt"))
    assert TypeCommand().execute(environment) == CommandStatus.EXIT


def test_environment_closes_its_input(corpus_dir, pipeline, console):
    index = load_corpus(str(corpus_dir), pipeline)
    stream = io.StringIO("exit\n")
    with SearchEnvironment(index, pipeline, input_stream=stream, console=console) as environment:
        run_console(environment)
    assert stream.closed


def test_main_runs_session(corpus_dir, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("query cat\nexit\n"))
    assert main([str(corpus_dir)]) == 0
    output = capsys.readouterr().out
    assert "Vocabulary size is 3 words" in output
    assert "Query is: [cat]" in output


def test_main_missing_directory(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "Error loading documents" in capsys.readouterr().out


def test_type_prints_document_text_unchanged(tmp_path, pipeline):
    body = "cat :smile: dog [bold]x[/bold] " + "word " * 40
    (tmp_path / "a.txt").write_text(body, encoding="utf-8")
    (tmp_path / "b.txt").write_text("dog bird", encoding="utf-8")
    index = load_corpus(str(tmp_path), pipeline)
    narrow = Console(file=io.StringIO(), width=80)
    environment = SearchEnvironment(index, pipeline, input_stream=io.StringIO(), console=narrow)

    output = run_lines(environment, "query cat", "type 0", "exit")
    assert body.rstrip() in output
    assert os.path.abspath(str(tmp_path / "a.txt")) in output


def test_main_with_broken_stop_words_file(corpus_dir, tmp_path_factory, monkeypatch, capsys):
    config_dir = tmp_path_factory.mktemp("config")
    stop_words = config_dir / "stop.json"
    stop_words.write_text("{broken", encoding="utf-8")
    config = config_dir / "config.json"
    config.write_text(json.dumps({"preprocessing": {"stop_words": {"file": str(stop_words)}}}), encoding="utf-8")

    monkeypatch.setattr("sys.stdin", io.StringIO("exit\n"))
    assert main([str(corpus_dir), "--config", str(config)]) == 0
    assert "Vocabulary size is 3 words" in capsys.readouterr().out


def test_main_top_option(corpus_dir, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("query cat bird\nexit\n"))
    assert main([str(corpus_dir), "--top", "1"]) == 0
    output = capsys.readouterr().out
    assert "Top 1 results:" in output
    assert "[ 0] " in output
    assert "[ 1] " not in output
