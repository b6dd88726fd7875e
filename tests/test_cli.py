import pytest

from gllparse.cli import main


@pytest.fixture
def grammar_file(tmp_path):
    path = tmp_path / "grammar.txt"
    path.write_text("S -> aS | b\n")
    return path


def test_accepted_input_reports_one(grammar_file, capsys):
    assert main([str(grammar_file), "aab"]) == 0
    out = capsys.readouterr().out
    assert "Parsing result: 1" in out
    assert "Time taken" in out


def test_rejected_input_reports_zero(grammar_file, capsys):
    assert main([str(grammar_file), "aba"]) == 0
    out = capsys.readouterr().out
    assert "Parsing result: 0" in out


@pytest.mark.parametrize("args", [[], ["only_one"], ["a", "b", "c"]])
def test_wrong_argument_count_prints_usage(args, capsys):
    assert main(args) == 1
    assert "usage:" in capsys.readouterr().out


def test_missing_grammar_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt"), "ab"]) == 1
    captured = capsys.readouterr()
    assert "Parsing result" not in captured.out
    assert "cannot read grammar" in captured.err