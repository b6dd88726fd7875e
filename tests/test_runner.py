import io

import pytest

from gllparse.grammar import Grammar, GrammarError
from gllparse.parser import parse
from gllparse.runner import (
    HEADER,
    CaseResult,
    build_input,
    growth_main,
    main,
    read_cases,
    run_file,
    run_path,
)

BALANCED_FILE = "S -> aSb | _\n#\nab 1\naabb 1\naab 0\n 1\n"
SIMPLE_FILE = "S -> ab\n#\nab 1\nba 0\n"


def _fields(line):
    return line.rsplit(":", 11)


def test_build_input_repeats_odd_parts():
    assert build_input(["a", "b", "c"], 3) == "abbbc"


def test_build_input_single_part_is_not_repeated():
    assert build_input(["xy"], 4) == "xy"


def test_read_cases_pairs():
    cases = list(read_cases("\nab 1\ncd 0\n"))
    assert cases == [("ab", True), ("cd", False)]


def test_read_cases_empty_input():
    assert list(read_cases("\n 1\n")) == [("", True)]


def test_read_cases_drops_unfinished_case():
    assert list(read_cases("\nab")) == []


def test_read_cases_rejects_bad_flag():
    with pytest.raises(GrammarError):
        list(read_cases("\nab x\n"))


def test_read_cases_rejects_missing_flag():
    with pytest.raises(GrammarError):
        list(read_cases("\nab "))


def test_run_file_reports_each_case(tmp_path):
    path = tmp_path / "balanced.txt"
    path.write_text(BALANCED_FILE)
    out = io.StringIO()
    results = run_file(path, 2, out)
    grammar = Grammar.from_text(BALANCED_FILE)
    assert [r.expected for r in results] == [True, True, False, True]
    assert [r.input_size for r in results] == [2, 4, 3, 0]
    texts = ["ab", "aabb", "aab", ""]
    assert [r.result for r in results] == [parse(grammar, t) for t in texts]
    lines = out.getvalue().splitlines()
    assert len(lines) == 4
    assert [int(_fields(line)[2]) for line in lines] == [int(r.result) for r in results]


def test_run_file_simple_grammar_passes(tmp_path):
    path = tmp_path / "simple.txt"
    path.write_text(SIMPLE_FILE)
    results = run_file(path, 1, io.StringIO())
    assert [r.passed for r in results] == [True, True]
    assert "passed" in results[0].format()


def test_run_file_rejects_zero_repetitions(tmp_path):
    path = tmp_path / "simple.txt"
    path.write_text(SIMPLE_FILE)
    with pytest.raises(ValueError):
        run_file(path, 0, io.StringIO())


def test_case_result_failed_status():
    result = CaseResult("g", 2, False, True, 0, 0, 0, 0, 2, 1)
    assert result.passed is False
    assert "failed" in result.format()
    assert _fields(result.format())[1:4] == ["2", "0", "1"]


def test_run_path_directory_writes_header(tmp_path):
    (tmp_path / "a.txt").write_text(SIMPLE_FILE)
    (tmp_path / "b.txt").write_text(BALANCED_FILE)
    out = io.StringIO()
    results = run_path(tmp_path, 1, out)
    lines = out.getvalue().splitlines()
    assert lines[0] == HEADER
    assert len(results) == 6
    assert len(lines) == 7


def test_run_path_missing():
    with pytest.raises(FileNotFoundError):
        run_path("/nonexistent/definitely/missing", 1, io.StringIO())


def test_main_single_file(tmp_path, capsys):
    path = tmp_path / "simple.txt"
    path.write_text(SIMPLE_FILE)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "defaulting to 1 repetition"
    assert len(out.splitlines()) == 3


def test_main_bad_repetitions(tmp_path, capsys):
    path = tmp_path / "simple.txt"
    path.write_text(SIMPLE_FILE)
    assert main([str(path), "zero"]) == 1
    assert "Faulty input for repetition" in capsys.readouterr().out


def test_main_faulty_case_file(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("S -> ab\n#\nab x\n")
    assert main([str(path)]) == 1
    assert "Faulty Grammar file" in capsys.readouterr().out


def test_growth_main_runs_count_inputs(tmp_path, capsys):
    path = tmp_path / "grammar.txt"
    path.write_text("S -> aS | b\n")
    assert growth_main([str(path), "1", "3", "+1", "", "a", "b"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Input generator: *(a)b"
    assert out[1] == HEADER
    rows = [_fields(line) for line in out[2:]]
    assert [int(row[1]) for row in rows] == [2, 3, 4]
    grammar = Grammar.from_text("S -> aS | b\n")
    texts = ["ab", "aab", "aaab"]
    assert [row[2] for row in rows] == [str(int(parse(grammar, t))) for t in texts]
    assert all(row[3] == "1" for row in rows)


def test_growth_main_multiplies(tmp_path, capsys):
    path = tmp_path / "grammar.txt"
    path.write_text("S -> aS | b\n")
    assert growth_main([str(path), "1", "3", "*2", "", "a", "b"]) == 0
    rows = [_fields(line) for line in capsys.readouterr().out.splitlines()[2:]]
    assert [int(row[1]) for row in rows] == [2, 3, 5]


def test_growth_main_rejects_bad_op(tmp_path, capsys):
    path = tmp_path / "grammar.txt"
    path.write_text("S -> aS | b\n")
    assert growth_main([str(path), "1", "3", "x2", "a"]) == 1
    assert "Faulty input for op" in capsys.readouterr().out


def test_growth_main_rejects_bad_count(tmp_path, capsys):
    path = tmp_path / "grammar.txt"
    path.write_text("S -> aS | b\n")
    assert growth_main([str(path), "1", "-2", "+1", "a"]) == 1
    assert "count" in capsys.readouterr().out


def test_growth_main_too_few_arguments(capsys):
    assert growth_main(["g", "1", "3", "+1"]) == 1
    assert "usage" in capsys.readouterr().out