import pytest

from gllparse.generator import generate, main
from gllparse.grammar import Grammar, GrammarError
from gllparse.parser import parse

RIGHT_RECURSIVE = "S -> aS | b\n"
BALANCED = "S -> aSb | _\n"


def test_count_limits_output():
    assert len(list(generate(RIGHT_RECURSIVE, 5))) == 5


def test_zero_count_yields_nothing():
    assert list(generate(RIGHT_RECURSIVE, 0)) == []


def test_sentences_are_accepted_by_parser():
    grammar = Grammar.from_text(RIGHT_RECURSIVE)
    sentences = list(generate(grammar, 6))
    assert all(parse(grammar, s) for s in sentences)


def test_sentences_hold_only_terminals_and_are_distinct():
    sentences = list(generate(RIGHT_RECURSIVE, 6))
    assert all(not any(c.isupper() for c in s) for s in sentences)
    assert len(set(sentences)) == len(sentences)


def test_breadth_first_lengths_do_not_decrease():
    lengths = [len(s) for s in generate(RIGHT_RECURSIVE, 8)]
    assert lengths == sorted(lengths)


def test_epsilon_rule_gives_balanced_strings():
    sentences = list(generate(BALANCED, 5))
    assert len(sentences) == 5
    for s in sentences:
        half = len(s) // 2
        assert s == "a" * half + "b" * half


def test_finite_language_is_exhausted():
    sentences = list(generate("S -> a | bc\n"))
    assert sorted(sentences) == ["a", "bc"]


def test_negative_count_is_unbounded_until_exhausted():
    assert sorted(generate("S -> a | bc\n", -7)) == ["a", "bc"]


def test_missing_start_rule():
    grammar = Grammar.from_text("A -> a\n")
    with pytest.raises(GrammarError):
        list(generate(grammar))


def test_main_prints_grammar_then_sentences(tmp_path, capsys):
    path = tmp_path / "grammar.txt"
    path.write_text(RIGHT_RECURSIVE)
    assert main([str(path), "3"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(RIGHT_RECURSIVE + "#\n")
    lines = out[len(RIGHT_RECURSIVE + "#\n"):].splitlines()
    assert len(lines) == 3
    assert all(line.endswith(" 1") for line in lines)
    grammar = Grammar.from_text(RIGHT_RECURSIVE)
    assert all(parse(grammar, line[:-2]) for line in lines)


def test_main_rejects_bad_count(tmp_path, capsys):
    path = tmp_path / "grammar.txt"
    path.write_text(RIGHT_RECURSIVE)
    assert main([str(path), "abc"]) == 1
    assert "'count' must be" in capsys.readouterr().out


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out