# gllparse

`gllparse` decides whether a string belongs to the language of a context-free
grammar. It uses a generalised LL (GLL) recogniser. The parse branches share a
graph-structured stack, and descriptor sets keep the same work from being done
twice.

The package also has a generator that lists the sentences of a grammar, and a
runner that checks a grammar against a list of inputs and their expected results.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Grammar files

A grammar is plain text with one rule per line:

```
S -> aSb | _
```

- Nonterminals are single upper-case letters `A` to `Z`. The start symbol is `S`.
- Every other character on the right-hand side is a terminal.
- `|` separates alternatives and spaces are ignored.
- `_` stands for the empty string (epsilon).
- A nonterminal may have more than one line. Its alternatives are then combined,
  and the alternatives from the later line come first.
- A rule that refers to a nonterminal with no rule of its own, or a line whose
  nonterminal is not followed by ` ->`, raises `GrammarError`.

The grammar ends at the end of the text, or at the first line that does not start
with a nonterminal. Whatever follows that line's first character is kept as
`Grammar.trailing`. Test files use this to hold their cases.

## Command line

Check one input against a grammar:

```
gllparse grammar.txt aabb
```

This prints the parsing result, `1` for accepted and `0` for rejected, and the
CPU time the run took. A grammar without an `S` rule accepts nothing.

List the sentences a grammar generates, breadth first from `S`:

```
gllparse-gen grammar.txt 10
```

The optional count limits how many sentences are printed. `-1` or leaving it out
means no limit, so generation goes on for as long as the grammar has sentences.
The output is the grammar, a `#` line, and then one sentence per line, each
followed by ` 1`. That is the test-file format described below.

Run test files:

```
gllparse-test tests_folder/ 5
gllparse-test one_grammar.txt
```

A test file holds a grammar, a line holding `#`, and then one case per line: the
input, a space, and `1` if the input should be accepted or `0` if it should be
rejected. Any other flag raises `GrammarError`, which the command reports as a
faulty grammar file. Given a folder, the command prints a header line and then
runs every file in it in name order. The optional second argument is the number
of repetitions to average the timing over, and it must be positive.

For each case, one colon-separated line reports the file, the input size, the
result, the expected result, the clock ticks and CPU time, the number of entries
left in the R, U and P descriptor sets, the number of stack nodes and edges, and
whether the case passed.

Measure how parsing scales as the input grows:

```
gllparse-growth grammar.txt 3 10 +1 a b c
```

The arguments are the grammar file, the repetitions, the number of tests (`-1`
runs without end), and the growth operation (`+N` or `*N`). The remaining
arguments are substrings. The input for each test joins them together, and every
substring at an odd position is repeated. The repeat count starts at 1 and grows
by the operation after each test. Every input is expected to be accepted.

## Python API

```python
from gllparse.grammar import Grammar
from gllparse.parser import GLLParser, parse

grammar = Grammar.from_text("S -> aSb | _\n")

parse(grammar, "aabb")   # True
parse(grammar, "aab")    # False

parser = GLLParser(grammar)
parser.parse("ab")       # True
```

`GLLParser` and `parse` also take the grammar as text. After a call to
`GLLParser.parse`, the stack and descriptor sets of that parse stay available as
`parser.gss` and `parser.sets`.

`Grammar.from_file(path)` reads a grammar from a file. `Grammar.format()` renders
the grammar back into the text format. `Grammar.in_first(rule, char)` and
`Grammar.in_follow(rule, char)` query the FIRST and FOLLOW sets of a nonterminal.
In these sets `_` marks the empty string and `"\0"` the end of the input.

Sentences can be generated from Python as well:

```python
from gllparse.generator import generate

for sentence in generate(grammar, 3):
    print(repr(sentence))
```

`generate` raises `GrammarError` if the grammar has no `S` rule.

Test files can be read and run from Python:

```python
import sys
from gllparse.runner import read_cases, run_file, run_path, build_input

build_input(["x", "ab", "y"], 3)                # "xabababy"
list(read_cases("\nab 1\nba 0"))                # [("ab", True), ("ba", False)]
results = run_path("tests_folder/", 1, sys.stdout)
```

`run_file` and `run_path` return a list of `CaseResult` objects. Each has a
`passed` property and a `format()` method that gives the report line.

## What it does not do

- It only recognises. It answers yes or no and builds no parse tree or parse forest.
- Nonterminals are limited to the 26 letters `A` to `Z`, and every terminal is a
  single character.
- An input stops at its first NUL character.