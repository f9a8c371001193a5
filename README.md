# lexkit

Building blocks for table-driven lexer generators.

## Modules

- `lexkit.utf` – lenient conversion between code units and code points:
  `utf8_decode` and `utf16_decode` yield code points, `utf8_encode` returns
  `bytes`, `utf16_encode` returns a list of 16-bit units, and `utf8_rewind` /
  `utf16_rewind` step an offset back by a number of code points.
  A malformed UTF-8 sequence never raises; an unpaired UTF-16 high surrogate
  raises `LexerError`.
- `lexkit.partition` – `CharRanges`, an ordered set of characters held as
  disjoint inclusive ranges, and the partitioning helpers `Charset` and
  `Equivset`. Each has an `intersect` method that removes the common part
  from both operands and returns it as a new set.
- `lexkit.state_machine` – `StateMachine`, a set of flat DFA transition
  tables (held in `Internals`) with `minimise`; `CharStateMachine`, the same
  machine as `Dfa` objects whose `State` transitions are labelled with
  `CharRanges`, built with `sm_to_csm`; and `save` / `load`, which write and
  read a `StateMachine` as JSON.
- `lexkit.re_token` – `TokenType` and `ReToken`, the token kinds of the
  regular-expression grammar with their operator-precedence relations
  (`ReToken.precedence`, `ReToken.precedence_string`).
- `lexkit.cpp_tokens` – a ready-made C++ token set: the `CppId`
  enumeration, the macro and rule tables (`cpp_macros`, `cpp_rules`) and
  `build_cpp`, which feeds them into any object offering
  `insert_macro(name, regex)` and `push(regex, id)`.
- `lexkit.errors` – `LexerError`, a `RuntimeError` subclass.

## Installation

```
pip install .
```

## Examples

```python
from lexkit.utf import utf8_decode, utf8_encode

data = "héllo €".encode("utf-8")
assert utf8_encode(utf8_decode(data)) == data
```

```python
from lexkit.partition import CharRanges

letters = CharRanges([(ord("a"), ord("z"))])
vowels = CharRanges((ord(ch), ord(ch)) for ch in "aeiou")

common = letters.intersect(vowels)   # the vowels, now removed from both sets
assert ord("e") in common and ord("e") not in letters
```

```python
from lexkit.re_token import ReToken, TokenType

token = ReToken(TokenType.BEGIN)
assert token.precedence(TokenType.CHARSET) == "<"
```

```python
from lexkit.cpp_tokens import CppId, cpp_rules

for regex, token_id in cpp_rules():
    if token_id is CppId.IDENTIFIER:
        print(regex)
```

```python
import io
from lexkit.state_machine import StateMachine, load, save

buffer = io.StringIO()
save(StateMachine(), buffer)
buffer.seek(0)
assert load(buffer) == StateMachine()
```

## What it does not do

lexkit has no regular-expression parser, no DFA generator and no matcher
that runs input against a state machine. `ReToken` describes tokens but
nothing here produces them from a pattern, and `build_cpp` only hands its
macros and rules to an object you supply. There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```