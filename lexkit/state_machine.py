"""Compiled DFA tables and their per-character-set form.

A :class:`StateMachine` holds one flat transition table per lexer start
state. Each table is a sequence of rows of ``dfa_alphabet`` entries. A
row begins with a header laid out by the ``*_INDEX`` constants, and the
transitions follow from ``TRANSITIONS_INDEX`` onwards. Row 0 is the
single "jam" state. Its first entry holds the beginning-of-line start
row, or 0 when there is none.

:class:`CharStateMachine` presents the same machine as states whose
transitions are keyed by target state and labelled with character
ranges. It is built with :func:`sm_to_csm`.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

from .errors import LexerError
from .partition import CharRanges

NPOS = (1 << 64) - 1
SKIP = (1 << 64) - 2

END_STATE_INDEX = 0
ID_INDEX = 1
USER_ID_INDEX = 2
PUSH_DFA_INDEX = 3
NEXT_DFA_INDEX = 4
EOL_INDEX = 5
TRANSITIONS_INDEX = 6

END_STATE_BIT = 1
POP_DFA_BIT = 2

_CHAR_COUNT = 256


@dataclass
class Internals:
    """The raw tables behind a :class:`StateMachine`."""

    eoi: int = 0
    lookup: list[list[int]] = field(default_factory=list)
    dfa_alphabet: list[int] = field(default_factory=list)
    features: int = 0
    dfa: list[list[int]] = field(default_factory=list)

    def clear(self) -> None:
        """Reset to an empty machine."""
        self.eoi = 0
        self.lookup = []
        self.dfa_alphabet = []
        self.features = 0
        self.dfa = []

    @property
    def empty(self) -> bool:
        return not self.dfa


def _split_rows(table: Sequence[int], alphabet: int) -> list[list[int]]:
    return [list(table[start:start + alphabet])
            for start in range(0, len(table), alphabet)]


def _minimise_table(alphabet: int, table: list[int]) -> list[int]:
    """Merge identical rows of one flat DFA table in a single pass."""
    rows = _split_rows(table, alphabet)
    lookup = [NPOS] * len(rows)
    lookup[0] = 0
    merged: set[int] = set()
    new_index = 1

    # Row 0 is the only jam state, so it is never compared.
    for index in range(1, len(rows)):
        for curr in range(index + 1, len(rows)):
            if curr in merged:
                continue
            if rows[curr] == rows[index]:
                merged.add(curr)
                lookup[curr] = new_index
        if lookup[index] == NPOS:
            lookup[index] = new_index
            new_index += 1

    if not merged:
        return table

    first = list(rows[0])
    bol_index = table[0]
    if bol_index:
        first[0] = lookup[bol_index]

    result = first
    for index, row in enumerate(rows[1:], start=1):
        if index in merged:
            continue
        result.extend(row[:EOL_INDEX])
        result.append(lookup[row[EOL_INDEX]])
        result.extend(lookup[target] for target in row[TRANSITIONS_INDEX:])
    return result


class StateMachine:
    """A set of DFAs, one per lexer start state, held as flat tables."""

    NPOS = NPOS
    SKIP = SKIP

    def __init__(self, internals: Internals | None = None) -> None:
        self.internals = internals if internals is not None else Internals()

    def clear(self) -> None:
        """Discard all tables."""
        self.internals.clear()

    @property
    def empty(self) -> bool:
        return self.internals.empty

    @property
    def eoi(self) -> int:
        return self.internals.eoi

    def minimise(self) -> None:
        """Merge equivalent states until no more can be merged."""
        internals = self.internals
        for index, alphabet in enumerate(internals.dfa_alphabet):
            if alphabet == 0:
                continue
            while True:
                before = len(internals.dfa[index])
                internals.dfa[index] = _minimise_table(
                    alphabet, internals.dfa[index])
                if len(internals.dfa[index]) == before:
                    break

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateMachine):
            return NotImplemented
        return self.internals == other.internals

    def __repr__(self) -> str:
        return f"StateMachine({self.internals!r})"


class PushPopDfa(enum.Enum):
    NEITHER = 0
    PUSH = 1
    POP = 2


@dataclass
class State:
    """One DFA state with transitions labelled by character ranges."""

    end_state: bool = False
    push_pop_dfa: PushPopDfa = PushPopDfa.NEITHER
    id: int = 0
    user_id: int = NPOS
    push_dfa: int = NPOS
    next_dfa: int = 0
    eol_index: int = NPOS
    transitions: dict[int, CharRanges] = field(default_factory=dict)


@dataclass
class Dfa:
    """The states of one start state's DFA."""

    states: list[State] = field(default_factory=list)
    bol_index: int = NPOS

    @classmethod
    def with_states(cls, count: int) -> Dfa:
        return cls([State() for _ in range(count)])

    def __len__(self) -> int:
        return len(self.states)


def _add_transition(transitions: dict[int, CharRanges], target: int,
                    chars: CharRanges) -> None:
    existing = transitions.get(target)
    if existing is None:
        transitions[target] = CharRanges(chars)
    else:
        existing.merge(chars)


def _minimise_csm_dfa(dfa: Dfa) -> Dfa | None:
    """Merge identical states in one pass; None when nothing merged."""
    states = dfa.states
    lookup = [NPOS] * len(states)
    merged: set[int] = set()
    new_index = 0

    for index, state in enumerate(states):
        for curr in range(index + 1, len(states)):
            if curr in merged:
                continue
            if state == states[curr]:
                merged.add(curr)
                lookup[curr] = new_index
        if lookup[index] == NPOS:
            lookup[index] = new_index
            new_index += 1

    if not merged:
        return None

    new_dfa = Dfa.with_states(new_index)
    if dfa.bol_index != NPOS:
        new_dfa.bol_index = lookup[dfa.bol_index]

    kept = (state for index, state in enumerate(states)
            if index not in merged)
    for new_state, state in zip(new_dfa.states, kept):
        new_state.end_state = state.end_state
        new_state.push_pop_dfa = state.push_pop_dfa
        new_state.id = state.id
        new_state.user_id = state.user_id
        new_state.push_dfa = state.push_dfa
        new_state.next_dfa = state.next_dfa
        if state.eol_index != NPOS:
            new_state.eol_index = lookup[state.eol_index]
        for target, chars in state.transitions.items():
            _add_transition(new_state.transitions, lookup[target], chars)
    return new_dfa


class CharStateMachine:
    """A state machine whose transitions carry character ranges."""

    NPOS = NPOS
    SKIP = SKIP

    def __init__(self) -> None:
        self.dfas: list[Dfa] = []

    def append(self, token_vector: Sequence[CharRanges], internals: Internals,
               dfa_index: int) -> None:
        """Add the DFA *dfa_index* of *internals*.

        *token_vector* gives the characters of each equivalence column.
        """
        dfa_alphabet = internals.dfa_alphabet[dfa_index]
        alphabet = dfa_alphabet - TRANSITIONS_INDEX
        rows = _split_rows(internals.dfa[dfa_index], dfa_alphabet)
        dest = Dfa.with_states(len(rows) - 1)

        if rows[0][0]:
            dest.bol_index = rows[0][0] - 1

        for state, row in zip(dest.states, rows[1:]):
            state.end_state = row[END_STATE_INDEX] != 0
            if row[PUSH_DFA_INDEX] != NPOS:
                state.push_pop_dfa = PushPopDfa.PUSH
            elif row[END_STATE_INDEX] & POP_DFA_BIT:
                state.push_pop_dfa = PushPopDfa.POP
            state.id = row[ID_INDEX]
            state.user_id = row[USER_ID_INDEX]
            state.push_dfa = row[PUSH_DFA_INDEX]
            state.next_dfa = row[NEXT_DFA_INDEX]
            if row[EOL_INDEX]:
                state.eol_index = row[EOL_INDEX] - 1
            columns = row[TRANSITIONS_INDEX:TRANSITIONS_INDEX + alphabet]
            for column, target in enumerate(columns):
                if target > 0:
                    _add_transition(state.transitions, target - 1,
                                    token_vector[column])
        self.dfas.append(dest)

    def clear(self) -> None:
        """Discard all DFAs."""
        self.dfas.clear()

    @property
    def empty(self) -> bool:
        return not self.dfas

    @property
    def size(self) -> int:
        return len(self.dfas)

    def minimise(self) -> None:
        """Merge equivalent states until no more can be merged."""
        for index, dfa in enumerate(self.dfas):
            while len(dfa) > 0:
                reduced = _minimise_csm_dfa(dfa)
                if reduced is None:
                    break
                dfa = reduced
            self.dfas[index] = dfa


def sm_to_csm(sm: StateMachine) -> CharStateMachine:
    """Build the character-range form of *sm*.

    DFAs with an empty alphabet are left out.
    """
    internals = sm.internals
    csm = CharStateMachine()
    for index, dfa_alphabet in enumerate(internals.dfa_alphabet):
        if dfa_alphabet == 0:
            continue
        token_vector = [CharRanges()
                        for _ in range(dfa_alphabet - TRANSITIONS_INDEX)]
        for ch, column in enumerate(internals.lookup[index][:_CHAR_COUNT]):
            if column >= TRANSITIONS_INDEX:
                token_vector[column - TRANSITIONS_INDEX].add(ch, ch)
        csm.append(token_vector, internals, index)
    return csm


def save(sm: StateMachine, fp: TextIO) -> None:
    """Write the tables of *sm* to the text file *fp* as JSON."""
    internals = sm.internals
    json.dump({
        "eoi": internals.eoi,
        "lookup": internals.lookup,
        "dfa_alphabet": internals.dfa_alphabet,
        "features": internals.features,
        "dfa": internals.dfa,
    }, fp)


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LexerError(f"{name} must be an integer")
    return value


def _int_list(value: Any, name: str) -> list[int]:
    if not isinstance(value, list):
        raise LexerError(f"{name} must be a list")
    return [_int(item, name) for item in value]


def _int_table(value: Any, name: str) -> list[list[int]]:
    if not isinstance(value, list):
        raise LexerError(f"{name} must be a list")
    return [_int_list(row, name) for row in value]


def load(fp: TextIO) -> StateMachine:
    """Read a state machine written by :func:`save`."""
    try:
        data = json.load(fp)
    except json.JSONDecodeError as exc:
        raise LexerError(f"invalid state machine data: {exc}") from exc
    if not isinstance(data, dict):
        raise LexerError("state machine data must be an object")
    try:
        internals = Internals(
            eoi=_int(data["eoi"], "eoi"),
            lookup=_int_table(data["lookup"], "lookup"),
            dfa_alphabet=_int_list(data["dfa_alphabet"], "dfa_alphabet"),
            features=_int(data["features"], "features"),
            dfa=_int_table(data["dfa"], "dfa"),
        )
    except KeyError as exc:
        raise LexerError(f"missing field {exc.args[0]!r}") from exc
    if not (len(internals.lookup) == len(internals.dfa_alphabet)
            == len(internals.dfa)):
        raise LexerError("table counts do not agree")
    return StateMachine(internals)