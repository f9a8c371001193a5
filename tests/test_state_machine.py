import io

import pytest

from lexkit.errors import LexerError
from lexkit.partition import CharRanges
from lexkit.state_machine import (
    NPOS,
    POP_DFA_BIT,
    TRANSITIONS_INDEX,
    CharStateMachine,
    Internals,
    PushPopDfa,
    StateMachine,
    load,
    save,
    sm_to_csm,
)

ALPHABET = TRANSITIONS_INDEX + 2
A, B = ord("a"), ord("b")


def _row(end=0, id_=0, user_id=NPOS, push=NPOS, next_dfa=0, eol=0,
         on_a=0, on_b=0):
    return [end, id_, user_id, push, next_dfa, eol, on_a, on_b]


def _lookup():
    table = [0] * 256
    table[A] = TRANSITIONS_INDEX
    table[B] = TRANSITIONS_INDEX + 1
    return table


def _machine():
    dfa = (_row() + _row(on_a=2, on_b=3)
           + _row(end=1, id_=1) + _row(end=1, id_=1))
    return StateMachine(Internals(eoi=0, lookup=[_lookup()],
                                  dfa_alphabet=[ALPHABET], dfa=[dfa]))


def test_minimise_merges_identical_rows():
    sm = _machine()
    sm.minimise()
    table = sm.internals.dfa[0]
    assert len(table) == 3 * ALPHABET
    start = table[ALPHABET:2 * ALPHABET]
    assert start[TRANSITIONS_INDEX] == start[TRANSITIONS_INDEX + 1] == 2


def test_minimise_leaves_distinct_rows():
    dfa = _row() + _row(on_a=2) + _row(end=1, id_=1)
    sm = StateMachine(Internals(lookup=[_lookup()], dfa_alphabet=[ALPHABET],
                                dfa=[list(dfa)]))
    sm.minimise()
    assert sm.internals.dfa[0] == dfa


def test_minimise_remaps_bol_index():
    sm = _machine()
    sm.internals.dfa[0][0] = 3
    sm.minimise()
    assert sm.internals.dfa[0][0] == 2


def test_clear_and_empty():
    sm = _machine()
    assert not sm.empty
    sm.internals.eoi = 5
    sm.clear()
    assert sm.empty
    assert sm.eoi == 0
    assert sm.internals == Internals()


def test_sm_to_csm_builds_states():
    csm = sm_to_csm(_machine())
    assert csm.size == 1
    dfa = csm.dfas[0]
    assert len(dfa) == 3
    assert dfa.bol_index == NPOS
    start = dfa.states[0]
    assert start.transitions == {1: CharRanges([(A, A)]),
                                 2: CharRanges([(B, B)])}
    assert dfa.states[1].end_state and dfa.states[1].id == 1
    assert not start.end_state


def test_csm_minimise_merges_and_joins_ranges():
    csm = sm_to_csm(_machine())
    csm.minimise()
    dfa = csm.dfas[0]
    assert len(dfa) == 2
    assert dfa.states[0].transitions == {1: CharRanges([(A, B)])}
    assert dfa.states[1].id == 1


def test_minimised_sm_matches_minimised_csm():
    sm = _machine()
    csm = sm_to_csm(sm)
    csm.minimise()
    sm.minimise()
    assert sm_to_csm(sm).dfas == csm.dfas


def test_append_flags_and_eol():
    dfa = (_row() + _row(push=1, eol=2, on_a=2)
           + _row(end=1 | POP_DFA_BIT, id_=4))
    internals = Internals(lookup=[_lookup()], dfa_alphabet=[ALPHABET],
                          dfa=[dfa])
    csm = sm_to_csm(StateMachine(internals))
    first, second = csm.dfas[0].states
    assert first.push_pop_dfa is PushPopDfa.PUSH
    assert first.eol_index == 1
    assert second.push_pop_dfa is PushPopDfa.POP
    assert second.eol_index == NPOS


def test_append_with_bol_index():
    sm = _machine()
    sm.internals.dfa[0][0] = 2
    csm = CharStateMachine()
    csm.append([CharRanges([(A, A)]), CharRanges([(B, B)])], sm.internals, 0)
    assert csm.dfas[0].bol_index == 1


def test_empty_alphabet_dfa_skipped():
    sm = _machine()
    sm.internals.lookup.append([0] * 256)
    sm.internals.dfa_alphabet.append(0)
    sm.internals.dfa.append([])
    csm = sm_to_csm(sm)
    assert csm.size == 1
    csm.clear()
    assert csm.empty


def test_save_load_round_trip():
    sm = _machine()
    sm.internals.features = 3
    buffer = io.StringIO()
    save(sm, buffer)
    buffer.seek(0)
    assert load(buffer) == sm


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    '{"eoi": 0}',
    '{"eoi": "x", "lookup": [], "dfa_alphabet": [], "features": 0, "dfa": []}',
    '{"eoi": 0, "lookup": [[0]], "dfa_alphabet": [], "features": 0, "dfa": []}',
])
def test_load_rejects_bad_data(text):
    with pytest.raises(LexerError):
        load(io.StringIO(text))