import re

from lexkit.cpp_tokens import CppId, build_cpp, cpp_macros, cpp_rules

MACRO_REF = re.compile(r"\{([A-Za-z_][A-Za-z0-9_-]*)\}")


class Recorder:
    def __init__(self):
        self.calls = []

    def insert_macro(self, name, regex):
        self.calls.append(("macro", name, regex))

    def push(self, regex, id):
        self.calls.append(("rule", regex, id))


def test_id_numbering_follows_declaration():
    rules = dict(cpp_rules())
    assert rules["bitand"] == 1
    assert rules["and_eq"] == 2
    assert rules["and"] == 3
    assert rules["xor"] == 8
    assert rules["\\\\{Newline}"] is max(CppId)
    assert sorted(int(i) for i in CppId) == list(range(len(CppId)))


def test_build_cpp_inserts_macros_then_rules():
    sink = Recorder()
    build_cpp(sink)
    kinds = [call[0] for call in sink.calls]
    macros = cpp_macros()
    rules = cpp_rules()
    assert kinds == ["macro"] * len(macros) + ["rule"] * len(rules)
    assert [(name, regex) for _, name, regex in sink.calls[:len(macros)]] \
        == macros
    assert [(regex, i) for _, regex, i in sink.calls[len(macros):]] == rules


def test_macros_only_reference_earlier_macros():
    defined = set()
    for name, regex in cpp_macros():
        assert set(MACRO_REF.findall(regex)) <= defined
        defined.add(name)


def test_rules_only_reference_defined_macros():
    defined = {name for name, _ in cpp_macros()}
    for regex, _ in cpp_rules():
        assert set(MACRO_REF.findall(regex)) <= defined


def test_keyword_mapping():
    rules = dict(cpp_rules())
    assert rules["import"] is CppId.IDENTIFIER
    assert rules["alignas"] is CppId.ALIGNAS
    assert rules["__int64"] is CppId.MSEXT_INT64
    assert rules["wchar_t"] is CppId.WCHART
    assert rules["{Newline}"] is CppId.NEWLINE


def test_first_and_last_rules():
    rules = cpp_rules()
    assert rules[0] == ("\\\\{Newline}", CppId.BS_NEWLINE)
    assert rules[-1][1] is CppId.NEWLINE


def test_any_macro_covers_high_bytes():
    macros = dict(cpp_macros())
    assert macros["any"].endswith("\xff]")
    assert macros["Digit"] == "[0-9]"


def test_returned_lists_are_copies():
    rules = cpp_rules()
    rules.clear()
    assert cpp_rules()
    macros = cpp_macros()
    macros.clear()
    assert cpp_macros()