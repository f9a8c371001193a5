"""Token ids, macros and rules for lexing C++ source.

The rule set accepts '$' in identifiers, recognises C++11 keywords and
literals and Microsoft extensions, and treats ``import`` as a plain
identifier.
"""

from __future__ import annotations

import enum
from typing import Protocol


class CppId(enum.IntEnum):
    """Ids of the C++ tokens."""

    ERROR = 0
    AND_ALT = enum.auto()
    ANDASSIGN_ALT = enum.auto()
    ANDAND_ALT = enum.auto()
    OR_ALT = enum.auto()
    ORASSIGN_ALT = enum.auto()
    OROR_ALT = enum.auto()
    XORASSIGN_ALT = enum.auto()
    XOR_ALT = enum.auto()
    NOTEQUAL_ALT = enum.auto()
    NOT_ALT = enum.auto()
    COMPL_ALT = enum.auto()
    IMPORT = enum.auto()
    ARROWSTAR = enum.auto()
    DOTSTAR = enum.auto()
    COLON_COLON = enum.auto()
    AND = enum.auto()
    ANDAND = enum.auto()
    ASSIGN = enum.auto()
    ANDASSIGN = enum.auto()
    OR = enum.auto()
    OR_TRIGRAPH = enum.auto()
    ORASSIGN = enum.auto()
    ORASSIGN_TRIGRAPH = enum.auto()
    XOR = enum.auto()
    XOR_TRIGRAPH = enum.auto()
    XORASSIGN = enum.auto()
    XORASSIGN_TRIGRAPH = enum.auto()
    COMMA = enum.auto()
    COLON = enum.auto()
    DIVIDEASSIGN = enum.auto()
    DIVIDE = enum.auto()
    DOT = enum.auto()
    ELLIPSIS = enum.auto()
    EQUAL = enum.auto()
    GREATER = enum.auto()
    GREATEREQUAL = enum.auto()
    LEFTBRACE = enum.auto()
    LEFTBRACE_ALT = enum.auto()
    LEFTBRACE_TRIGRAPH = enum.auto()
    LESS = enum.auto()
    LESSEQUAL = enum.auto()
    LEFTPAREN = enum.auto()
    LEFTBRACKET = enum.auto()
    LEFTBRACKET_ALT = enum.auto()
    LEFTBRACKET_TRIGRAPH = enum.auto()
    MINUS = enum.auto()
    MINUSASSIGN = enum.auto()
    MINUSMINUS = enum.auto()
    PERCENT = enum.auto()
    PERCENTASSIGN = enum.auto()
    NOT = enum.auto()
    NOTEQUAL = enum.auto()
    OROR = enum.auto()
    OROR_TRIGRAPH = enum.auto()
    PLUS = enum.auto()
    PLUSASSIGN = enum.auto()
    PLUSPLUS = enum.auto()
    ARROW = enum.auto()
    QUESTION_MARK = enum.auto()
    RIGHTBRACE = enum.auto()
    RIGHTBRACE_ALT = enum.auto()
    RIGHTBRACE_TRIGRAPH = enum.auto()
    RIGHTPAREN = enum.auto()
    RIGHTBRACKET = enum.auto()
    RIGHTBRACKET_ALT = enum.auto()
    RIGHTBRACKET_TRIGRAPH = enum.auto()
    SEMICOLON = enum.auto()
    SHIFTLEFT = enum.auto()
    SHIFTLEFTASSIGN = enum.auto()
    SHIFTRIGHT = enum.auto()
    SHIFTRIGHTASSIGN = enum.auto()
    STAR = enum.auto()
    COMPL = enum.auto()
    COMPL_TRIGRAPH = enum.auto()
    STARASSIGN = enum.auto()
    ASM = enum.auto()
    AUTO = enum.auto()
    BOOL = enum.auto()
    FALSE = enum.auto()
    TRUE = enum.auto()
    BREAK = enum.auto()
    CASE = enum.auto()
    CATCH = enum.auto()
    CHAR = enum.auto()
    CLASS = enum.auto()
    CONST = enum.auto()
    CONSTCAST = enum.auto()
    CONTINUE = enum.auto()
    DEFAULT = enum.auto()
    DELETE = enum.auto()
    DO = enum.auto()
    DOUBLE = enum.auto()
    DYNAMICCAST = enum.auto()
    ELSE = enum.auto()
    ENUM = enum.auto()
    EXPLICIT = enum.auto()
    EXPORT = enum.auto()
    EXTERN = enum.auto()
    FLOAT = enum.auto()
    FOR = enum.auto()
    FRIEND = enum.auto()
    GOTO = enum.auto()
    IF = enum.auto()
    INLINE = enum.auto()
    INT = enum.auto()
    LONG = enum.auto()
    MUTABLE = enum.auto()
    NAMESPACE = enum.auto()
    NEW = enum.auto()
    OPERATOR = enum.auto()
    PRIVATE = enum.auto()
    PROTECTED = enum.auto()
    PUBLIC = enum.auto()
    REGISTER = enum.auto()
    REINTERPRETCAST = enum.auto()
    RETURN = enum.auto()
    SHORT = enum.auto()
    SIGNED = enum.auto()
    SIZEOF = enum.auto()
    STATIC = enum.auto()
    STATICCAST = enum.auto()
    STRUCT = enum.auto()
    SWITCH = enum.auto()
    TEMPLATE = enum.auto()
    THIS = enum.auto()
    THROW = enum.auto()
    TRY = enum.auto()
    TYPEDEF = enum.auto()
    TYPEID = enum.auto()
    TYPENAME = enum.auto()
    UNION = enum.auto()
    UNSIGNED = enum.auto()
    USING = enum.auto()
    VIRTUAL = enum.auto()
    VOID = enum.auto()
    VOLATILE = enum.auto()
    WCHART = enum.auto()
    WHILE = enum.auto()
    PP_DEFINE = enum.auto()
    PP_IF = enum.auto()
    PP_IFDEF = enum.auto()
    PP_IFNDEF = enum.auto()
    PP_ELSE = enum.auto()
    PP_ELIF = enum.auto()
    PP_ENDIF = enum.auto()
    PP_ERROR = enum.auto()
    PP_QHEADER = enum.auto()
    PP_HHEADER = enum.auto()
    PP_INCLUDE = enum.auto()
    PP_LINE = enum.auto()
    PP_PRAGMA = enum.auto()
    PP_UNDEF = enum.auto()
    PP_WARNING = enum.auto()
    MSEXT_INT8 = enum.auto()
    MSEXT_INT16 = enum.auto()
    MSEXT_INT32 = enum.auto()
    MSEXT_INT64 = enum.auto()
    MSEXT_BASED = enum.auto()
    MSEXT_DECLSPEC = enum.auto()
    MSEXT_CDECL = enum.auto()
    MSEXT_FASTCALL = enum.auto()
    MSEXT_STDCALL = enum.auto()
    MSEXT_TRY = enum.auto()
    MSEXT_EXCEPT = enum.auto()
    MSEXT_FINALLY = enum.auto()
    MSEXT_LEAVE = enum.auto()
    MSEXT_INLINE = enum.auto()
    MSEXT_ASM = enum.auto()
    MSEXT_PP_REGION = enum.auto()
    MSEXT_PP_ENDREGION = enum.auto()
    LONGINTLIT = enum.auto()
    INTLIT = enum.auto()
    FLOATLIT = enum.auto()
    IDENTIFIER = enum.auto()
    CCOMMENT = enum.auto()
    CPPCOMMENT = enum.auto()
    CHARLIT = enum.auto()
    STRINGLIT = enum.auto()
    SPACE = enum.auto()
    SPACE2 = enum.auto()
    CONTLINE = enum.auto()
    NEWLINE = enum.auto()
    POUND_POUND = enum.auto()
    POUND_POUND_ALT = enum.auto()
    POUND_POUND_TRIGRAPH = enum.auto()
    POUND = enum.auto()
    POUND_ALT = enum.auto()
    POUND_TRIGRAPH = enum.auto()
    ANY_TRIGRAPH = enum.auto()
    ANY = enum.auto()
    ALIGNAS = enum.auto()
    ALIGNOF = enum.auto()
    CHAR16_T = enum.auto()
    CHAR32_T = enum.auto()
    CONSTEXPR = enum.auto()
    DECLTYPE = enum.auto()
    NOEXCEPT = enum.auto()
    NULLPTR = enum.auto()
    STATICASSERT = enum.auto()
    THREADLOCAL = enum.auto()
    RAWSTRINGLIT = enum.auto()
    BS_NEWLINE = enum.auto()


_MACROS: tuple[tuple[str, str], ...] = (
    ("any", "[\t\v\f\r\n\040-\377]"),
    ("anyctrl", "[\001-\037]"),
    ("OctalDigit", "[0-7]"),
    ("Digit", "[0-9]"),
    ("HexDigit", "[a-fA-F0-9]"),
    ("Integer", "((0[xX]{HexDigit}+)|(0{OctalDigit}*)|([1-9]{Digit}*))"),
    ("ExponentStart", "[Ee][-+]"),
    ("ExponentPart", "[Ee][-+]?{Digit}+"),
    ("FractionalConstant", "({Digit}*[.]{Digit}+)|({Digit}+[.])"),
    ("FloatingSuffix", "[fF][lL]?|[lL][fF]?"),
    ("IntegerSuffix", "[uU][lL]?|[lL][uU]?"),
    ("LongIntegerSuffix", "[uU]([lL][lL])|([lL][lL])[uU]?"),
    ("MSLongIntegerSuffix", "u?i64"),
    ("Backslash", "[\\\\]|\"??/\""),
    ("EscapeSequence",
     "{Backslash}([abfnrtv?'\"]|{Backslash}|x{HexDigit}+|"
     "{OctalDigit}{OctalDigit}?{OctalDigit}?)"),
    ("HexQuad", "{HexDigit}{HexDigit}{HexDigit}{HexDigit}"),
    ("UniversalChar", "{Backslash}(u{HexQuad}|U{HexQuad}{HexQuad})"),
    ("Newline", "\r\n|\n|\r"),
    ("PPSpace", "([ \t\f\v]|(\"/*\"({any}{-}[*]|{Newline}|"
     "([*]+({any}{-}[*/]|{Newline})))*[*]+[/]))*"),
    ("Pound", "#|\"??=\"|%:"),
    ("NonDigit", "[a-zA-Z$]|{UniversalChar}"),
)

_RULES: tuple[tuple[str, CppId], ...] = (
    ("\\\\{Newline}", CppId.BS_NEWLINE),
    ("[/][*].{+}[\r\n]*?[*][/]", CppId.CCOMMENT),
    ("[/][/].*", CppId.CPPCOMMENT),
    ("[.]?{Digit}({FractionalConstant}{ExponentPart}?|"
     "{Digit}+{ExponentPart}){FloatingSuffix}?", CppId.FLOATLIT),
    ("{Integer}({LongIntegerSuffix}|{MSLongIntegerSuffix})",
     CppId.LONGINTLIT),
    ("{Integer}{IntegerSuffix}?", CppId.INTLIT),
    ("alignas", CppId.ALIGNAS),
    ("alignof", CppId.ALIGNOF),
    ("char16_t", CppId.CHAR16_T),
    ("char32_t", CppId.CHAR32_T),
    ("constexpr", CppId.CONSTEXPR),
    ("decltype", CppId.DECLTYPE),
    ("noexcept", CppId.NOEXCEPT),
    ("nullptr", CppId.NULLPTR),
    ("static_assert", CppId.STATICASSERT),
    ("thread_local", CppId.THREADLOCAL),
    ("(L|[uU]|u8)?R[\"][(].{+}[\r\n]*?[)][\"]", CppId.RAWSTRINGLIT),
    ("(L|[uU])?'({EscapeSequence}|{UniversalChar}|"
     "{any}{-}[\n\r\\\\'])'", CppId.CHARLIT),
    ("(L|[uU]|u8)?[\"]({EscapeSequence}|{UniversalChar}|"
     "{any}{-}[\n\r\\\\\"]|\\\\{Newline})*[\"]", CppId.STRINGLIT),
    ("asm", CppId.ASM),
    ("auto", CppId.AUTO),
    ("bool", CppId.BOOL),
    ("break", CppId.BREAK),
    ("case", CppId.CASE),
    ("catch", CppId.CATCH),
    ("char", CppId.CHAR),
    ("class", CppId.CLASS),
    ("const", CppId.CONST),
    ("const_cast", CppId.CONSTCAST),
    ("continue", CppId.CONTINUE),
    ("default", CppId.DEFAULT),
    ("delete", CppId.DELETE),
    ("do", CppId.DO),
    ("double", CppId.DOUBLE),
    ("dynamic_cast", CppId.DYNAMICCAST),
    ("else", CppId.ELSE),
    ("enum", CppId.ENUM),
    ("explicit", CppId.EXPLICIT),
    ("export", CppId.EXPORT),
    ("extern", CppId.EXTERN),
    ("false", CppId.FALSE),
    ("float", CppId.FLOAT),
    ("for", CppId.FOR),
    ("friend", CppId.FRIEND),
    ("goto", CppId.GOTO),
    ("if", CppId.IF),
    ("import", CppId.IDENTIFIER),
    ("inline", CppId.INLINE),
    ("int", CppId.INT),
    ("long", CppId.LONG),
    ("mutable", CppId.MUTABLE),
    ("namespace", CppId.NAMESPACE),
    ("new", CppId.NEW),
    ("operator", CppId.OPERATOR),
    ("private", CppId.PRIVATE),
    ("protected", CppId.PROTECTED),
    ("public", CppId.PUBLIC),
    ("register", CppId.REGISTER),
    ("reinterpret_cast", CppId.REINTERPRETCAST),
    ("return", CppId.RETURN),
    ("short", CppId.SHORT),
    ("signed", CppId.SIGNED),
    ("sizeof", CppId.SIZEOF),
    ("static", CppId.STATIC),
    ("static_cast", CppId.STATICCAST),
    ("struct", CppId.STRUCT),
    ("switch", CppId.SWITCH),
    ("template", CppId.TEMPLATE),
    ("this", CppId.THIS),
    ("throw", CppId.THROW),
    ("true", CppId.TRUE),
    ("try", CppId.TRY),
    ("typedef", CppId.TYPEDEF),
    ("typeid", CppId.TYPEID),
    ("typename", CppId.TYPENAME),
    ("union", CppId.UNION),
    ("unsigned", CppId.UNSIGNED),
    ("using", CppId.USING),
    ("virtual", CppId.VIRTUAL),
    ("void", CppId.VOID),
    ("volatile", CppId.VOLATILE),
    ("wchar_t", CppId.WCHART),
    ("while", CppId.WHILE),
    ("__int8", CppId.MSEXT_INT8),
    ("__int16", CppId.MSEXT_INT16),
    ("__int32", CppId.MSEXT_INT32),
    ("__int64", CppId.MSEXT_INT64),
    ("_?_based", CppId.MSEXT_BASED),
    ("_?_declspec", CppId.MSEXT_DECLSPEC),
    ("_?_cdecl", CppId.MSEXT_CDECL),
    ("_?_fastcall", CppId.MSEXT_FASTCALL),
    ("_?_stdcall", CppId.MSEXT_STDCALL),
    ("__try", CppId.MSEXT_TRY),
    ("__except", CppId.MSEXT_EXCEPT),
    ("__finally", CppId.MSEXT_FINALLY),
    ("__leave", CppId.MSEXT_LEAVE),
    ("_?_inline", CppId.MSEXT_INLINE),
    ("_?_asm", CppId.MSEXT_ASM),
    ("{Pound}{PPSpace}using{PPSpace}"
     "<({any}{-}[\n\r>])+>", CppId.PP_HHEADER),
    ("{Pound}{PPSpace}(import|using){PPSpace}[\"]"
     "({any}{-}[\n\r\"])+[\"]", CppId.PP_QHEADER),
    ("[{]", CppId.LEFTBRACE),
    ("\"??<\"", CppId.LEFTBRACE_TRIGRAPH),
    ("<%", CppId.LEFTBRACE_ALT),
    ("[}]", CppId.RIGHTBRACE),
    ("\"??>\"", CppId.RIGHTBRACE_TRIGRAPH),
    ("%>", CppId.RIGHTBRACE_ALT),
    ("[[]", CppId.LEFTBRACKET),
    ("\"??(\"", CppId.LEFTBRACKET_TRIGRAPH),
    ("<:", CppId.LEFTBRACKET_ALT),
    ("\\]", CppId.RIGHTBRACKET),
    ("\"??)\"", CppId.RIGHTBRACKET_TRIGRAPH),
    (":>", CppId.RIGHTBRACKET_ALT),
    ("#", CppId.POUND),
    ("%:", CppId.POUND_ALT),
    ("\"??=\"", CppId.POUND_TRIGRAPH),
    ("##", CppId.POUND_POUND),
    ("\"#??=\"", CppId.POUND_POUND_TRIGRAPH),
    ("\"??=#\"", CppId.POUND_POUND_TRIGRAPH),
    ("\"??=??=\"", CppId.POUND_POUND_TRIGRAPH),
    ("%:%:", CppId.POUND_POUND_ALT),
    ("[(]", CppId.LEFTPAREN),
    ("[)]", CppId.RIGHTPAREN),
    (";", CppId.SEMICOLON),
    (":", CppId.COLON),
    ("\"...\"", CppId.ELLIPSIS),
    ("[?]", CppId.QUESTION_MARK),
    ("::", CppId.COLON_COLON),
    ("[.]", CppId.DOT),
    ("\".*\"", CppId.DOTSTAR),
    ("[+]", CppId.PLUS),
    ("-", CppId.MINUS),
    ("[*]", CppId.STAR),
    ("[/]", CppId.DIVIDE),
    ("%", CppId.PERCENT),
    ("\\^", CppId.XOR),
    ("\"??'\"", CppId.XOR_TRIGRAPH),
    ("xor", CppId.XOR_ALT),
    ("&", CppId.AND),
    ("bitand", CppId.AND_ALT),
    ("[|]", CppId.OR),
    ("bitor", CppId.OR_ALT),
    ("\"??!\"", CppId.OR_TRIGRAPH),
    ("~", CppId.COMPL),
    ("\"??-\"", CppId.COMPL_TRIGRAPH),
    ("compl", CppId.COMPL_ALT),
    ("!", CppId.NOT),
    ("not", CppId.NOT_ALT),
    ("=", CppId.ASSIGN),
    ("<", CppId.LESS),
    (">", CppId.GREATER),
    ("[+]=", CppId.PLUSASSIGN),
    ("-=", CppId.MINUSASSIGN),
    ("[*]=", CppId.STARASSIGN),
    ("[/]=", CppId.DIVIDEASSIGN),
    ("%=", CppId.PERCENTASSIGN),
    ("\\^=", CppId.XORASSIGN),
    ("xor_eq", CppId.XORASSIGN_ALT),
    ("\"??'=\"", CppId.XORASSIGN_TRIGRAPH),
    ("&=", CppId.ANDASSIGN),
    ("and_eq", CppId.ANDASSIGN_ALT),
    ("[|]=", CppId.ORASSIGN),
    ("or_eq", CppId.ORASSIGN_ALT),
    ("\"??!=\"", CppId.ORASSIGN_TRIGRAPH),
    ("<<", CppId.SHIFTLEFT),
    (">>", CppId.SHIFTRIGHT),
    (">>=", CppId.SHIFTRIGHTASSIGN),
    ("<<=", CppId.SHIFTLEFTASSIGN),
    ("==", CppId.EQUAL),
    ("!=", CppId.NOTEQUAL),
    ("not_eq", CppId.NOTEQUAL_ALT),
    ("<=", CppId.LESSEQUAL),
    (">=", CppId.GREATEREQUAL),
    ("&&", CppId.ANDAND),
    ("and", CppId.ANDAND_ALT),
    ("\"||\"", CppId.OROR),
    ("\"??!|\"", CppId.OROR_TRIGRAPH),
    ("\"|??!\"", CppId.OROR_TRIGRAPH),
    ("or", CppId.OROR_ALT),
    ("\"??!??!\"", CppId.OROR_TRIGRAPH),
    ("\"++\"", CppId.PLUSPLUS),
    ("--", CppId.MINUSMINUS),
    (",", CppId.COMMA),
    ("->[*]", CppId.ARROWSTAR),
    ("->", CppId.ARROW),
    ("\"??/\"", CppId.ANY_TRIGRAPH),
    ("L?('({EscapeSequence}|{UniversalChar}|"
     "{any}{-}[\n\r\\\\'])+')", CppId.CHARLIT),
    ("L?([\"]({EscapeSequence}|{UniversalChar}|"
     "{any}{-}[\n\r\\\\\"]|\\\\{Newline})*[\"])", CppId.STRINGLIT),
    ("([a-zA-Z_$]|{UniversalChar})([a-zA-Z_0-9$]|"
     "{UniversalChar})*", CppId.IDENTIFIER),
    ("{Pound}{PPSpace}(include|include_next){PPSpace}"
     "<({any}{-}[\n\r>])+>", CppId.PP_HHEADER),
    ("{Pound}{PPSpace}(include|include_next){PPSpace}[\"]"
     "({any}{-}[\n\r\"])+[\"]", CppId.PP_QHEADER),
    ("{Pound}{PPSpace}(include|include_next){PPSpace}", CppId.PP_INCLUDE),
    ("{Pound}{PPSpace}if", CppId.PP_IF),
    ("{Pound}{PPSpace}ifdef", CppId.PP_IFDEF),
    ("{Pound}{PPSpace}ifndef", CppId.PP_IFNDEF),
    ("{Pound}{PPSpace}else", CppId.PP_ELSE),
    ("{Pound}{PPSpace}elif", CppId.PP_ELIF),
    ("{Pound}{PPSpace}endif", CppId.PP_ENDIF),
    ("{Pound}{PPSpace}define", CppId.PP_DEFINE),
    ("{Pound}{PPSpace}undef", CppId.PP_UNDEF),
    ("{Pound}{PPSpace}line", CppId.PP_LINE),
    ("{Pound}{PPSpace}error", CppId.PP_ERROR),
    ("{Pound}{PPSpace}pragma", CppId.PP_PRAGMA),
    ("{Pound}{PPSpace}warning", CppId.PP_WARNING),
    ("{Pound}{PPSpace}region", CppId.MSEXT_PP_REGION),
    ("{Pound}{PPSpace}endregion", CppId.MSEXT_PP_ENDREGION),
    ("[ \t\v\f]+", CppId.SPACE),
    ("{Newline}", CppId.NEWLINE),
)


class RuleSink(Protocol):
    """Anything that accepts macro definitions and rules."""

    def insert_macro(self, name: str, regex: str) -> object: ...

    def push(self, regex: str, id: int) -> object: ...


def cpp_macros() -> list[tuple[str, str]]:
    """Return the (name, regex) macro definitions, in definition order."""
    return list(_MACROS)


def cpp_rules() -> list[tuple[str, CppId]]:
    """Return the (regex, id) rules, in priority order."""
    return list(_RULES)


def build_cpp(rules: RuleSink) -> None:
    """Insert every macro, then push every rule, into *rules*."""
    for name, regex in _MACROS:
        rules.insert_macro(name, regex)
    for regex, token_id in _RULES:
        rules.push(regex, token_id)