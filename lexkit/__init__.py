"""Building blocks for table-driven lexer generators: UTF helpers,
character partitions, DFA state machines, regex tokens and C++ rules."""

__version__ = "0.1.0"