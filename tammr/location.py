"""
Points within a source text. The lexer stamps one of these on every token,
and the diagnostics module turns them back into an illustrated line of source.
"""
from typing import NamedTuple

class Position(NamedTuple):
	""" Purely diagnostic: line and column count from one; index from zero. """
	line: int
	column: int
	index: int

	def __str__(self): return "line %d, column %d" % (self.line, self.column)

START = Position(1, 1, 0)
