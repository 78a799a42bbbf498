"""
The vocabulary shared between lexer and parser.
"""
from enum import Enum
from typing import NamedTuple, Optional
from .location import Position

class TokenKind(Enum):
	KEYWORD = 'keyword'
	IDENT = 'identifier'
	NUMBER = 'number'
	STRING = 'string'

	SEMICOLON = ';'
	PLUS = '+'
	MINUS = '-'
	ASTERISK = '*'
	SLASH = '/'
	PERIOD = '.'
	ASSIGN = '='
	EQ = '=='
	BANG = '!'
	NOT_EQ = '!='
	LT = '<'
	GT = '>'
	LPAREN = '('
	RPAREN = ')'
	LBRACE = '{'
	RBRACE = '}'
	LBRACKET = '['
	RBRACKET = ']'
	COMMA = ','
	COLON = ':'

	EOF = 'end of input'

	def __repr__(self): return self.name

class Keyword(Enum):
	LET = 'let'
	FUNCTION = 'function'
	RETURN = 'return'
	IF = 'if'
	ELSE = 'else'
	TRUE = 'true'
	FALSE = 'false'

	# Primitive-kind annotations for let-statements
	STR = 'str'
	NUMBER = 'number'
	BOOL = 'bool'
	ARR = 'arr'
	KV = 'kv'

	# Reserved, but with no syntax behind them.
	DO = 'do'
	END = 'end'
	LOOP = 'loop'
	EXIT = 'exit'
	NULL = 'null'
	TRY = 'try'
	CATCH = 'catch'
	THROW = 'throw'
	AND = 'and'
	OR = 'or'
	NOT = 'not'
	IS = 'is'
	IMPORT = 'import'
	AS = 'as'
	FOREACH = 'foreach'
	FROM = 'from'
	TO = 'to'

	def __repr__(self): return self.name

KEYWORDS = {kw.value: kw for kw in Keyword}
KEYWORDS['fn'] = Keyword.FUNCTION

class PrimitiveKind(Enum):
	""" Declared kind of a let-binding. Informational only; nothing enforces it. """
	STRING = 'str'
	NUMBER = 'number'
	BOOLEAN = 'bool'
	ARRAY = 'arr'
	KV = 'kv'

PRIMITIVE_KINDS = {
	Keyword.STR: PrimitiveKind.STRING,
	Keyword.NUMBER: PrimitiveKind.NUMBER,
	Keyword.BOOL: PrimitiveKind.BOOLEAN,
	Keyword.ARR: PrimitiveKind.ARRAY,
	Keyword.KV: PrimitiveKind.KV,
}

SYMBOLS = {
	kind.value: kind for kind in TokenKind
	if not kind.value[0].isalpha()
}

class Token(NamedTuple):
	kind: TokenKind
	text: str
	position: Position
	keyword: Optional[Keyword] = None

	def __repr__(self):
		if self.keyword is not None: return "<%r %r>" % (self.kind, self.keyword)
		if self.kind in (TokenKind.IDENT, TokenKind.NUMBER, TokenKind.STRING):
			return "<%r %r>" % (self.kind, self.text)
		return "<%r>" % self.kind

	def describe(self) -> str:
		""" For error messages """
		if self.kind is TokenKind.EOF: return "end of input"
		if self.kind is TokenKind.STRING: return "string %r" % self.text
		return "'%s'" % self.text
