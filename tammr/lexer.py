"""
Hand-written scanner: one pass, one character of lookahead beyond the current.
"""
from .location import Position
from .tokens import Token, TokenKind, KEYWORDS, SYMBOLS

ESCAPES = {
	'n': '\n',
	't': '\t',
	'r': '\r',
	'\\': '\\',
	'"': '"',
	"'": "'",
}

_SENTINEL = '\0'

class LexError(Exception):
	def __init__(self, message: str, position: Position):
		super().__init__("%s at %s" % (message, position))
		self.message = message
		self.position = position

def _is_word_start(c: str) -> bool:
	return c.isalpha() or c == '_'

def _is_word_part(c: str) -> bool:
	return c.isalpha() or c == '_' or _is_digit(c)

def _is_digit(c: str) -> bool:
	return '0' <= c <= '9'

class Lexer:
	def __init__(self, text: str):
		self.text = text
		self.index = 0
		self.line = 1
		self.column = 1

	@property
	def current(self) -> str:
		return self.text[self.index] if self.index < len(self.text) else _SENTINEL

	def peek(self) -> str:
		nxt = self.index + 1
		return self.text[nxt] if nxt < len(self.text) else _SENTINEL

	def at_end(self) -> bool:
		return self.index >= len(self.text)

	def position(self) -> Position:
		return Position(self.line, self.column, self.index)

	def advance(self):
		if self.current == '\n':
			self.line += 1
			self.column = 1
		else:
			self.column += 1
		self.index += 1

	def tokenize(self) -> list[Token]:
		tokens = []
		while not self.at_end():
			c = self.current
			if c.isspace():
				self.advance()
			elif c == '/' and self.peek() == '/':
				self._skip_line_comment()
			elif c == '/' and self.peek() == '*':
				self._skip_block_comment()
			elif _is_word_start(c):
				tokens.append(self._scan_word())
			elif _is_digit(c):
				tokens.append(self._scan_number())
			elif c in '"\'':
				tokens.append(self._scan_string())
			else:
				tokens.append(self._scan_symbol())
		tokens.append(Token(TokenKind.EOF, "", self.position()))
		return tokens

	def _scan_word(self) -> Token:
		start = self.position()
		while _is_word_part(self.current):
			self.advance()
		word = self.text[start.index:self.index]
		keyword = KEYWORDS.get(word)
		if keyword is None:
			return Token(TokenKind.IDENT, word, start)
		return Token(TokenKind.KEYWORD, word, start, keyword)

	def _scan_number(self) -> Token:
		start = self.position()
		while _is_digit(self.current):
			self.advance()
		return Token(TokenKind.NUMBER, self.text[start.index:self.index], start)

	def _scan_string(self) -> Token:
		start = self.position()
		quote = self.current
		self.advance()
		chars = []
		while self.current != quote:
			if self.at_end():
				raise LexError("Unterminated string", start)
			if self.current == '\\':
				escape_at = self.position()
				self.advance()
				try: chars.append(ESCAPES[self.current])
				except KeyError:
					if self.at_end(): raise LexError("Unterminated string", start)
					raise LexError("Unknown escape sequence '\\%s'" % self.current, escape_at)
			else:
				chars.append(self.current)
			self.advance()
		self.advance()
		return Token(TokenKind.STRING, ''.join(chars), start)

	def _scan_symbol(self) -> Token:
		start = self.position()
		pair = self.current + self.peek()
		if pair in SYMBOLS:
			self.advance()
			self.advance()
			return Token(SYMBOLS[pair], pair, start)
		single = self.current
		if single in SYMBOLS:
			self.advance()
			return Token(SYMBOLS[single], single, start)
		raise LexError("Unexpected character %r" % single, start)

	def _skip_line_comment(self):
		while not self.at_end() and self.current != '\n':
			self.advance()

	def _skip_block_comment(self):
		start = self.position()
		self.advance()
		self.advance()
		while not (self.current == '*' and self.peek() == '/'):
			if self.at_end():
				raise LexError("Unterminated comment", start)
			self.advance()
		self.advance()
		self.advance()

def tokenize(text: str) -> list[Token]:
	return Lexer(text).tokenize()
