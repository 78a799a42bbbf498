"""
Pratt parser: statements by recursive descent, expressions by precedence climbing.

Each token kind (or keyword) may have a prefix rule, for when it starts an expression,
and an infix rule, for when it follows a complete left operand. The climbing loop
consults the precedence of the peek token to decide whether to keep extending
the left operand.

Syntax errors do not stop the parse. The parser files a ParseError, skips ahead
to the next statement boundary, and carries on, so one pass reports them all.
"""
from enum import IntEnum
from typing import Callable, Union
from . import syntax
from .location import START
from .tokens import Token, TokenKind, Keyword, PRIMITIVE_KINDS

I64_MAX = 2**63 - 1

class Precedence(IntEnum):
	LOWEST = 1
	EQUALS = 2
	LESS_GREATER = 3
	SUM = 4
	PRODUCT = 5
	PREFIX = 6
	CALL = 7
	INDEX = 8
	DOT = 9

PRECEDENCE = {
	TokenKind.EQ: Precedence.EQUALS,
	TokenKind.NOT_EQ: Precedence.EQUALS,
	TokenKind.ASSIGN: Precedence.EQUALS,
	TokenKind.LT: Precedence.LESS_GREATER,
	TokenKind.GT: Precedence.LESS_GREATER,
	TokenKind.PLUS: Precedence.SUM,
	TokenKind.MINUS: Precedence.SUM,
	TokenKind.ASTERISK: Precedence.PRODUCT,
	TokenKind.SLASH: Precedence.PRODUCT,
	TokenKind.LPAREN: Precedence.CALL,
	TokenKind.LBRACKET: Precedence.INDEX,
	TokenKind.PERIOD: Precedence.DOT,
}

class ParseError(Exception):
	def __init__(self, message: str, token: Token):
		super().__init__("%s at %s" % (message, token.position))
		self.message = message
		self.token = token

RuleKey = Union[TokenKind, Keyword]

def _rule_key(token: Token) -> RuleKey:
	return token.keyword or token.kind

class Parser:
	def __init__(self, tokens: list[Token]):
		tokens = list(tokens)
		if not tokens or tokens[-1].kind is not TokenKind.EOF:
			where = tokens[-1].position if tokens else START
			tokens.append(Token(TokenKind.EOF, "", where))
		self.tokens = tokens
		self.index = 0
		self.errors: list[ParseError] = []

	@property
	def current(self) -> Token:
		return self.tokens[self.index]

	@property
	def peek(self) -> Token:
		return self.tokens[min(self.index + 1, len(self.tokens) - 1)]

	def next_token(self):
		if self.index < len(self.tokens) - 1:
			self.index += 1

	def current_is(self, kind: TokenKind) -> bool: return self.current.kind is kind
	def peek_is(self, kind: TokenKind) -> bool: return self.peek.kind is kind

	def expect_peek(self, kind: TokenKind, what: str = None):
		""" Advance onto the peek token if it is the right kind; complain otherwise. """
		if self.peek_is(kind):
			self.next_token()
		else:
			raise ParseError("Expected %s but found %s" % (what or "'%s'" % kind.value, self.peek.describe()), self.peek)

	def peek_precedence(self) -> Precedence:
		return PRECEDENCE.get(self.peek.kind, Precedence.LOWEST)

	def current_precedence(self) -> Precedence:
		return PRECEDENCE.get(self.current.kind, Precedence.LOWEST)

	###########################################################################

	def parse_program(self) -> syntax.Program:
		statements = []
		while not self.current_is(TokenKind.EOF):
			self._parse_into(statements)
			self.next_token()
		return syntax.Program(statements)

	def _parse_into(self, statements: list, in_block=False):
		try:
			statements.append(self.parse_statement())
		except ParseError as pe:
			self.errors.append(pe)
			self.synchronize(in_block)

	def synchronize(self, in_block: bool):
		"""
		Skip to the last token of the broken statement,
		so that the caller's next_token() lands on a fresh one.
		"""
		if in_block and self.current_is(TokenKind.RBRACE):
			# The block's own closing brace: leave it for parse_block.
			self.index -= 1
			return
		while True:
			if self.current_is(TokenKind.SEMICOLON) or self.current_is(TokenKind.EOF):
				return
			if self.peek_is(TokenKind.EOF):
				return
			if in_block and self.peek_is(TokenKind.RBRACE):
				return
			if self.peek.keyword in (Keyword.LET, Keyword.RETURN):
				return
			self.next_token()

	def parse_statement(self) -> syntax.Statement:
		token = self.current
		if token.keyword is Keyword.LET:
			return self.parse_let_statement()
		if token.keyword is Keyword.RETURN:
			return self.parse_return_statement()
		if token.kind is TokenKind.IDENT and self.peek_is(TokenKind.ASSIGN):
			return self.parse_reassign_statement()
		return self.parse_expression_statement()

	def _optional_semicolon(self):
		if self.peek_is(TokenKind.SEMICOLON):
			self.next_token()

	def parse_let_statement(self) -> syntax.LetStatement:
		token = self.current
		kind = PRIMITIVE_KINDS.get(self.peek.keyword)
		if kind is not None:
			self.next_token()
		self.expect_peek(TokenKind.IDENT, "a name")
		name = self.parse_identifier()
		self.expect_peek(TokenKind.ASSIGN)
		self.next_token()
		value = self.parse_expression(Precedence.LOWEST)
		self._optional_semicolon()
		return syntax.LetStatement(token, name, value, kind)

	def parse_reassign_statement(self) -> syntax.ReassignStatement:
		token = self.current
		name = self.parse_identifier()
		self.next_token()
		self.next_token()
		value = self.parse_expression(Precedence.LOWEST)
		self._optional_semicolon()
		return syntax.ReassignStatement(token, name, value)

	def parse_return_statement(self) -> syntax.ReturnStatement:
		token = self.current
		self.next_token()
		value = self.parse_expression(Precedence.LOWEST)
		self._optional_semicolon()
		return syntax.ReturnStatement(token, value)

	def parse_expression_statement(self) -> syntax.ExpressionStatement:
		token = self.current
		expression = self.parse_expression(Precedence.LOWEST)
		self._optional_semicolon()
		return syntax.ExpressionStatement(token, expression)

	def parse_block(self) -> syntax.Block:
		""" Enter with the opening brace as the current token; leave on the closing brace. """
		token = self.current
		statements = []
		self.next_token()
		while not self.current_is(TokenKind.RBRACE):
			if self.current_is(TokenKind.EOF):
				raise ParseError("Expected '}' to close the block opened at %s" % (token.position,), self.current)
			self._parse_into(statements, in_block=True)
			self.next_token()
		return syntax.Block(token, statements)

	###########################################################################

	def parse_expression(self, precedence: Precedence) -> syntax.Expression:
		try: prefix = PREFIX_RULES[_rule_key(self.current)]
		except KeyError:
			raise ParseError("Expected an expression but found %s" % self.current.describe(), self.current)
		left = prefix(self)
		while not self.peek_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
			infix = INFIX_RULES[self.peek.kind]
			self.next_token()
			left = infix(self, left)
		return left

	def _parse_list(self, closer: TokenKind, parse_item: Callable) -> list:
		""" Comma-separated items, starting just before the first; ends on the closer. """
		items = []
		if self.peek_is(closer):
			self.next_token()
			return items
		self.next_token()
		items.append(parse_item())
		while self.peek_is(TokenKind.COMMA):
			self.next_token()
			self.next_token()
			items.append(parse_item())
		self.expect_peek(closer)
		return items

	def _parse_argument(self) -> syntax.Expression:
		return self.parse_expression(Precedence.LOWEST)

	# Prefix rules:

	def parse_identifier(self) -> syntax.Identifier:
		return syntax.Identifier(self.current, self.current.text)

	def parse_integer(self) -> syntax.IntegerLiteral:
		value = int(self.current.text)
		if value > I64_MAX:
			raise ParseError("Integer literal %s is too large" % self.current.text, self.current)
		return syntax.IntegerLiteral(self.current, value)

	def parse_string(self) -> syntax.StringLiteral:
		return syntax.StringLiteral(self.current, self.current.text)

	def parse_boolean(self) -> syntax.BooleanLiteral:
		return syntax.BooleanLiteral(self.current, self.current.keyword is Keyword.TRUE)

	def parse_prefix(self) -> syntax.Prefix:
		token = self.current
		self.next_token()
		return syntax.Prefix(token, token.text, self.parse_expression(Precedence.PREFIX))

	def parse_group(self) -> syntax.Expression:
		self.next_token()
		inner = self.parse_expression(Precedence.LOWEST)
		self.expect_peek(TokenKind.RPAREN)
		return inner

	def parse_array(self) -> syntax.ArrayLiteral:
		token = self.current
		return syntax.ArrayLiteral(token, self._parse_list(TokenKind.RBRACKET, self._parse_argument))

	def parse_hash(self) -> syntax.HashLiteral:
		token = self.current
		pairs = []
		while not self.peek_is(TokenKind.RBRACE):
			self.next_token()
			key = self.parse_expression(Precedence.LOWEST)
			self.expect_peek(TokenKind.COLON)
			self.next_token()
			pairs.append((key, self.parse_expression(Precedence.LOWEST)))
			if not self.peek_is(TokenKind.RBRACE):
				self.expect_peek(TokenKind.COMMA, "',' or '}'")
		self.next_token()
		return syntax.HashLiteral(token, pairs)

	def parse_if(self) -> syntax.IfExpression:
		token = self.current
		self.next_token()
		condition = self.parse_expression(Precedence.LOWEST)
		self.expect_peek(TokenKind.LBRACE)
		consequence = self.parse_block()
		alternative = None
		if self.peek.keyword is Keyword.ELSE:
			self.next_token()
			self.expect_peek(TokenKind.LBRACE)
			alternative = self.parse_block()
		return syntax.IfExpression(token, condition, consequence, alternative)

	def parse_function(self) -> syntax.FunctionLiteral:
		token = self.current
		self.expect_peek(TokenKind.LPAREN)
		params = self._parse_list(TokenKind.RPAREN, self._parse_parameter)
		self.expect_peek(TokenKind.LBRACE)
		return syntax.FunctionLiteral(token, params, self.parse_block())

	def _parse_parameter(self) -> syntax.Identifier:
		if not self.current_is(TokenKind.IDENT):
			raise ParseError("Expected a parameter name but found %s" % self.current.describe(), self.current)
		return self.parse_identifier()

	# Infix rules:

	def parse_infix(self, lhs: syntax.Expression) -> syntax.Infix:
		token = self.current
		precedence = self.current_precedence()
		self.next_token()
		return syntax.Infix(token, lhs, token.text, self.parse_expression(precedence))

	def parse_call(self, callee: syntax.Expression) -> syntax.Call:
		token = self.current
		return syntax.Call(token, callee, self._parse_list(TokenKind.RPAREN, self._parse_argument))

	def parse_index(self, collection: syntax.Expression) -> syntax.Index:
		token = self.current
		self.next_token()
		index = self.parse_expression(Precedence.LOWEST)
		self.expect_peek(TokenKind.RBRACKET)
		return syntax.Index(token, collection, index)

	def parse_dot(self, lhs: syntax.Expression) -> syntax.Dot:
		token = self.current
		self.next_token()
		return syntax.Dot(token, lhs, self.parse_expression(Precedence.DOT))

PREFIX_RULES: dict[RuleKey, Callable[[Parser], syntax.Expression]] = {
	TokenKind.IDENT: Parser.parse_identifier,
	TokenKind.NUMBER: Parser.parse_integer,
	TokenKind.STRING: Parser.parse_string,
	TokenKind.BANG: Parser.parse_prefix,
	TokenKind.MINUS: Parser.parse_prefix,
	TokenKind.LPAREN: Parser.parse_group,
	TokenKind.LBRACKET: Parser.parse_array,
	TokenKind.LBRACE: Parser.parse_hash,
	Keyword.TRUE: Parser.parse_boolean,
	Keyword.FALSE: Parser.parse_boolean,
	Keyword.IF: Parser.parse_if,
	Keyword.FUNCTION: Parser.parse_function,
}

INFIX_RULES: dict[TokenKind, Callable[[Parser, syntax.Expression], syntax.Expression]] = {
	kind: Parser.parse_infix for kind in PRECEDENCE
}
INFIX_RULES.update({
	TokenKind.LPAREN: Parser.parse_call,
	TokenKind.LBRACKET: Parser.parse_index,
	TokenKind.PERIOD: Parser.parse_dot,
})

def parse_tokens(tokens: list[Token]) -> tuple[syntax.Program, list[ParseError]]:
	parser = Parser(tokens)
	program = parser.parse_program()
	return program, parser.errors
