"""
The set of parse-nodes.
Every node remembers the token that introduced it, so later passes can point at the source.
The str() of any node is its canonical display form: fully parenthesized where
precedence matters, and itself valid source text that parses back to the same form.
"""
from typing import Optional, Sequence
from .location import Position
from .tokens import Token, PrimitiveKind

class Node:
	token: Token
	def position(self) -> Position: return self.token.position

class Expression(Node): pass

class Statement(Node): pass

def quote(text: str) -> str:
	escaped = text.replace('\\', '\\\\').replace('"', '\\"')
	escaped = escaped.replace('\n', '\\n').replace('\t', '\\t').replace('\r', '\\r')
	return '"%s"' % escaped

def _commas(items) -> str: return ', '.join(map(str, items))

###############################################################################

class Identifier(Expression):
	def __init__(self, token: Token, name: str):
		self.token, self.name = token, name
	def __str__(self): return self.name
	def __repr__(self): return "<Identifier %s>" % self.name

class IntegerLiteral(Expression):
	def __init__(self, token: Token, value: int):
		self.token, self.value = token, value
	def __str__(self): return str(self.value)

class BooleanLiteral(Expression):
	def __init__(self, token: Token, value: bool):
		self.token, self.value = token, value
	def __str__(self): return "true" if self.value else "false"

class StringLiteral(Expression):
	def __init__(self, token: Token, value: str):
		self.token, self.value = token, value
	def __str__(self): return quote(self.value)

class ArrayLiteral(Expression):
	def __init__(self, token: Token, elements: Sequence[Expression]):
		self.token, self.elements = token, list(elements)
	def __str__(self): return "[%s]" % _commas(self.elements)

class HashLiteral(Expression):
	""" Pairs stay in source order; keys are arbitrary expressions until run-time. """
	def __init__(self, token: Token, pairs: Sequence[tuple[Expression, Expression]]):
		self.token, self.pairs = token, list(pairs)
	def __str__(self):
		return "{%s}" % ', '.join("%s: %s" % (k, v) for k, v in self.pairs)

class Prefix(Expression):
	def __init__(self, token: Token, operator: str, operand: Expression):
		self.token, self.operator, self.operand = token, operator, operand
	def __str__(self): return "(%s%s)" % (self.operator, self.operand)

class Infix(Expression):
	def __init__(self, token: Token, lhs: Expression, operator: str, rhs: Expression):
		self.token, self.lhs, self.operator, self.rhs = token, lhs, operator, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.operator, self.rhs)

class IfExpression(Expression):
	def __init__(self, token: Token, condition: Expression, consequence: "Block", alternative: Optional["Block"]):
		self.token = token
		self.condition, self.consequence, self.alternative = condition, consequence, alternative
	def __str__(self):
		text = "if %s %s" % (self.condition, self.consequence)
		if self.alternative is not None:
			text += " else %s" % self.alternative
		return text

class FunctionLiteral(Expression):
	def __init__(self, token: Token, params: Sequence[Identifier], body: "Block"):
		self.token, self.params, self.body = token, list(params), body
	def __str__(self): return "fn(%s) %s" % (_commas(self.params), self.body)

class Call(Expression):
	def __init__(self, token: Token, callee: Expression, args: Sequence[Expression]):
		self.token, self.callee, self.args = token, callee, list(args)
	def __str__(self): return "%s(%s)" % (self.callee, _commas(self.args))

class Index(Expression):
	def __init__(self, token: Token, collection: Expression, index: Expression):
		self.token, self.collection, self.index = token, collection, index
	def __str__(self): return "(%s[%s])" % (self.collection, self.index)

class Dot(Expression):
	"""
	The parser does not judge the right-hand side.
	The evaluator reads it as a property name or a map key. Called on a string,
	it reads the property and ignores the empty parentheses.
	"""
	def __init__(self, token: Token, lhs: Expression, rhs: Expression):
		self.token, self.lhs, self.rhs = token, lhs, rhs
	def key(self) -> str:
		return str(self.rhs)
	def __str__(self):
		if isinstance(self.rhs, Identifier): return "(%s.%s)" % (self.lhs, self.rhs)
		return "(%s.(%s))" % (self.lhs, self.rhs)

###############################################################################

class LetStatement(Statement):
	def __init__(self, token: Token, name: Identifier, value: Expression, kind: Optional[PrimitiveKind] = None):
		self.token, self.name, self.value, self.kind = token, name, value, kind
	def __str__(self):
		if self.kind is None: return "let %s = %s;" % (self.name, self.value)
		return "let %s %s = %s;" % (self.kind.value, self.name, self.value)

class ReassignStatement(Statement):
	def __init__(self, token: Token, name: Identifier, value: Expression):
		self.token, self.name, self.value = token, name, value
	def __str__(self): return "%s = %s;" % (self.name, self.value)

class ReturnStatement(Statement):
	def __init__(self, token: Token, value: Expression):
		self.token, self.value = token, value
	def __str__(self): return "return %s;" % self.value

class ExpressionStatement(Statement):
	def __init__(self, token: Token, expression: Expression):
		self.token, self.expression = token, expression
	def __str__(self): return "%s;" % self.expression

class Block(Node):
	def __init__(self, token: Token, statements: Sequence[Statement]):
		self.token, self.statements = token, list(statements)
	def __str__(self):
		if not self.statements: return "{ }"
		return "{ %s }" % ' '.join(map(str, self.statements))

class Program:
	def __init__(self, statements: Sequence[Statement]):
		self.statements = list(statements)
	def __str__(self): return '\n'.join(map(str, self.statements))
	def __len__(self): return len(self.statements)
	def __iter__(self): return iter(self.statements)
	def __getitem__(self, item): return self.statements[item]
