"""
The tree-walking evaluator.

Run-time trouble travels as Error values up through ordinary return channels,
and so does the ReturnSignal of a `return` statement. Inside a block either one
stops the block cold. At top level an Error gets reported and the next statement
runs anyway, which is what makes the REPL forgiving.
"""
import operator, sys
from typing import Callable, Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .builtins import BUILTINS, string_property
from .environment import Environment, Unbound
from .values import (
	Value, Integer, Boolean, String, Array, Hash, Function, Builtin, ReturnSignal, Error,
	NULL, EMPTY, boolean, integer,
)

def _truncating_div(a: int, b: int) -> int:
	quotient = abs(a) // abs(b)
	return quotient if (a < 0) == (b < 0) else -quotient

INTEGER_ARITHMETIC = {
	"+": operator.add,
	"-": operator.sub,
	"*": operator.mul,
	"/": _truncating_div,
}

COMPARISON = {
	"<": operator.lt,
	">": operator.gt,
	"==": operator.eq,
	"!=": operator.ne,
	"=": operator.eq,
}

EQUALITY = {"==", "!=", "="}

# A call in the language costs a dozen or so Python frames.
RECURSION_LIMIT = 20000

def _unknown_operator(lhs: Value, op: str, rhs: Value) -> Error:
	return Error("Unknown operator: %s %s %s" % (lhs.type_name, op, rhs.type_name))

def _is_signal(value: Value) -> bool:
	return isinstance(value, (ReturnSignal, Error))

def print_error(error: Error):
	print(error)

class Evaluator(Visitor):
	def __init__(self, on_error: Optional[Callable[[Error], None]] = None):
		self.on_error = on_error or print_error

	def run(self, program: syntax.Program, env: Environment) -> Value:
		if sys.getrecursionlimit() < RECURSION_LIMIT:
			sys.setrecursionlimit(RECURSION_LIMIT)
		result = EMPTY
		for statement in program:
			result = self.execute(statement, env)
			if isinstance(result, ReturnSignal):
				return result.value
			if isinstance(result, Error):
				self.on_error(result)
		return result

	def execute(self, statement: syntax.Statement, env: Environment) -> Value:
		try: return self.visit(statement, env)
		except RecursionError: return Error("Maximum call depth exceeded")

	def run_block(self, block: syntax.Block, env: Environment) -> Value:
		result = EMPTY
		for statement in block.statements:
			value = self.visit(statement, env)
			if _is_signal(value): return value
			if value is not EMPTY: result = value
		return result

	def _eval_all(self, expressions, env: Environment):
		""" Left to right; stops at the first Error or ReturnSignal, which comes back in place of the list. """
		values = []
		for expr in expressions:
			value = self.visit(expr, env)
			if _is_signal(value): return value
			values.append(value)
		return values

	# Statements:

	def visit_LetStatement(self, let: syntax.LetStatement, env: Environment) -> Value:
		value = self.visit(let.value, env)
		if _is_signal(value): return value
		env.define(let.name.name, value)
		return EMPTY

	def visit_ReassignStatement(self, it: syntax.ReassignStatement, env: Environment) -> Value:
		value = self.visit(it.value, env)
		if _is_signal(value): return value
		try: env.assign(it.name.name, value)
		except Unbound: return Error("Identifier not found: %s" % it.name.name)
		return EMPTY

	def visit_ReturnStatement(self, it: syntax.ReturnStatement, env: Environment) -> Value:
		value = self.visit(it.value, env)
		if _is_signal(value): return value
		return ReturnSignal(value)

	def visit_ExpressionStatement(self, it: syntax.ExpressionStatement, env: Environment) -> Value:
		return self.visit(it.expression, env)

	# Atoms and literals:

	def visit_Identifier(self, ident: syntax.Identifier, env: Environment) -> Value:
		value = env.get(ident.name)
		if value is not None: return value
		try: return BUILTINS[ident.name]
		except KeyError: return Error("Identifier not found: %s" % ident.name)

	def visit_IntegerLiteral(self, lit: syntax.IntegerLiteral, env: Environment) -> Value:
		return Integer(lit.value)

	def visit_BooleanLiteral(self, lit: syntax.BooleanLiteral, env: Environment) -> Value:
		return boolean(lit.value)

	def visit_StringLiteral(self, lit: syntax.StringLiteral, env: Environment) -> Value:
		return String(lit.value)

	def visit_ArrayLiteral(self, lit: syntax.ArrayLiteral, env: Environment) -> Value:
		elements = self._eval_all(lit.elements, env)
		if _is_signal(elements): return elements
		return Array(elements)

	def visit_HashLiteral(self, lit: syntax.HashLiteral, env: Environment) -> Value:
		pairs = []
		for key_expr, value_expr in lit.pairs:
			key = self.visit(key_expr, env)
			if _is_signal(key): return key
			if not isinstance(key, String):
				return Error("Hash keys must be strings, got %s" % key.type_name)
			value = self.visit(value_expr, env)
			if _is_signal(value): return value
			pairs.append((key, value))
		return Hash(pairs)

	def visit_FunctionLiteral(self, fn: syntax.FunctionLiteral, env: Environment) -> Value:
		return Function(fn.params, fn.body, env)

	# Operators:

	def visit_Prefix(self, expr: syntax.Prefix, env: Environment) -> Value:
		operand = self.visit(expr.operand, env)
		if _is_signal(operand): return operand
		if expr.operator == "!" and isinstance(operand, Boolean):
			return boolean(not operand.value)
		if expr.operator == "-" and isinstance(operand, Integer):
			return integer(-operand.value)
		return Error("Unknown operator: %s%s" % (expr.operator, operand.type_name))

	def visit_Infix(self, expr: syntax.Infix, env: Environment) -> Value:
		lhs = self.visit(expr.lhs, env)
		if _is_signal(lhs): return lhs
		rhs = self.visit(expr.rhs, env)
		if _is_signal(rhs): return rhs
		return infix(lhs, expr.operator, rhs)

	# Control:

	def visit_IfExpression(self, expr: syntax.IfExpression, env: Environment) -> Value:
		condition = self.visit(expr.condition, env)
		if _is_signal(condition): return condition
		if not isinstance(condition, Boolean):
			return Error("Condition must be Boolean, got %s" % condition.type_name)
		if condition.value: block = expr.consequence
		elif expr.alternative is not None: block = expr.alternative
		else: return NULL
		result = self.run_block(block, env)
		return NULL if result is EMPTY else result

	def visit_Call(self, call: syntax.Call, env: Environment) -> Value:
		if isinstance(call.callee, syntax.Dot):
			receiver = self.visit(call.callee.lhs, env)
			if _is_signal(receiver): return receiver
			if isinstance(receiver, String):
				if call.args:
					return Error("Wrong number of arguments. Got %d, expected 0" % len(call.args))
				return _dot(receiver, call.callee)
			callee = _dot(receiver, call.callee)
		else:
			callee = self.visit(call.callee, env)
		if _is_signal(callee): return callee
		if not isinstance(callee, (Function, Builtin)):
			return Error("Not a function: %s" % callee.type_name)
		args = self._eval_all(call.args, env)
		if _is_signal(args): return args
		if isinstance(callee, Builtin): return callee(args)
		return self.apply(callee, args)

	def apply(self, fn: Function, args: list[Value]) -> Value:
		if len(args) != len(fn.params):
			return Error("Wrong number of arguments. Expected %d, got %d" % (len(fn.params), len(args)))
		inner = fn.env.child()
		for param, arg in zip(fn.params, args):
			inner.define(param.name, arg)
		result = self.run_block(fn.body, inner)
		if isinstance(result, ReturnSignal): return result.value
		return NULL if result is EMPTY else result

	# Access:

	def visit_Index(self, expr: syntax.Index, env: Environment) -> Value:
		collection = self.visit(expr.collection, env)
		if _is_signal(collection): return collection
		index = self.visit(expr.index, env)
		if _is_signal(index): return index
		if isinstance(collection, Array) and isinstance(index, Integer):
			return _pick(collection.elements, index.value)
		if isinstance(collection, String) and isinstance(index, Integer):
			char = _pick(collection.value, index.value)
			return NULL if char is NULL else String(char)
		if isinstance(collection, Hash) and isinstance(index, String):
			return collection.lookup(index.value)
		return Error("Index operator not supported: %s[%s]" % (collection.type_name, index.type_name))

	def visit_Dot(self, expr: syntax.Dot, env: Environment) -> Value:
		lhs = self.visit(expr.lhs, env)
		if _is_signal(lhs): return lhs
		return _dot(lhs, expr)

def _pick(items, i: int):
	""" Negative indices count from the end. Anything out of range is NULL. """
	if i < 0: i += len(items)
	if 0 <= i < len(items): return items[i]
	return NULL

def _dot(lhs: Value, expr: syntax.Dot) -> Value:
	if isinstance(lhs, Hash):
		return lhs.lookup(expr.key())
	if isinstance(lhs, String):
		if not isinstance(expr.rhs, syntax.Identifier):
			return Error("Dot notation on a String needs a property name, got %s" % expr.rhs)
		return string_property(lhs.value, expr.rhs.name)
	return Error("Dot notation not supported on %s" % lhs.type_name)

def infix(lhs: Value, op: str, rhs: Value) -> Value:
	if isinstance(lhs, Integer) and isinstance(rhs, Integer):
		if op in COMPARISON: return boolean(COMPARISON[op](lhs.value, rhs.value))
		if op in INTEGER_ARITHMETIC:
			if op == "/" and rhs.value == 0: return Error("Division by zero")
			return integer(INTEGER_ARITHMETIC[op](lhs.value, rhs.value))
	elif isinstance(lhs, Boolean) and isinstance(rhs, Boolean):
		if op in EQUALITY: return boolean(COMPARISON[op](lhs.value, rhs.value))
	elif isinstance(lhs, String) and isinstance(rhs, String):
		if op == "+": return String(lhs.value + rhs.value)
		if op in EQUALITY: return boolean(COMPARISON[op](lhs.value, rhs.value))
	return _unknown_operator(lhs, op, rhs)

def evaluate(program: syntax.Program, env: Optional[Environment] = None, on_error=None) -> Value:
	return Evaluator(on_error).run(program, env if env is not None else Environment())
