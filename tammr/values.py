"""
This module defines the run-time values the evaluator operates in terms of.

Data values compare structurally. Functions and builtins compare by identity.
Arrays and hashes hold tuples, so nothing the user can do mutates a value in place;
"changing" a collection means building a new one.

str() gives the display form. At top level a string shows raw, but inside a
container it shows quoted, which is what inspect() is for.
"""
from typing import Callable, Sequence
from .syntax import quote, Identifier, Block
from .environment import Environment

I64_MIN, I64_MAX = -2**63, 2**63 - 1

class Value:
	type_name = "Value"
	def inspect(self) -> str:
		""" Display form as an element of some container """
		return str(self)

class _Data(Value):
	""" Structural equality over whatever _key() returns. """
	def _key(self): raise NotImplementedError(type(self))
	def __eq__(self, other):
		return type(self) is type(other) and self._key() == other._key()
	def __hash__(self): return hash((type(self), self._key()))
	def __repr__(self): return "<%s %s>" % (self.type_name, self.inspect())

class Integer(_Data):
	type_name = "Integer"
	def __init__(self, value: int):
		if not I64_MIN <= value <= I64_MAX:
			raise OverflowError("Integer %d does not fit in 64 bits" % value)
		self.value = value
	def _key(self): return self.value
	def __str__(self): return str(self.value)

class Boolean(_Data):
	type_name = "Boolean"
	def __init__(self, value: bool):
		self.value = bool(value)
	def _key(self): return self.value
	def __str__(self): return "true" if self.value else "false"

class String(_Data):
	type_name = "String"
	def __init__(self, value: str):
		self.value = value
	def _key(self): return self.value
	def __str__(self): return self.value
	def inspect(self) -> str: return quote(self.value)

class Array(_Data):
	type_name = "Array"
	def __init__(self, elements: Sequence[Value] = ()):
		self.elements = tuple(elements)
	def _key(self): return self.elements
	def __len__(self): return len(self.elements)
	def __str__(self): return "[%s]" % ', '.join(e.inspect() for e in self.elements)

class Hash(_Data):
	""" Pairs in insertion order. Lookup is a linear scan; the first matching key wins. """
	type_name = "Hash"
	def __init__(self, pairs: Sequence[tuple[Value, Value]] = ()):
		self.pairs = tuple(pairs)
	def _key(self): return self.pairs
	def lookup(self, key: str) -> Value:
		for k, v in self.pairs:
			if isinstance(k, String) and k.value == key:
				return v
		return NULL
	def __str__(self):
		return "{%s}" % ', '.join("%s: %s" % (k.inspect(), v.inspect()) for k, v in self.pairs)

class Function(Value):
	""" The run-time manifestation of a function literal, tied to its natal environment. """
	type_name = "Function"
	def __init__(self, params: Sequence[Identifier], body: Block, env: Environment):
		self.params, self.body, self.env = list(params), body, env
	def __str__(self):
		return "fn(%s) %s" % (', '.join(map(str, self.params)), self.body)

class Builtin(Value):
	type_name = "BuiltinFunction"
	def __init__(self, name: str, fn: Callable[[list[Value]], Value]):
		self.name, self.fn = name, fn
	def __call__(self, args: list[Value]) -> Value:
		return self.fn(args)
	def __str__(self): return "builtin function %s" % self.name

class ReturnSignal(Value):
	""" Wraps the value of a `return` on its way out to the nearest call or program. """
	type_name = "Return"
	def __init__(self, value: Value):
		self.value = value
	def __str__(self): return str(self.value)

class Error(_Data):
	type_name = "Error"
	def __init__(self, message: str):
		self.message = message
	def _key(self): return self.message
	def __str__(self): return "Error: %s" % self.message

class _Null(_Data):
	type_name = "Null"
	def _key(self): return None
	def __str__(self): return "null"

class _Empty(_Data):
	""" What a statement produces when it produces nothing in particular, like a `let`. """
	type_name = "Empty"
	def _key(self): return None
	def __str__(self): return ""

NULL = _Null()
EMPTY = _Empty()
TRUE = Boolean(True)
FALSE = Boolean(False)

def boolean(flag: bool) -> Boolean:
	return TRUE if flag else FALSE

def integer(n: int) -> Value:
	""" Integers wrap nothing: stepping outside signed 64 bits is an error. """
	if I64_MIN <= n <= I64_MAX: return Integer(n)
	return Error("Integer overflow")
