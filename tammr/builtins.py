"""
The fixed tables of built-in functions and string properties.

Both tables are built once, at import. Every entry is total: misuse comes back
as an Error value, never as a Python exception.
"""
import string as _string
from typing import Callable, Optional
from .values import (
	Value, Integer, String, Array, Builtin, Error, NULL, EMPTY, boolean,
)

BUILTINS: dict[str, Builtin] = {}
STRING_PROPERTIES: dict[str, Callable[[str], Value]] = {}

def _arity_error(got: int, expected: int) -> Error:
	return Error("Wrong number of arguments. Got %d, expected %d" % (got, expected))

def _builtin(name: str, arity: Optional[int] = None):
	""" Register a builtin. Given an arity, the count is checked before the body runs. """
	def decorate(fn):
		if arity is None:
			wrapper = fn
		else:
			def wrapper(args: list[Value]) -> Value:
				if len(args) != arity: return _arity_error(len(args), arity)
				return fn(*args)
		BUILTINS[name] = Builtin(name, wrapper)
		return fn
	return decorate

def _must_be_array(name: str, it: Value) -> Optional[Error]:
	if not isinstance(it, Array):
		return Error("Argument to `%s` must be Array, got %s" % (name, it.type_name))

###############################################################################

@_builtin("len", 1)
def _len(it: Value) -> Value:
	if isinstance(it, String): return Integer(len(it.value.encode("utf-8")))
	if isinstance(it, Array): return Integer(len(it))
	return Error("Argument to `len` not supported, got %s" % it.type_name)

@_builtin("first", 1)
def _first(it: Value) -> Value:
	if isinstance(it, Array): return it.elements[0] if it.elements else NULL
	if isinstance(it, String): return String(it.value[0]) if it.value else NULL
	return Error("Argument to `first` must be Array or String, got %s" % it.type_name)

@_builtin("last", 1)
def _last(it: Value) -> Value:
	if isinstance(it, Array): return it.elements[-1] if it.elements else NULL
	if isinstance(it, String): return String(it.value[-1]) if it.value else NULL
	return Error("Argument to `last` must be Array or String, got %s" % it.type_name)

@_builtin("rest", 1)
def _rest(it: Value) -> Value:
	problem = _must_be_array("rest", it)
	if problem: return problem
	return Array(it.elements[1:]) if it.elements else NULL

@_builtin("push", 2)
def _push(it: Value, item: Value) -> Value:
	return _must_be_array("push", it) or Array(it.elements + (item,))

@_builtin("pop", 1)
def _pop(it: Value) -> Value:
	return _must_be_array("pop", it) or Array(it.elements[:-1])

@_builtin("print")
def _print(args: list[Value]) -> Value:
	print(*args, end="")
	return EMPTY

@_builtin("println")
def _println(args: list[Value]) -> Value:
	print(*args)
	return EMPTY

@_builtin("fprintln")
def _fprintln(args: list[Value]) -> Value:
	""" Each {} takes the next argument; }} stands for a single } character. """
	if not args:
		return Error("fprintln requires at least one argument (format string)")
	template, rest = args[0], iter(args[1:])
	if not isinstance(template, String):
		return Error("First argument to fprintln must be a string")
	text, out, i = template.value, [], 0
	while i < len(text):
		c = text[i]
		if c == '{' and text[i+1:i+2] == '}':
			try: out.append(str(next(rest)))
			except StopIteration: return Error("Not enough arguments provided for format string")
			i += 2
		elif c == '}':
			if text[i+1:i+2] != '}': return Error("Invalid format string: unmatched '}'")
			out.append('}')
			i += 2
		else:
			out.append(c)
			i += 1
	if next(rest, None) is not None:
		return Error("Too many arguments provided for format string")
	print(''.join(out))
	return EMPTY

###############################################################################

def _property(name: str):
	def decorate(fn):
		STRING_PROPERTIES[name] = fn
		return fn
	return decorate

def _each(test: Callable[[str], bool]):
	""" Character-class predicates let whitespace pass. """
	return lambda text: boolean(all(test(c) or c.isspace() for c in text))

@_property("length")
def length(text): return Integer(len(text.encode("utf-8")))

@_property("chars")
def chars(text): return Array(String(c) for c in text)

@_property("bytes")
def code_points(text): return Array(Integer(ord(c)) for c in text)

@_property("is_empty")
def is_empty(text): return boolean(not text)

@_property("is_ascii")
def is_ascii(text): return boolean(text.isascii())

@_property("is_capitalized")
def is_capitalized(text): return boolean(text[:1].isupper())

@_property("is_titlecase")
def is_titlecase(text):
	""" Every word starts upper-case and carries on without capitals. """
	return boolean(all(w[0].isupper() and not any(c.isupper() for c in w[1:]) for w in text.split()))

STRING_PROPERTIES.update({
	"is_numeric": _each(str.isnumeric),
	"is_alpha": _each(str.isalpha),
	"is_alphanumeric": _each(str.isalnum),
	"is_lowercase": _each(str.islower),
	"is_uppercase": _each(str.isupper),
	"is_whitespace": _each(str.isspace),
	"is_punctuation": _each(lambda c: c in _string.punctuation),
})

def string_property(text: str, name: str) -> Value:
	try: prop = STRING_PROPERTIES[name]
	except KeyError: return Error("No property named %s" % name)
	return prop(text)
