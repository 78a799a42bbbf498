import io
import unittest
from unittest.mock import patch

from tammr.builtins import BUILTINS, STRING_PROPERTIES, string_property
from tammr.environment import Environment
from tammr.evaluator import Evaluator
from tammr.lexer import tokenize
from tammr.parser import parse_tokens
from tammr.values import Integer, String, Array, Builtin, Error, NULL, EMPTY, TRUE, FALSE

def _eval(text):
	program, errors = parse_tokens(tokenize(text))
	assert not errors, errors
	return Evaluator(lambda e: None).run(program, Environment())

def _call(name, *args):
	return BUILTINS[name](list(args))

def _ints(*xs):
	return Array(Integer(x) for x in xs)

class BuiltinTableTests(unittest.TestCase):

	def test_names(self):
		self.assertEqual(
			{"len", "first", "last", "rest", "push", "pop", "print", "println", "fprintln"},
			set(BUILTINS),
		)
		self.assertEqual("builtin function len", str(BUILTINS["len"]))

	def test_builtins_are_found_after_the_environment(self):
		self.assertIsInstance(_eval("len"), Builtin)
		self.assertEqual(Integer(5), _eval("let len = 5; len"))

	def test_len(self):
		self.assertEqual(Integer(0), _eval('len("")'))
		self.assertEqual(Integer(4), _eval('len("four")'))
		self.assertEqual(Integer(11), _eval('len("hello world")'))
		self.assertEqual(Integer(6), _eval('len("héllo")'))
		self.assertEqual(Integer(3), _eval("len([1, 2, 3])"))
		self.assertEqual(Error("Argument to `len` not supported, got Integer"), _eval("len(1)"))
		self.assertEqual(Error("Wrong number of arguments. Got 2, expected 1"), _eval('len("one", "two")'))
		self.assertEqual(Error("Wrong number of arguments. Got 0, expected 1"), _eval("len()"))

	def test_first_last_rest(self):
		self.assertEqual(Integer(1), _eval("first([1, 2, 3])"))
		self.assertIs(NULL, _eval("first([])"))
		self.assertEqual(String("h"), _eval('first("hi")'))
		self.assertIs(NULL, _eval('first("")'))
		self.assertEqual(Error("Argument to `first` must be Array or String, got Integer"), _eval("first(1)"))
		self.assertEqual(Integer(3), _eval("last([1, 2, 3])"))
		self.assertEqual(String("i"), _eval('last("hi")'))
		self.assertEqual(_ints(2, 3), _eval("rest([1, 2, 3])"))
		self.assertIs(NULL, _eval("rest([])"))
		self.assertEqual(Error("Argument to `rest` must be Array, got String"), _eval('rest("abc")'))

	def test_push_and_pop_copy(self):
		self.assertEqual(_ints(1, 2), _eval("let a = [1]; let b = push(a, 2); [len(a), len(b)]"))
		self.assertEqual(_ints(1, 2), _eval("push([1], 2)"))
		self.assertEqual(_ints(1, 2), _eval("let a = [1, 2, 3]; pop(a); pop(a)"))
		self.assertEqual(Array(), _call("pop", Array()))
		self.assertEqual(Error("Argument to `push` must be Array, got Integer"), _eval("push(1, 2)"))
		self.assertEqual(Error("Argument to `pop` must be Array, got Null"), _call("pop", NULL))
		self.assertEqual(Error("Wrong number of arguments. Got 1, expected 2"), _eval("push([1])"))

class PrintingTests(unittest.TestCase):

	def _output(self, text):
		with patch('sys.stdout', new_callable=io.StringIO) as out:
			result = _eval(text)
		return result, out.getvalue()

	def test_print_and_println(self):
		result, out = self._output('println(1, "a", [1, "a"], {"k": true})')
		self.assertIs(EMPTY, result)
		self.assertEqual('1 a [1, "a"] {"k": true}\n', out)
		result, out = self._output('print("a"); print("b")')
		self.assertEqual("ab", out)
		self.assertEqual("\n", self._output("println()")[1])

	def test_fprintln(self):
		for text, expect in [
			('fprintln("{} + {} = {}", 1, 2, 1 + 2)', "1 + 2 = 3\n"),
			('fprintln("plain")', "plain\n"),
			('fprintln("{}}}", 5)', "5}\n"),
			('fprintln("a{b")', "a{b\n"),
			('fprintln("{}", "raw")', "raw\n"),
		]:
			with self.subTest(text):
				result, out = self._output(text)
				self.assertIs(EMPTY, result)
				self.assertEqual(expect, out)

	def test_fprintln_failures(self):
		for text, message in [
			('fprintln()', "fprintln requires at least one argument (format string)"),
			('fprintln(1)', "First argument to fprintln must be a string"),
			('fprintln("{} {}", 1)', "Not enough arguments provided for format string"),
			('fprintln("{}", 1, 2)', "Too many arguments provided for format string"),
			('fprintln("oops }")', "Invalid format string: unmatched '}'"),
		]:
			with self.subTest(text):
				result, out = self._output(text)
				self.assertEqual(Error(message), result)
				self.assertEqual("", out)

class StringPropertyTests(unittest.TestCase):

	def test_table(self):
		self.assertEqual({
			"length", "chars", "bytes", "is_empty", "is_numeric", "is_alpha", "is_alphanumeric",
			"is_ascii", "is_capitalized", "is_lowercase", "is_uppercase", "is_titlecase",
			"is_whitespace", "is_punctuation",
		}, set(STRING_PROPERTIES))

	def test_shapes(self):
		self.assertEqual(Integer(6), string_property("héllo", "length"))
		self.assertEqual(Array([String("a"), String("é")]), string_property("aé", "chars"))
		self.assertEqual(_ints(97, 233), string_property("aé", "bytes"))
		self.assertEqual(Error("No property named size"), string_property("abc", "size"))

	def test_predicates(self):
		for text, name, expect in [
			("", "is_empty", TRUE),
			(" ", "is_empty", FALSE),
			("12 3", "is_numeric", TRUE),
			("12a", "is_numeric", FALSE),
			("ab c", "is_alpha", TRUE),
			("ab1", "is_alpha", FALSE),
			("a1 b2", "is_alphanumeric", TRUE),
			("a-1", "is_alphanumeric", FALSE),
			("plain", "is_ascii", TRUE),
			("é", "is_ascii", FALSE),
			("Abc", "is_capitalized", TRUE),
			("abc", "is_capitalized", FALSE),
			("", "is_capitalized", FALSE),
			("ab c", "is_lowercase", TRUE),
			("aB", "is_lowercase", FALSE),
			("AB C", "is_uppercase", TRUE),
			("Ab", "is_uppercase", FALSE),
			("Hello World", "is_titlecase", TRUE),
			("Hello world", "is_titlecase", FALSE),
			("HEllo", "is_titlecase", FALSE),
			(" \t\n", "is_whitespace", TRUE),
			(" x ", "is_whitespace", FALSE),
			("!? ,", "is_punctuation", TRUE),
			("a!", "is_punctuation", FALSE),
		]:
			with self.subTest(text=text, name=name):
				self.assertIs(expect, string_property(text, name))

if __name__ == '__main__':
	unittest.main()
