import io
from pathlib import Path
import unittest
from unittest import mock
from unittest.mock import patch

from tammr import cmdline
from tammr.diagnostics import Report, TooManyIssues
from tammr.front_end import parse_text, parse_file

base_folder = Path(__file__).parent.parent
zoo_ok = base_folder/"zoo/ok"
zoo_fail = base_folder/"zoo/fail"

class Silence(Report):
	def __init__(self, max_issues=30):
		super().__init__(verbose=False, max_issues=max_issues)
		self.complain_to_console = mock.Mock()

def _run(*argv, stdin=""):
	""" Returns the exit status and whatever went to stdout and stderr. """
	args = cmdline.parser.parse_args([str(a) for a in argv])
	with patch('sys.stdin', io.StringIO(stdin)), \
			patch('sys.stdout', new_callable=io.StringIO) as out, \
			patch('sys.stderr', new_callable=io.StringIO) as err:
		status = cmdline.run(args)
	return status, out.getvalue(), err.getvalue()

class FileModeTests(unittest.TestCase):

	def test_zoo_of_ok(self):
		for name, expect in [
			("closures", "3\n42\n"),
			("collections", "3 4 4\nJoe 41\nJoe has 3 letters\n"),
			("recursion", "610\n"),
			("forgiving", "Error: Identifier not found: nope\n2\n"),
		]:
			with self.subTest(name):
				status, out, err = _run(zoo_ok/(name+".tm"))
				self.assertFalse(status)
				self.assertEqual(expect, out)
				self.assertEqual("", err)

	def test_check_only(self):
		status, out, err = _run("-c", zoo_ok/"closures.tm")
		self.assertFalse(status)
		self.assertEqual("", out)
		self.assertIn("Looks plausible to me.", err)

	def test_verbose_narrates(self):
		status, out, err = _run("-v", zoo_ok/"recursion.tm")
		self.assertFalse(status)
		self.assertEqual("610\n", out)
		self.assertIn("Parsed", err)

	def test_token_dump(self):
		status, out, err = _run("-t", zoo_ok/"recursion.tm")
		self.assertFalse(status)
		lines = out.splitlines()
		self.assertEqual("1:1\t<KEYWORD LET>", lines[0])
		self.assertEqual("1:5\t<IDENT 'fib'>", lines[1])
		self.assertEqual("<EOF>", lines[-1].split("\t")[1])

	def test_zoo_of_fail(self):
		for name in ["syntax_errors", "unterminated_string", "unclosed_block", "no_such_file"]:
			with self.subTest(name):
				status, out, err = _run(zoo_fail/(name+".tm"))
				self.assertEqual(1, status)
				self.assertEqual("", out)
				self.assertTrue(err)

class ReplTests(unittest.TestCase):

	def test_bindings_persist(self):
		status, out, err = _run(stdin="let x = 5\nx * 2\nlet s = \"a\" + \"b\"\ns\nexit\nx\n")
		self.assertFalse(status)
		self.assertEqual([">> >> 10", ">> >> ab", ">> "], out.split("\n"))

	def test_errors_do_not_end_the_session(self):
		status, out, err = _run(stdin="nope\nlet = 1\n1 + 1\n")
		self.assertFalse(status)
		self.assertIn("Error: Identifier not found: nope\n", out)
		self.assertIn("2\n", out)
		self.assertIn("Syntax error", err)

	def test_end_of_input_ends_the_session(self):
		status, out, err = _run(stdin="[1, 2]\n")
		self.assertFalse(status)
		self.assertIn("[1, 2]\n", out)

class FrontEndTests(unittest.TestCase):

	def test_every_syntax_error_is_filed(self):
		report = Silence()
		self.assertIsNone(parse_file(zoo_fail/"syntax_errors.tm", report))
		self.assertEqual(3, len(report.issues))
		self.assertEqual(0, report.complain_to_console.call_count)
		self.assertIn("Syntax error", report.issues[0].as_text())

	def test_lex_error_is_filed(self):
		report = Silence()
		self.assertIsNone(parse_text('let s = "open', report))
		self.assertEqual(1, len(report.issues))
		self.assertIn("Unterminated string", report.issues[0].as_text())

	def test_missing_file(self):
		report = Silence()
		self.assertIsNone(parse_file(zoo_fail/"no_such_file.tm", report))
		self.assertTrue(report.sick())

	def test_too_many_issues(self):
		report = Silence(max_issues=2)
		with self.assertRaises(TooManyIssues):
			parse_text("let = 1; let = 2; let = 3;", report)

	def test_good_text(self):
		report = Silence()
		program = parse_text("let x = 1; x", report)
		self.assertTrue(report.ok())
		self.assertEqual(2, len(program))

if __name__ == '__main__':
	unittest.main()
