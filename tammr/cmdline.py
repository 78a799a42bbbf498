"""
This is an interpreter for the tammr scripting language.

For example:

    tammr program.tm

will run program.tm if possible, or else try to explain why not.

    tammr

with no program starts an interactive session. Type `exit` to leave.

    tammr -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

PROMPT = ">> "

parser = argparse.ArgumentParser(
	prog="tammr",
	description=__doc__.strip(),
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="a source file to run. Leave it off for the interactive prompt.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program's syntax but do not actually execute the program.")
parser.add_argument('-t', "--tokens", action="store_true", help="Show the token stream instead of running anything.")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Narrate progress on the standard error stream.")

def _show_tokens(tokens):
	for token in tokens:
		print("%d:%d\t%r" % (token.position.line, token.position.column, token))

def run(args):
	from .diagnostics import Report, TooManyIssues
	report = Report(verbose=args.verbose)
	if args.program is None:
		return repl(report, show_tokens=args.tokens)
	path = Path(args.program)
	try:
		if args.tokens:
			from .front_end import read_file, scan_text
			text = read_file(path, report)
			tokens = None if text is None else scan_text(text, report, path)
			if report.ok(): _show_tokens(tokens)
		else:
			from .front_end import parse_file
			program = parse_file(path, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	if args.tokens:
		return
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
	else:
		from .evaluator import evaluate
		report.info("Running", path)
		evaluate(program)
		report.info("Finished", path)

def repl(report, show_tokens=False):
	""" Bindings persist from one line to the next. """
	from .diagnostics import TooManyIssues
	from .environment import Environment
	from .evaluator import Evaluator
	from .front_end import parse_text, scan_text
	from .values import EMPTY, Error
	env = Environment()
	evaluator = Evaluator()
	while True:
		try: line = input(PROMPT)
		except EOFError:
			print()
			return
		if line.strip() == "exit":
			return
		if not line.strip():
			continue
		report.reset()
		try:
			if show_tokens:
				tokens = scan_text(line, report)
				if tokens is not None: _show_tokens(tokens)
				program = None
			else:
				program = parse_text(line, report)
		except TooManyIssues:
			program = None
		if report.sick():
			report.complain_to_console()
		elif program is not None:
			result = evaluator.run(program, env)
			if result is not EMPTY and not isinstance(result, Error):
				print(result)

def main():
	sys.exit(run(parser.parse_args()))
