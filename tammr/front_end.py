"""
From text to a Program, filing every lexical or syntax problem with a Report.
A None return means the Report has something to say.
"""
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText
from . import syntax
from .diagnostics import Report
from .lexer import tokenize, LexError
from .parser import parse_tokens
from .tokens import Token

def _source(text:str, path:Optional[Path]) -> SourceText:
	if path is None: return SourceText(text)
	return SourceText(text, filename=str(path))

def scan_text(text:str, report:Report, path:Optional[Path]=None) -> Optional[list[Token]]:
	try: tokens = tokenize(text)
	except LexError as le:
		report.lex_error(_source(text, path), path, le)
		return None
	report.info("Scanned %d tokens from %s" % (len(tokens), path or "input"))
	return tokens

def parse_text(text:str, report:Report, path:Optional[Path]=None) -> Optional[syntax.Program]:
	tokens = scan_text(text, report, path)
	if tokens is None: return None
	program, errors = parse_tokens(tokens)
	if errors:
		source = _source(text, path)
		for pe in errors: report.parse_error(source, path, pe)
		return None
	report.info("Parsed %d statements" % len(program))
	return program

def read_file(path:Path, report:Report) -> Optional[str]:
	try:
		with open(path, "r", encoding="utf-8") as fh: return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except (OSError, UnicodeDecodeError) as ex:
		report.broken_file(path, ex)
	return None

def parse_file(path:Path, report:Report) -> Optional[syntax.Program]:
	text = read_file(path, report)
	if text is None: return None
	return parse_text(text, report, path)
