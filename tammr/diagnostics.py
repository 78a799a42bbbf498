import sys, random
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .location import Position
from .lexer import LexError
from .parser import ParseError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm, ", "", ""]

	exclamations = [
		'Blast', 'Bother', 'Confound it', 'Criminy', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens',
		'Jeepers', 'Nuts', 'Rats', 'Shucks', 'Zounds',
	]

	resignations = [
		'That will not run.',
		'I cannot make sense of it.',
		'Something needs fixing first.',
		'Let us try that again.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, exclamations, resignations)))

class Report:
	""" Collects the problems found before a program can run, and complains about them. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self): return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	# Methods the front-end is likely to call:
	def lex_error(self, source:SourceText, path:Optional[Path], le:LexError):
		intro = "Lexical error: %s." % le.message
		problem = [Annotation(source, path, le.position, 1, le.message)]
		self.issue(Pic(intro, problem))

	def parse_error(self, source:SourceText, path:Optional[Path], pe:ParseError):
		intro = "Syntax error: %s." % pe.message
		width = max(1, len(pe.token.text))
		problem = [Annotation(source, path, pe.token.position, width, "confused here")]
		self.issue(Pic(intro, problem))

	# Methods about files:
	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), []))

	def broken_file(self, path:Path, cause:Exception):
		intro = "Something went pear-shaped while trying to read "+str(path)
		self.issue(Pic(intro, [], [str(cause)]))

class Annotation:
	def __init__(self, source:SourceText, path:Optional[Path], position:Position, width:int, caption:str=""):
		self.source = source
		self.path = path
		self.position = position
		self.width = width
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.position.index)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro, ""]
		path = None
		for ann in self._anns:
			if ann.path is not None and ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
