import sys, random
from functools import lru_cache
from typing import Optional
from pathlib import Path
from boozetools.support.failureprone import SourceText, illustration

from .location import LineIndex

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Dag Nabbit', 'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Heavens', 'Jeepers', 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects what went wrong, and tells about progress when asked to be verbose. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

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
	def parse_error(self, path:Optional[Path], text:str, message:str, where:slice):
		intro = "Parsing %s got confused." % (path or "the input")
		problem = [Annotation(path, text, where, message)]
		self.issue(Pic(intro, problem))

	# Methods the executive calls:
	def runtime_error(self, path:Optional[Path], text:str, line:int, message:str):
		intro = "Something went wrong while running %s:" % (path or "the input")
		if line:
			start = LineIndex(text).start_of(line)
			stop = text.find("\n", start)
			if stop < 0: stop = len(text)
			problem = [Annotation(path, text, slice(start, stop), message)]
			self.issue(Pic(intro, problem))
		else:
			self.issue(Pic(intro, [], [message]))

	def _file_error(self, path:Path, prefix:str, detail:str):
		self.issue(Pic(prefix+" "+str(path), [], [detail] if detail else []))

	def no_such_file(self, path:Path, detail:str=""):
		self._file_error(path, "I see no file called", detail)

	def broken_file(self, path:Path, detail:str=""):
		self._file_error(path, "Something went pear-shaped while trying to read", detail)

class Annotation:
	path: Optional[Path]
	slice: slice
	caption: str
	def __init__(self, path:Optional[Path], text:str, where:slice, caption:str=""):
		self.path = path
		self.source = _source(text, str(path) if path else None)
		self.slice = where
		self.caption = caption
	def illustrate(self):
		source = self.source
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, self.slice.stop - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self) -> str:
		return " ".join([self._intro] + [a.caption for a in self._anns] + list(self._footer))
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

@lru_cache(5)
def _source(text:str, filename:Optional[str]) -> SourceText:
	return SourceText(text, filename=filename)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
