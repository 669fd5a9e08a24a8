"""
Here find the module system -- such as it is.

An import reads another source file, evaluates it in a copy of the importer's
environment, and hands back everything that copy ends up holding as one object.
Nothing the imported program does can leak into the importer except through that object.
"""
from pathlib import Path
from typing import Optional

from . import syntax
from .ontology import LangError
from .environment import Environment
from .evaluator import execute
from .front_end import parse, LangParseError
from .location import LineIndex
from .diagnostics import Report

class Loader:
	"""
	The host-supplied collaborator behind the `import` statement.
	Paths resolve against the base directory if there is one, or else stand as written.
	"""

	def __init__(self, base:Optional[Path], report:Report):
		self.base = base
		self._report = report
		self._construction_stack:list[Path] = []

	def resolve(self, file:str) -> Path:
		name = file.replace('"', "")
		if self.base is None: return Path(name)
		else: return self.base / name

	def import_module(self, directive:syntax.Import, env:Environment) -> syntax.Object:
		path = self.resolve(directive.file)
		key = path.resolve()
		if key in self._construction_stack:
			raise LangError("Cyclic import of %s" % path)
		self._report.info("Loading", path)
		try:
			with open(path, "r", encoding="utf-8") as fh:
				text = fh.read()
		except (OSError, UnicodeDecodeError) as ex:
			raise LangError(str(ex))
		try:
			program = parse(text)
		except LangParseError as ex:
			line = LineIndex(text).line_of(ex.slice.start)
			raise LangError("Cannot parse %s: %s (line %d)" % (path, ex.message, line))
		module_env = env.fork()
		self._construction_stack.append(key)
		try:
			execute(program, module_env)
		finally:
			self._construction_stack.pop()
		return syntax.Object(module_env.as_dict(), directive.line)
