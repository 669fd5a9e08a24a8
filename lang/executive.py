"""
This is the overall control for the host: it reads a program, builds the
top-level environment, and feeds the evaluator one top-level node at a time.
"""
from pathlib import Path
from typing import Optional

from . import syntax, front_end
from .ontology import Node, LangError
from .environment import Environment
from .evaluator import evaluate
from .primitive import root_environment, show
from .modularity import Loader
from .diagnostics import Report

def read_program(path:Path, report:Report) -> Optional[str]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except (OSError, UnicodeDecodeError) as ex:
		report.broken_file(path, str(ex))

def check_program(path:Path, report:Report) -> Optional[list[Node]]:
	text = read_program(path, report)
	if text is not None:
		return front_end.parse_text(text, path, report)

def run_program(path:Path, report:Report) -> Optional[Environment]:
	"""
	Evaluate every top-level node of the program in order against one environment.
	The first error stops the run. Answers the final environment, or None on failure.
	"""
	text = read_program(path, report)
	if text is None: return None
	program = front_end.parse_text(text, path, report)
	if program is None: return None
	env = root_environment(Loader(path.parent, report))
	report.info("Running", path)
	for node in program:
		try:
			evaluate(node, env)
		except LangError as ex:
			report.runtime_error(path, text, node.line, ex.message)
			return None
	return env

def repl(report:Report, prompt=">>> "):
	""" Read-evaluate-print. Imports resolve against the current directory. """
	env = root_environment(Loader(None, report))
	while True:
		try: text = input(prompt)
		except EOFError: break
		program = front_end.parse_text(text, None, report)
		if program is not None:
			try:
				for node in program:
					result = evaluate(node, env)
					if not isinstance(result, syntax.Null):
						print(show(result))
			except LangError as ex:
				report.runtime_error(None, text, 1, ex.message)
		report.complain_to_console()
		report.reset()
	print()
