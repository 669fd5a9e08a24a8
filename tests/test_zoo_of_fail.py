from pathlib import Path
import io
import unittest
from unittest import mock

from lang.diagnostics import Report
from lang import executive

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(basename:str) -> str:
	specimen_path = zoo_fail / (basename + ".lang")
	assert specimen_path.exists(), specimen_path
	report = Silence()
	with mock.patch("sys.stdout", new_callable=io.StringIO):
		env = executive.run_program(specimen_path, report)
	assert 0 == report.complain_to_console.call_count
	if report.ok():
		assert env is not None
		return "failed to fail"
	assert env is None
	assert len(report.issues) == 1
	return report.issues[0].description

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, cases):
		for basename, fragment in cases:
			with self.subTest(basename):
				self.assertIn(fragment, _identify_problem(basename))

	def test_00_syntax_error(self):
		self.expect([
			("syntax_error", "Expected an expression"),
			("unterminated_string", "never ends"),
			("stray_character", "'*'"),
			("broken_module", "Expected the name of the function"),
		])

	def test_01_runtime_error(self):
		self.expect([
			("unknown_function", "Function cookie not found"),
			("wrong_arity", "pair takes 2 arguments"),
			("num_plus_string", 'Cannot add Number(1) and String(" cookie")'),
			("bad_condition", "must return a boolean"),
			("runaway_recursion", "Recursion too deep in down"),
		])

	def test_02_module_breakage(self):
		self.expect([
			("missing_import", "no_such_file.lang"),
			("broken_import", "Cannot parse"),
			("circular_import", "Cyclic import"),
			("not_utf8_import", "can't decode"),
		])

	def test_program_not_utf8(self):
		self.assertIn("pear-shaped", _identify_problem("not_utf8"))

	def test_no_such_program(self):
		report = Silence()
		self.assertIsNone(executive.run_program(zoo_fail/"not_there.lang", report))
		self.assertIn("I see no file called", report.issues[0].description)

if __name__ == '__main__':
	unittest.main()
