from pathlib import Path
import io
import unittest
from unittest import mock

from lang import diagnostics, executive
from lang.syntax import Number

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"

def _run_good(which) -> list[str]:
	report = diagnostics.Report(verbose=False)
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
		env = executive.run_program(examples/(which+".lang"), report)
	if report.sick():
		report.complain_to_console()
		raise AssertionError("Ostensibly-good example failed to run.")
	assert env is not None
	return out.getvalue().splitlines()

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def test_hello_world(self):
		self.assertEqual(["Hello, World!"], _run_good("hello_world"))

	def test_arithmetic(self):
		self.assertEqual(["3", "-1", "1.5", "-1", "3.5", "concat", "42", "float"], _run_good("arithmetic"))

	def test_functions(self):
		self.assertEqual(["Goodbye, Ada", "Hello", "one", "not one"], _run_good("functions"))

	def test_modules(self):
		# Property calls hand over their arguments as written, quotes and all.
		self.assertEqual(["Hi", 'Hi, "there"', "false"], _run_good("modules"))

	def test_final_environment(self):
		report = diagnostics.Report(verbose=False)
		with mock.patch("sys.stdout", new_callable=io.StringIO):
			env = executive.run_program(examples/"arithmetic.lang", report)
		self.assertEqual(Number(1), env.resolve("x"))
		self.assertEqual(Number(2), env.resolve("y"))

	def test_check_only(self):
		report = diagnostics.Report(verbose=False)
		program = executive.check_program(examples/"modules.lang", report)
		self.assertTrue(report.ok())
		self.assertEqual(4, len(program))

class CommandLineTests(unittest.TestCase):

	def test_check_flag(self):
		from lang import cmdline
		args = cmdline.parser.parse_args(["-c", str(examples/"hello_world.lang")])
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			self.assertEqual(0, cmdline.run(args))
		self.assertIn("Looks plausible", err.getvalue())

	def test_run_flag(self):
		from lang import cmdline
		args = cmdline.parser.parse_args([str(examples/"hello_world.lang")])
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			self.assertEqual(0, cmdline.run(args))
		self.assertEqual("Hello, World!\n", out.getvalue())

	def test_interactive(self):
		from lang import cmdline
		args = cmdline.parser.parse_args(["-i"])
		lines = iter(["let x = 40", "x + 2", "cookie()", 'print("still here")'])
		def fake_input(prompt=""):
			try: return next(lines)
			except StopIteration: raise EOFError
		with mock.patch("builtins.input", fake_input):
			with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
				with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
					self.assertEqual(0, cmdline.run(args))
		self.assertEqual(["42", "still here", ""], out.getvalue().splitlines())
		self.assertIn("Function cookie not found", err.getvalue())


if __name__ == '__main__':
	unittest.main()
