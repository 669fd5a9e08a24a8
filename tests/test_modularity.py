from pathlib import Path
import io
import unittest
from unittest import mock

from lang.diagnostics import Report
from lang.environment import Environment
from lang.evaluator import evaluate
from lang.modularity import Loader
from lang.ontology import LangError
from lang.primitive import root_environment
from lang.syntax import Number, Float, String, Object, Function, Import, LetDeclaration, PropertyAccess, PropertyCall

base_folder = Path(__file__).parent.parent
zoo_ok = base_folder/"zoo/ok"
zoo_fail = base_folder/"zoo/fail"

class ImportTests(unittest.TestCase):

	def setUp(self) -> None:
		self.report = Report(verbose=False)
		self.env = root_environment(Loader(zoo_ok, self.report))

	def test_import_binds_exactly_the_alias(self):
		evaluate(LetDeclaration("mine", Number(1)), self.env)
		before = self.env.as_dict()
		evaluate(Import('"library.lang"', "lib"), self.env)
		after = self.env.as_dict()
		self.assertEqual({"lib"}, set(after) - set(before))
		for name, value in before.items():
			self.assertEqual(value, after[name])
		self.assertNotIn("answer", self.env)

	def test_object_holds_every_top_level_binding(self):
		evaluate(Import('"library.lang"', "lib"), self.env)
		lib = self.env.fetch("lib")
		self.assertIsInstance(lib, Object)
		self.assertEqual(Number(42), lib.properties["answer"])
		self.assertEqual(Float(0.5), lib.properties["half"])
		self.assertIsInstance(lib.properties["report"], Function)
		# The module ran in a copy of the importer's environment, built-ins and all.
		self.assertIn("print", lib.properties)
		self.assertEqual(set(root_environment()) | {"answer", "half", "report"}, set(lib.properties))

	def test_use_the_imported_object(self):
		evaluate(Import('"library.lang"', "lib"), self.env)
		self.assertEqual(Number(42), evaluate(PropertyAccess("lib", "answer"), self.env))
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			evaluate(PropertyCall("lib", "report", [Number(7)]), self.env)
		self.assertEqual("7\n", out.getvalue())

	def test_module_errors_propagate(self):
		with mock.patch("sys.stdout", new_callable=io.StringIO):
			with self.assertRaises(LangError) as cm:
				evaluate(Import('"failing_library.lang"', "bad"), self.env)
		self.assertEqual("Cannot add Number(1) and Boolean(true)", str(cm.exception))
		self.assertNotIn("bad", self.env)
		self.assertNotIn("before", self.env)

	def test_missing_file(self):
		with self.assertRaises(LangError) as cm:
			evaluate(Import('"no_such_file.lang"', "gone"), self.env)
		self.assertIn("no_such_file.lang", str(cm.exception))
		self.assertNotIn("gone", self.env)

	def test_unparseable_file(self):
		env = root_environment(Loader(zoo_fail, self.report))
		with self.assertRaises(LangError) as cm:
			evaluate(Import('"broken_module.lang"', "broken"), env)
		self.assertTrue(str(cm.exception).startswith("Cannot parse"), str(cm.exception))
		self.assertIn("(line 3)", str(cm.exception))

	def test_file_not_utf8(self):
		env = root_environment(Loader(zoo_fail, self.report))
		with self.assertRaises(LangError) as cm:
			evaluate(Import('"not_utf8.lang"', "latin"), env)
		self.assertIn("can't decode", str(cm.exception))
		self.assertNotIn("latin", env)

	def test_cyclic_import(self):
		env = root_environment(Loader(zoo_fail, self.report))
		with self.assertRaises(LangError) as cm:
			evaluate(Import('"circular_partner.lang"', "partner"), env)
		self.assertIn("Cyclic import", str(cm.exception))

	def test_no_loader(self):
		with self.assertRaises(LangError):
			evaluate(Import('"library.lang"', "lib"), Environment())

class LoaderTests(unittest.TestCase):

	def test_resolve(self):
		report = Report(verbose=False)
		self.assertEqual(zoo_ok/"library.lang", Loader(zoo_ok, report).resolve('"library.lang"'))
		self.assertEqual(Path("library.lang"), Loader(None, report).resolve('"library.lang"'))

	def test_verbose_loading_says_so(self):
		report = Report(verbose=True)
		env = root_environment(Loader(zoo_ok, report))
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			evaluate(Import('"library.lang"', "lib"), env)
		self.assertIn("Loading", err.getvalue())

if __name__ == '__main__':
	unittest.main()
