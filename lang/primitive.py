"""
Build the primitive namespace: the built-in functions every program starts with.

Each built-in is an InternalFunction. The evaluator checks arity before dispatch;
after that the native callback owns its raw argument expressions and must
call back into evaluation itself if it wants their values.
"""
import re
import sys
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Node, Value, LangError
from .environment import Environment
from .evaluator import evaluate

class Show(Visitor):
	""" The display form of a value, as print() writes it. """
	def visit_Number(self, it:syntax.Number): return str(it.value)
	def visit_Float(self, it:syntax.Float): return repr(it.value)
	def visit_String(self, it:syntax.String): return it.text
	def visit_Boolean(self, it:syntax.Boolean): return "true" if it.value else "false"
	def visit_Null(self, it:syntax.Null): return "null"
	def visit_Function(self, it:syntax.Function): return "<fn %s>" % it.name
	def visit_InternalFunction(self, it:syntax.InternalFunction): return "<fn %s>" % it.name
	def visit_Object(self, it:syntax.Object): return "<object %s>" % ", ".join(sorted(it.properties))

_show = Show()

def show(value:Node) -> str:
	""" Unevaluated expressions can turn up where arguments went in as written. """
	if isinstance(value, Value): return _show.visit(value)
	else: return repr(value)

KIND_NAMES = {
	syntax.Number: "number",
	syntax.Float: "float",
	syntax.String: "string",
	syntax.Boolean: "boolean",
	syntax.Null: "null",
	syntax.Function: "function",
	syntax.InternalFunction: "function",
	syntax.Object: "object",
}

def kind_name(value:Node) -> str:
	return KIND_NAMES.get(type(value), type(value).__name__)

###############################################################################

def _print(args, env:Environment):
	print(show(evaluate(args[0], env)))
	return syntax.NULL

def _input(args, env:Environment):
	sys.stdout.write(show(evaluate(args[0], env)))
	sys.stdout.flush()
	return syntax.String(input(), quoted=False)

def _type_of(args, env:Environment):
	return syntax.String(kind_name(evaluate(args[0], env)), quoted=False)

def _to_string(args, env:Environment):
	return syntax.String(show(evaluate(args[0], env)), quoted=False)

# The shapes of numeric literals in source text, give or take a sign.
INTEGER = re.compile(r"-?[0-9]+")
REAL = re.compile(r"-?[0-9]+\.[0-9]+")

def _to_number(args, env:Environment):
	value = evaluate(args[0], env)
	if isinstance(value, (syntax.Number, syntax.Float)):
		return value
	if isinstance(value, syntax.String):
		text = value.text.strip()
		if INTEGER.fullmatch(text): return syntax.Number(int(text))
		if REAL.fullmatch(text): return syntax.Float(float(text))
	raise LangError("Cannot convert %r to a number" % (value,))

BUILT_INS = [
	("print", ["value"], _print),
	("input", ["prompt"], _input),
	("type_of", ["value"], _type_of),
	("to_string", ["value"], _to_string),
	("to_number", ["value"], _to_number),
]

def root_environment(loader=None) -> Environment:
	""" A fresh top-level scope holding the built-ins and knowing the reserved words. """
	env = Environment(reserved=syntax.RESERVED, loader=loader)
	for name, params, call_fn in BUILT_INS:
		env.assign(name, syntax.InternalFunction(name, params, call_fn))
	return env
