"""
The tree-walking evaluator: the entire execution engine.

Every kind of node has exactly one rule, a function called _eval_<something>
whose `expr` annotation names the node type it handles. The rules are gathered
into a single dispatch table at import time, so it is easy to see that nothing
is missing and nothing is handled twice.

Evaluation mutates the environment it is given only for declarations and imports.
Function calls work in a fork of the caller's environment, which is thrown away afterward.
"""
import operator
from typing import Iterable
from . import syntax
from .ontology import Node, LangError
from .environment import Environment

def evaluate(expr:Node, env:Environment) -> Node:
	assert isinstance(env, Environment), type(env)
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise LangError("Unknown expression, got %r" % (expr,))
	return fn(expr, env)

def execute(body:Iterable[Node], env:Environment):
	""" Evaluate statements in order. The first error abandons the remainder. """
	for stmt in body: evaluate(stmt, env)

###############################################################################

def _eval_number(expr:syntax.Number, env:Environment): return expr
def _eval_float(expr:syntax.Float, env:Environment): return expr
def _eval_boolean(expr:syntax.Boolean, env:Environment): return expr
def _eval_null(expr:syntax.Null, env:Environment): return expr
def _eval_object(expr:syntax.Object, env:Environment): return expr

def _eval_string(expr:syntax.String, env:Environment):
	return expr.unquoted()

def _eval_semicolon(expr:syntax.Semicolon, env:Environment):
	return syntax.NULL

def _eval_identifier(expr:syntax.Identifier, env:Environment):
	return env.resolve(expr.name)

def _eval_let(expr:syntax.LetDeclaration, env:Environment):
	name = expr.name
	if name is None:
		raise LangError("let declaration has no name")
	if env.is_reserved(name):
		raise LangError("%s is a reserved keyword" % name)
	if isinstance(expr.value, syntax.Identifier):
		if not env.holds(expr.value.name):
			raise LangError("Variable %s not found" % expr.value.name)
		value = evaluate(env.fetch(expr.value.name), env)
	else:
		value = evaluate(expr.value, env)
	env.assign(name, value)
	return syntax.NULL

def _eval_function(expr:syntax.Function, env:Environment):
	env.assign(expr.name, syntax.Function(expr.name, expr.params, expr.body, line=0))
	return syntax.NULL

def _check_arity(name:str, params, args):
	if len(args) != len(params):
		raise LangError("%s takes %d arguments" % (name, len(params)))

def _run_body(name:str, body, inner:Environment):
	""" Runaway recursion is the language's own problem, not the host's. """
	try: execute(body, inner)
	except RecursionError: raise LangError("Recursion too deep in %s" % name)

def _eval_call(expr:syntax.Call, env:Environment):
	if not env.holds(expr.name):
		raise LangError("Function %s not found" % expr.name)
	callee = env.fetch(expr.name)
	if isinstance(callee, syntax.Function):
		_check_arity(expr.name, callee.params, expr.args)
		inner = env.fork()
		for param, arg in zip(callee.params, expr.args):
			# Each argument sees the caller's scope as it stood before the call, and nothing else.
			inner.assign(param, evaluate(arg, env.fork()))
		_run_body(expr.name, callee.body, inner)
		return syntax.NULL
	elif isinstance(callee, syntax.InternalFunction):
		_check_arity(expr.name, callee.params, expr.args)
		return callee.call_fn(list(expr.args), env)
	else:
		raise LangError("%s is not a function" % expr.name)

def _find_object(name:str, env:Environment, missing:str) -> syntax.Object:
	if not env.holds(name):
		raise LangError(missing % name)
	subject = env.fetch(name)
	if not isinstance(subject, syntax.Object):
		raise LangError("%s is not an object" % name)
	return subject

def _eval_property_call(expr:syntax.PropertyCall, env:Environment):
	subject = _find_object(expr.object, env, "Object %s not found")
	try: method = subject.properties[expr.property]
	except KeyError: raise LangError("Property %s not found in object %s" % (expr.property, expr.object))
	if not isinstance(method, syntax.Function):
		raise LangError("%s of %s is not a function" % (expr.property, expr.object))
	_check_arity(method.name, method.params, expr.args)
	inner = env.fork()
	for param, arg in zip(method.params, expr.args):
		# Unlike a plain call, arguments go in exactly as written.
		inner.assign(param, arg)
	_run_body(method.name, method.body, inner)
	return syntax.NULL

def _eval_property_access(expr:syntax.PropertyAccess, env:Environment):
	subject = _find_object(expr.object, env, "Variable %s not found")
	try: return subject.properties[expr.property]
	except KeyError: raise LangError("Property %s not found" % expr.property)

def _eval_import(expr:syntax.Import, env:Environment):
	if env.loader is None:
		raise LangError("Cannot import %s without a module loader" % expr.file)
	env.assign(expr.alias, env.loader.import_module(expr, env))
	return syntax.NULL

###############################################################################

def _same_kind_values(left:Node, right:Node):
	if type(left) is type(right) and type(left) in _COMPARABLE:
		return _COMPARABLE[type(left)](left), _COMPARABLE[type(right)](right)

_COMPARABLE = {
	syntax.Number: operator.attrgetter("value"),
	syntax.Float: operator.attrgetter("value"),
	syntax.String: operator.attrgetter("text"),
	syntax.Boolean: operator.attrgetter("value"),
}

def _eval_is_equal(expr:syntax.IsEqual, env:Environment):
	pair = _same_kind_values(evaluate(expr.left, env), evaluate(expr.right, env))
	return syntax.Boolean(pair is not None and pair[0] == pair[1], expr.line)

def _eval_is_unequal(expr:syntax.IsUnequal, env:Environment):
	pair = _same_kind_values(evaluate(expr.left, env), evaluate(expr.right, env))
	return syntax.Boolean(pair is None or pair[0] != pair[1], expr.line)

def _eval_exists(expr:syntax.Exists, env:Environment):
	return syntax.Boolean(not isinstance(evaluate(expr.value, env), syntax.Null), expr.line)

def _eval_if(expr:syntax.IfStatement, env:Environment):
	condition = evaluate(expr.condition, env)
	if not isinstance(condition, syntax.Boolean):
		raise LangError("If statement condition must return a boolean")
	if condition.value:
		execute(expr.body, env)
	return syntax.NULL

###############################################################################

NUMERIC = (syntax.Number, syntax.Float)

def _numeric(op, left:Node, right:Node, line:int):
	""" Integers stay integers; any float in the mix widens the whole operation to float. """
	if isinstance(left, syntax.Number) and isinstance(right, syntax.Number):
		return syntax.Number(op(left.value, right.value), line)
	if isinstance(left, NUMERIC) and isinstance(right, NUMERIC):
		return syntax.Float(op(float(left.value), float(right.value)), line)

def _eval_addition(expr:syntax.Addition, env:Environment):
	left = evaluate(expr.left, env)
	right = evaluate(expr.right, env)
	result = _numeric(operator.add, left, right, expr.line)
	if result is not None: return result
	if isinstance(left, syntax.String) and isinstance(right, syntax.String):
		return syntax.String(left.text + right.text, expr.line, quoted=False)
	raise LangError("Cannot add %r and %r" % (left, right))

def _eval_subtraction(expr:syntax.Subtraction, env:Environment):
	left = evaluate(expr.left, env)
	right = evaluate(expr.right, env)
	result = _numeric(operator.sub, left, right, expr.line)
	if result is not None: return result
	if isinstance(left, syntax.Null) and isinstance(right, syntax.Number):
		return syntax.Number(-right.value, expr.line)
	if isinstance(left, syntax.Null) and isinstance(right, syntax.Float):
		return syntax.Float(-right.value, expr.line)
	if isinstance(left, NUMERIC) and isinstance(right, syntax.Null):
		return left
	raise LangError("Cannot subtract %r and %r" % (left, right))

###############################################################################

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			assert _t not in EVALUATE, (_k, _t)
			EVALUATE[_t] = _v

attach_evaluation_methods(globals())
