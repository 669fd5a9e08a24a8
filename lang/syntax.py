"""
The set of nodes in simple form.
The parser calls these constructors bottom-up; the evaluator consumes them
and answers with more of the same. Literal values play themselves.
"""
from typing import Optional, Sequence, Callable
from .ontology import Node, Value, Expression

RESERVED = frozenset(["let", "fn", "if", "import", "as", "exists", "true", "false", "null"])

###############################################################################
#  Values

class Number(Value):
	def __init__(self, value:int, line=0):
		if isinstance(value, bool) or not isinstance(value, int):
			raise TypeError("Number wants an int, not %s" % type(value).__name__)
		self.value, self.line = value, line
	def _key(self): return (self.value,)

class Float(Value):
	def __init__(self, value:float, line=0):
		self.value, self.line = float(value), line
	def _key(self): return (self.value,)

class String(Value):
	"""
	The parser leaves the surrounding quotes on a literal; evaluation takes them off.
	A string that came out of evaluation is never quoted, so evaluating it again leaves it be.
	"""
	def __init__(self, text:str, line=0, *, quoted:Optional[bool]=None):
		if quoted is None:
			quoted = len(text) >= 2 and text[0] == text[-1] == '"'
		self.text, self.line, self.quoted = text, line, quoted
	def unquoted(self) -> "String":
		if self.quoted: return String(self.text[1:-1], self.line, quoted=False)
		else: return self
	def _key(self): return (self.text,)
	def __repr__(self): return 'String("%s")' % self.text

class Boolean(Value):
	def __init__(self, value:bool, line=0):
		self.value, self.line = bool(value), line
	def _key(self): return (self.value,)
	def __repr__(self): return "Boolean(%s)" % ("true" if self.value else "false")

class Null(Value):
	def __init__(self, line=0):
		self.line = line

NULL = Null()

class Function(Value):
	""" A named closure. It captures nothing: every call re-binds it against a copy of the caller's environment. """
	def __init__(self, name:str, params:Sequence[str], body:Sequence[Node], line=0):
		self.name, self.params, self.body, self.line = name, tuple(params), tuple(body), line
	def _key(self): return self.name, self.params, self.body
	def __repr__(self): return "Function(%s(%s))" % (self.name, ", ".join(self.params))

NATIVE = Callable[[list, "Environment"], Node]

class InternalFunction(Value):
	""" A host-supplied function. The native callback gets the raw argument expressions and the live environment. """
	def __init__(self, name:str, params:Sequence[str], call_fn:NATIVE, line=0):
		self.name, self.params, self.call_fn, self.line = name, tuple(params), call_fn, line
	def _key(self): return self.name, self.params, self.call_fn
	def __repr__(self): return "InternalFunction(%s(%s))" % (self.name, ", ".join(self.params))

class Object(Value):
	""" A flat bag of bindings. At present, only importing a module makes one. """
	def __init__(self, properties:dict, line=0):
		self.properties, self.line = properties, line
	def _key(self): return (self.properties,)
	def __repr__(self): return "Object {%s}" % ", ".join(sorted(self.properties))

###############################################################################
#  Expressions

class Identifier(Expression):
	def __init__(self, name:str, line=0):
		self.name, self.line = name, line
	def _key(self): return (self.name,)

class LetDeclaration(Expression):
	def __init__(self, name:Optional[str], value:Node, line=0):
		self.name, self.value, self.line = name, value, line
	def _key(self): return self.name, self.value

class Call(Expression):
	def __init__(self, name:str, args:Sequence[Node], line=0):
		self.name, self.args, self.line = name, list(args), line
	def _key(self): return self.name, self.args

class PropertyCall(Expression):
	def __init__(self, object:str, property:str, args:Sequence[Node], line=0):
		self.object, self.property, self.args, self.line = object, property, list(args), line
	def _key(self): return self.object, self.property, self.args

class PropertyAccess(Expression):
	def __init__(self, object:str, property:str, line=0):
		self.object, self.property, self.line = object, property, line
	def _key(self): return self.object, self.property

class Import(Expression):
	""" The file is the raw literal, quotes and all. """
	def __init__(self, file:str, alias:str, line=0):
		self.file, self.alias, self.line = file, alias, line
	def _key(self): return self.file, self.alias

class BinExp(Expression):
	def __init__(self, left:Node, right:Node, line=0):
		self.left, self.right, self.line = left, right, line
	def _key(self): return self.left, self.right

class Addition(BinExp): pass
class Subtraction(BinExp): pass
class IsEqual(BinExp): pass
class IsUnequal(BinExp): pass

class Exists(Expression):
	def __init__(self, value:Node, line=0):
		self.value, self.line = value, line
	def _key(self): return (self.value,)

class IfStatement(Expression):
	def __init__(self, condition:Node, body:Sequence[Node], line=0):
		self.condition, self.body, self.line = condition, list(body), line
	def _key(self): return self.condition, self.body

class Semicolon(Expression):
	def __init__(self, line=0):
		self.line = line
