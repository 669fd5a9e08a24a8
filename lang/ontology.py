"""
These most-fundamental classes sit apart from the concrete node types
so that the environment, the evaluator, and the built-ins can all
speak about nodes and errors without importing one another.

Parsed syntax and run-time values share one tagged union:
evaluation takes a node and gives back a node.
"""

class LangError(Exception):
	"""
	The one flat error channel of the evaluator.
	str() of the exception is the complete message; there are no codes.
	"""
	@property
	def message(self) -> str: return self.args[0]

class Node:
	""" Any member of the tagged union. The line is for diagnostics only and takes no part in equality. """
	line: int = 0

	def _key(self) -> tuple: return ()

	def __eq__(self, other):
		return type(self) is type(other) and self._key() == other._key()

	def __ne__(self, other): return not self == other

	__hash__ = None

	def __repr__(self):
		key = self._key()
		if key: return "%s(%s)" % (type(self).__name__, ", ".join(map(repr, key)))
		else: return type(self).__name__

class Value(Node):
	""" Things evaluation can yield: literals, functions, and objects. """

class Expression(Node):
	""" Things that only make sense as input to evaluation. """
