"""
Simplest possible environment concept.

One flat mapping from name to value per scope. Entering a scope (a function call,
an imported module) forks a copy rather than chaining to the parent, so a callee
can never disturb the bindings of its caller, nor a module those of its importer.

The copy is shallow. That is enough because no value is ever mutated in place:
objects, functions, and bodies are built once and then only read.
"""
from typing import Iterator, Optional
from .ontology import Node
from .syntax import NULL

class Environment:
	def __init__(self, bindings:Optional[dict[str, Node]]=None, *, reserved=frozenset(), loader=None):
		self._bindings = dict(bindings or ())
		self.reserved = reserved
		self.loader = loader  # Whoever knows how to turn an import into an object.

	def resolve(self, name:str) -> Node:
		""" Soft lookup: an unbound name means null. """
		return self._bindings.get(name, NULL)

	def holds(self, name:str) -> bool: return name in self._bindings
	def fetch(self, name:str) -> Node: return self._bindings[name]
	def is_reserved(self, name:str) -> bool: return name in self.reserved

	def assign(self, name:str, value:Node):
		self._bindings[name] = value
		return value

	def fork(self) -> "Environment":
		return Environment(self._bindings, reserved=self.reserved, loader=self.loader)

	def as_dict(self) -> dict[str, Node]: return dict(self._bindings)
	def __contains__(self, name): return name in self._bindings
	def __iter__(self) -> Iterator[str]: return iter(self._bindings)
	def __repr__(self): return "<Environment: %s>" % ", ".join(self._bindings)
