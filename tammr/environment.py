"""
Chains of mutable scopes.

A function value holds its defining environment by reference. Nothing points the
other way, so an environment never keeps the functions it gave birth to alive.
"""
from typing import Optional

class Unbound(KeyError): pass

class Environment:
	def __init__(self, parent: Optional["Environment"] = None):
		self.parent = parent
		self._bindings = {}
	
	def child(self) -> "Environment":
		return Environment(self)
	
	def __contains__(self, name: str) -> bool:
		return self._scope_of(name) is not None
	
	def _scope_of(self, name: str) -> Optional["Environment"]:
		env = self
		while env is not None:
			if name in env._bindings: return env
			env = env.parent
		return None
	
	def get(self, name: str):
		""" Innermost binding wins. None if the name is unbound anywhere in the chain. """
		scope = self._scope_of(name)
		if scope is not None: return scope._bindings[name]
	
	def define(self, name: str, value):
		""" Bind in this very scope, shadowing anything further out. """
		self._bindings[name] = value
	
	def assign(self, name: str, value):
		""" Mutate the existing binding wherever it lives. """
		scope = self._scope_of(name)
		if scope is None: raise Unbound(name)
		scope._bindings[name] = value
	
	def __repr__(self):
		depth, env = 0, self.parent
		while env is not None:
			depth, env = depth + 1, env.parent
		return "<Environment depth=%d %s>" % (depth, sorted(self._bindings))
