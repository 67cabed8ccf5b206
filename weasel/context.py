"""
Simplest possible typing-context concept.

This is the canonical list-structured search.
Extending a context never disturbs it: the new binding lives in a new link
whose static link is the old context, so inner names shadow outer ones.
"""
from typing import Iterator, Optional
from .algebra import Polytype, Function, Var
from .syntax import Phrase
from .unification import TypeCheckError

class UnboundVariable(TypeCheckError):
	gripe = "Unbound variable %s"
	def __init__(self, name:str, at:Optional[Phrase]):
		super().__init__(name, at)
		self.name, self.at = name, at
	def message(self): return self.gripe % self.name

class TypingContext:
	def __init__(self, name:Optional[str], typ:Optional[Polytype], static_link:Optional["TypingContext"]):
		self._name, self._typ, self._static_link = name, typ, static_link

	def extend(self, name:str, typ:Polytype) -> "TypingContext":
		assert isinstance(typ, Polytype), typ
		return TypingContext(name, typ, self)

	def lookup(self, name:str, at:Phrase=None) -> Polytype:
		ctx = self
		while ctx is not None:
			if ctx._name == name:
				return ctx._typ
			ctx = ctx._static_link
		raise UnboundVariable(name, at)

	def bindings(self) -> Iterator[tuple[str, Polytype]]:
		""" The visible bindings, innermost first. Shadowed ones are skipped. """
		seen = set()
		ctx = self
		while ctx._static_link is not None:
			if ctx._name not in seen:
				seen.add(ctx._name)
				yield ctx._name, ctx._typ
			ctx = ctx._static_link

EMPTY = TypingContext(None, None, None)

def root_context() -> TypingContext:
	""" The built-in scope: just the fix-point combinator. """
	a = Var("a")
	fix = Polytype(["a"], Function(Function(a, a), a))
	return EMPTY.extend("fix", fix)
