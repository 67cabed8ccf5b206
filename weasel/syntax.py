"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
Every node knows the slice of source text it covers, so diagnostics can point at it.
"""
from typing import Union

class Phrase:
	slice: slice
	def span(self) -> slice: return self.slice

class ValueExpression(Phrase):
	pass

def _cover(first:Phrase, last:Phrase) -> slice:
	return slice(first.span().start, last.span().stop)

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str, a_slice:slice=None):
		assert isinstance(text, str)
		self.text = text
		self.slice = a_slice or slice(0, 0)
	def __repr__(self): return "<Name %r>" % self.text

class Literal(ValueExpression):
	def __init__(self, value:Union[int, bool, str], a_slice:slice=None):
		self.value = value
		self.slice = a_slice or slice(0, 0)
	def __repr__(self): return "<Literal %r>" % (self.value,)

class Variable(ValueExpression):
	def __init__(self, nom:Nom): self.nom = nom
	def span(self): return self.nom.span()
	def __repr__(self): return "<ref:%s>" % self.nom.text

class Lambda(ValueExpression):
	def __init__(self, binder:Nom, body:ValueExpression, a_slice:slice=None):
		self.binder, self.body = binder, body
		self.slice = a_slice or _cover(binder, body)
	def __repr__(self): return "<\\%s => %r>" % (self.binder.text, self.body)

class Apply(ValueExpression):
	def __init__(self, fn_exp:ValueExpression, arg:ValueExpression):
		self.fn_exp, self.arg = fn_exp, arg
	def span(self): return _cover(self.fn_exp, self.arg)
	def __repr__(self): return "<%r %r>" % (self.fn_exp, self.arg)

class BinExp(ValueExpression):
	def __init__(self, lhs:ValueExpression, glyph:str, rhs:ValueExpression):
		assert glyph in OPERATORS, glyph
		self.lhs, self.glyph, self.rhs = lhs, glyph, rhs
	def span(self): return _cover(self.lhs, self.rhs)
	def __repr__(self): return "<%r %s %r>" % (self.lhs, self.glyph, self.rhs)

class Cond(ValueExpression):
	def __init__(self, if_part:ValueExpression, then_part:ValueExpression, else_part:ValueExpression, a_slice:slice=None):
		self.if_part, self.then_part, self.else_part = if_part, then_part, else_part
		self.slice = a_slice or _cover(if_part, else_part)

class Let(ValueExpression):
	def __init__(self, binder:Nom, expr:ValueExpression, body:ValueExpression, a_slice:slice=None):
		self.binder, self.expr, self.body = binder, expr, body
		self.slice = a_slice or _cover(binder, body)

# Glyph -> (left binding power, right binding power)
OPERATORS = {
	"==": (1, 2),
	"+": (3, 4),
	"-": (3, 4),
	"*": (5, 6),
}

#####################
# A few conveniences for building trees by hand, as tests and other tools might.

def var(name:str) -> Variable: return Variable(Nom(name))
def lam(binder:str, body:ValueExpression) -> Lambda: return Lambda(Nom(binder), body)
def let(binder:str, expr:ValueExpression, body:ValueExpression) -> Let: return Let(Nom(binder), expr, body)

def apply(fn_exp:ValueExpression, *args:ValueExpression) -> ValueExpression:
	""" Left-associative juxtaposition, as in f x y == (f x) y """
	for a in args:
		fn_exp = Apply(fn_exp, a)
	return fn_exp
