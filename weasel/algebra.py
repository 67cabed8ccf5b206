"""
The algebra of types: what the inference engine computes about an expression.

A Monotype is one particular (perhaps not-yet-known) type.
A Polytype is a type-scheme: "forall a b. something-with-a-and-b".

Design Note:
-------------
The shapes of Monotype are a closed set.
Everything that needs to look inside a type does so through a MonotypeVisitor,
and the base visitor refuses every shape, so a new shape cannot quietly slip past
the renderer, the rewriter, the unknown-collector, or the unifier.
"""
from typing import Sequence

class Monotype:
	def visit(self, visitor:"MonotypeVisitor"): raise NotImplementedError(type(self))
	def phylum(self): raise NotImplementedError(type(self))
	def unify_with(self, other:"Monotype", enq): raise NotImplementedError(type(self))
	def __str__(self): return self.visit(Render())
	def __repr__(self): return "<%s>" % self

class Primitive(Monotype):
	""" Base types: no payload, and exactly one instance of each. """
	def __init__(self, name:str): self.name = name
	def visit(self, visitor): return visitor.on_primitive(self)
	def phylum(self): return self
	def unify_with(self, other, enq): pass

NUMBER = Primitive("Number")
BOOL = Primitive("Bool")
STR = Primitive("String")

class Function(Monotype):
	def __init__(self, arg:Monotype, res:Monotype): self.arg, self.res = arg, res
	def visit(self, visitor): return visitor.on_function(self)
	def phylum(self): return Function
	def unify_with(self, other:"Function", enq):
		# Argument first; the queue resolves the result afterward.
		enq(self.arg, other.arg)
		enq(self.res, other.res)
	def __eq__(self, other): return isinstance(other, Function) and self.arg == other.arg and self.res == other.res
	def __hash__(self): return hash((Function, self.arg, self.res))

class Unknown(Monotype):
	"""
	A unification variable. What it stands for lives in the solution
	(see unification.InferenceState), never in the node itself.
	"""
	def __init__(self, nr:int): self.nr = nr
	def visit(self, visitor): return visitor.on_unknown(self)
	def phylum(self): return Unknown
	def __eq__(self, other): return isinstance(other, Unknown) and self.nr == other.nr
	def __hash__(self): return hash((Unknown, self.nr))

class Var(Monotype):
	""" A bound type variable, as the "a" in "forall a. a -> a" """
	def __init__(self, name:str): self.name = name
	def visit(self, visitor): return visitor.on_var(self)
	def phylum(self): return Var, self.name
	def unify_with(self, other, enq): pass
	def __eq__(self, other): return isinstance(other, Var) and self.name == other.name
	def __hash__(self): return hash((Var, self.name))

class Polytype:
	def __init__(self, quantified:Sequence[str], body:Monotype):
		assert len(set(quantified)) == len(quantified), quantified
		self.quantified = tuple(quantified)
		self.body = body
	@staticmethod
	def mono(body:Monotype) -> "Polytype": return Polytype((), body)
	def __str__(self):
		if self.quantified:
			return "forall %s. %s" % (" ".join(self.quantified), self.body)
		else:
			return str(self.body)
	def __repr__(self): return "<%s>" % self
	def __eq__(self, other):
		return isinstance(other, Polytype) and self.quantified == other.quantified and self.body == other.body
	def __hash__(self): return hash((Polytype, self.quantified, self.body))

def name_variable(n:int) -> str:
	""" 1 -> a, 2 -> b, ... 26 -> z, 27 -> aa, and so forth. """
	name = ""
	while n:
		n, remainder = divmod(n-1, 26)
		name = chr(97+remainder) + name
	return name

#########################

class MonotypeVisitor:
	def on_primitive(self, p:Primitive): raise NotImplementedError(type(self))
	def on_function(self, f:Function): raise NotImplementedError(type(self))
	def on_unknown(self, u:Unknown): raise NotImplementedError(type(self))
	def on_var(self, v:Var): raise NotImplementedError(type(self))

#########################

class Render(MonotypeVisitor):
	""" Return a string representation of the term. """
	def on_primitive(self, p: Primitive): return p.name
	def on_function(self, f: Function): return "(%s -> %s)" % (f.arg.visit(self), f.res.visit(self))
	def on_unknown(self, u: Unknown): return "u%d" % u.nr
	def on_var(self, v: Var): return v.name

class Unknowns(MonotypeVisitor):
	""" The set of unification-variable numbers structurally reachable in a term. """
	def on_primitive(self, p: Primitive): return set()
	def on_function(self, f: Function): return f.arg.visit(self) | f.res.visit(self)
	def on_unknown(self, u: Unknown): return {u.nr}
	def on_var(self, v: Var): return set()

class Rewrite(MonotypeVisitor):
	"""
	Structural copy of a term. Subclasses decide what becomes of
	unknowns and bound variables; by default they stand for themselves.
	"""
	def on_primitive(self, p: Primitive): return p
	def on_function(self, f: Function): return Function(f.arg.visit(self), f.res.visit(self))
	def on_unknown(self, u: Unknown): return u
	def on_var(self, v: Var): return v

class Quantify(Rewrite):
	# For generalization: particular unknowns become bound variables.
	def __init__(self, gamma:dict[int, Var]):
		self.gamma = gamma
	def on_unknown(self, u: Unknown): return self.gamma.get(u.nr, u)

class Specialize(Rewrite):
	# For instantiation: bound variables become (normally fresh) unknowns.
	def __init__(self, gamma:dict[str, Monotype]):
		self.gamma = gamma
	def on_var(self, v: Var): return self.gamma.get(v.name, v)
