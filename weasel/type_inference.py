"""
Hindley-Milner type inference, with let-polymorphism and a built-in fix-point combinator.

The DeductionEngine walks the expression tree top-down, threading a typing context
and driving the unifier. Generalization happens at let-bindings; instantiation
happens at every use of a name.
"""
from typing import Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .algebra import Monotype, Polytype, Function, Var, Unknowns, Quantify, Specialize, NUMBER, BOOL, STR, name_variable
from .context import TypingContext, EMPTY, root_context, UnboundVariable
from .diagnostics import Report, Listing
from .front_end import parse_text, WeaselParseError
from .unification import InferenceState, Incompatible, RecursiveTypeError

# Operators are numeric-only. Glyph -> result type.
OPS = {"+": NUMBER, "-": NUMBER, "*": NUMBER, "==": BOOL}

def generalize(state:InferenceState, ctx:TypingContext, ty:Monotype) -> Polytype:
	"""
	Quantify over whatever unknowns remain free in the type,
	except those the context still constrains: they may yet be solved from outside.
	"""
	ty = state.apply_solution(ty)
	constrained = set()
	for _, scheme in ctx.bindings():
		constrained |= state.apply_solution(scheme.body).visit(Unknowns())
	free = sorted(ty.visit(Unknowns()) - constrained)
	gamma = {nr: Var(name_variable(i)) for i, nr in enumerate(free, 1)}
	return Polytype([v.name for v in gamma.values()], ty.visit(Quantify(gamma)))

def instantiate(state:InferenceState, scheme:Polytype) -> Monotype:
	""" A fresh unknown for each quantified variable, so no two instances share. """
	if not scheme.quantified:
		return scheme.body
	gamma = {name: state.fresh_unknown() for name in scheme.quantified}
	return scheme.body.visit(Specialize(gamma))

class DeductionEngine(Visitor):
	"""
	visit(expr, ctx) computes the (not necessarily resolved) type of expr under ctx,
	recording what it learns in the inference state as it goes.
	"""
	def __init__(self, state:InferenceState, report:Report=None):
		self._state = state
		self._report = report

	def _trace(self, expr, typ:Monotype):
		if self._report is not None and self._report.is_verbose(2):
			self._report.debug(type(expr).__name__, "::", self._state.apply_solution(typ))
		return typ

	def visit_Literal(self, expr:syntax.Literal, ctx:TypingContext):
		if isinstance(expr.value, str):
			return STR
		if isinstance(expr.value, bool):
			return BOOL
		if isinstance(expr.value, int):
			return NUMBER
		raise TypeError(expr.value)

	def visit_Variable(self, expr:syntax.Variable, ctx:TypingContext):
		scheme = ctx.lookup(expr.nom.text, expr)
		return self._trace(expr, instantiate(self._state, scheme))

	def visit_Lambda(self, expr:syntax.Lambda, ctx:TypingContext):
		# A lambda parameter is never itself generalized.
		arg = self._state.fresh_unknown()
		res = self.visit(expr.body, ctx.extend(expr.binder.text, Polytype.mono(arg)))
		return self._trace(expr, Function(arg, res))

	def visit_Apply(self, expr:syntax.Apply, ctx:TypingContext):
		fn_type = self.visit(expr.fn_exp, ctx)
		arg_type = self.visit(expr.arg, ctx)
		res = self._state.fresh_unknown()
		self._state.unify(fn_type, Function(arg_type, res), expr)
		return self._trace(expr, res)

	def visit_BinExp(self, expr:syntax.BinExp, ctx:TypingContext):
		self._state.unify(self.visit(expr.lhs, ctx), NUMBER, expr.lhs)
		self._state.unify(self.visit(expr.rhs, ctx), NUMBER, expr.rhs)
		return OPS[expr.glyph]

	def visit_Cond(self, cond:syntax.Cond, ctx:TypingContext):
		self._state.unify(self.visit(cond.if_part, ctx), BOOL, cond.if_part)
		then_type = self.visit(cond.then_part, ctx)
		self._state.unify(self.visit(cond.else_part, ctx), then_type, cond)
		return self._trace(cond, then_type)

	def visit_Let(self, expr:syntax.Let, ctx:TypingContext):
		# The binder is not yet in scope for its own definition: recursion goes through fix.
		bound = self.visit(expr.expr, ctx)
		scheme = generalize(self._state, ctx, bound)
		if self._report is not None:
			self._report.info("let", expr.binder.text, ":", scheme)
		return self.visit(expr.body, ctx.extend(expr.binder.text, scheme))


def infer_type(expr:syntax.ValueExpression, ctx:TypingContext=None, state:InferenceState=None, report:Report=None) -> Polytype:
	"""
	The principal type of a whole expression, ready to show a human.
	Raises some TypeCheckError if there is no such thing.
	"""
	if state is None:
		state = InferenceState()
	state.reset()
	if ctx is None:
		ctx = root_context()
	typ = DeductionEngine(state, report).visit(expr, ctx)
	return generalize(state, EMPTY, state.apply_solution(typ))

def check_text(text:str, report:Report, filename:str=None) -> Optional[Polytype]:
	""" Parse and type-check; on failure, file the complaint in the report and return None. """
	listing = Listing(text, filename)
	try:
		expr = parse_text(text)
	except WeaselParseError as ex:
		report.parse_error(listing, ex)
		return None
	except RecursionError:
		report.too_deep(listing, "parsing")
		return None
	try:
		return infer_type(expr, report=report)
	except UnboundVariable as ex:
		report.unbound_variable(listing, ex)
	except RecursiveTypeError as ex:
		report.occurs_check(listing, ex)
	except Incompatible as ex:
		report.type_mismatch(listing, ex)
	except RecursionError:
		report.too_deep(listing, "inferring types")
	return None
