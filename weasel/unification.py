"""
The unification approach to type-inference:
the solution store, the supply of fresh unknowns, and the unifier proper.
"""
from collections import deque
from typing import Optional
from .algebra import Monotype, Unknown, Unknowns, Rewrite
from .syntax import Phrase

class TypeCheckError(Exception):
	gripe: str
	at: Optional[Phrase]
	def message(self) -> str: raise NotImplementedError(type(self))

class UnificationFailed(TypeCheckError):
	def __init__(self, prior:Monotype, term:Monotype, at:Optional[Phrase]):
		super().__init__(prior, term, at)
		self.prior, self.term, self.at = prior, term, at
	def message(self): return self.gripe % (self.prior, self.term)

class Incompatible(UnificationFailed):
	gripe = "Can't unify %s with %s"

class RecursiveTypeError(UnificationFailed):
	gripe = "Occurs check failed for %s = %s"
	@property
	def nr(self) -> int: return self.prior.nr


class InferenceState:
	"""
	Everything one inference run knows about its unknowns:
	the solution (unknown-number -> monotype) and the supply of fresh numbers.
	Entries in the solution are never removed or replaced.
	After a failure the state is poisoned; reset() before the next run.
	"""
	def __init__(self):
		self.solution: dict[int, Monotype] = {}
		self.supply = 0

	def reset(self):
		self.solution = {}
		self.supply = 0

	def fresh_unknown(self) -> Unknown:
		self.supply += 1
		return Unknown(self.supply)

	def apply_solution(self, ty:Monotype) -> Monotype:
		return ty.visit(Resolve(self.solution))

	def solve_unknown(self, nr:int, ty:Monotype, stem:Phrase=None):
		if ty == Unknown(nr):
			return
		elif nr in ty.visit(Unknowns()):
			raise RecursiveTypeError(Unknown(nr), ty, stem)
		else:
			self.solution[nr] = ty

	def unify(self, ty1:Monotype, ty2:Monotype, stem:Phrase=None):
		def enq(a, b):
			queue.append((a, b))
		def U(a, b):
			a, b = self.apply_solution(a), self.apply_solution(b)
			# Lemma: neither A nor B mentions any solved unknown.
			if type(a) is Unknown:
				self.solve_unknown(a.nr, b, stem)
			elif type(b) is Unknown:
				self.solve_unknown(b.nr, a, stem)
			elif a.phylum() == b.phylum():
				a.unify_with(b, enq)
			else:
				raise Incompatible(a, b, stem)

		queue = deque()
		enq(ty1, ty2)
		while queue:
			U(*queue.popleft())


class Resolve(Rewrite):
	""" Chase every solved unknown through the solution, as far as it goes. """
	def __init__(self, solution:dict[int, Monotype]):
		self.solution = solution
	def on_unknown(self, u):
		if u.nr in self.solution:
			return self.solution[u.nr].visit(self)
		else:
			return u
