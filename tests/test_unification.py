import unittest

from weasel.algebra import NUMBER, BOOL, STR, Function, Unknown
from weasel.unification import InferenceState, Incompatible, RecursiveTypeError, TypeCheckError

class SolutionStoreTests(unittest.TestCase):

	def setUp(self):
		self.state = InferenceState()

	def test_fresh_unknowns_never_repeat(self):
		seen = {self.state.fresh_unknown().nr for _ in range(100)}
		self.assertEqual(100, len(seen))

	def test_reset(self):
		u = self.state.fresh_unknown()
		self.state.solve_unknown(u.nr, NUMBER)
		self.state.reset()
		self.assertEqual({}, self.state.solution)
		self.assertEqual(Unknown(1), self.state.fresh_unknown())

	def test_apply_solution_chases_chains(self):
		u1, u2, u3 = (self.state.fresh_unknown() for _ in range(3))
		self.state.solve_unknown(u1.nr, Function(u2, u3))
		self.state.solve_unknown(u2.nr, u3)
		self.state.solve_unknown(u3.nr, BOOL)
		self.assertEqual(Function(BOOL, BOOL), self.state.apply_solution(u1))

	def test_apply_solution_is_idempotent(self):
		u1, u2, u3 = (self.state.fresh_unknown() for _ in range(3))
		self.state.unify(u1, Function(u2, u3))
		self.state.unify(u2, NUMBER)
		once = self.state.apply_solution(u1)
		self.assertEqual(once, self.state.apply_solution(once))
		self.assertEqual("(Number -> u3)", str(once))

	def test_binding_to_itself_is_a_no_op(self):
		u = self.state.fresh_unknown()
		self.state.solve_unknown(u.nr, u)
		self.assertEqual({}, self.state.solution)

	def test_occurs_check(self):
		u = self.state.fresh_unknown()
		with self.assertRaises(RecursiveTypeError) as cm:
			self.state.solve_unknown(u.nr, Function(u, NUMBER))
		self.assertEqual(u.nr, cm.exception.nr)
		self.assertEqual("Occurs check failed for u1 = (u1 -> Number)", cm.exception.message())

class UnifierTests(unittest.TestCase):

	def setUp(self):
		self.state = InferenceState()

	def test_same_primitives(self):
		for t in NUMBER, BOOL, STR:
			self.state.unify(t, t)
		self.assertEqual({}, self.state.solution)

	def test_different_primitives(self):
		with self.assertRaises(Incompatible) as cm:
			self.state.unify(NUMBER, STR)
		self.assertEqual("Can't unify Number with String", cm.exception.message())
		self.assertIsInstance(cm.exception, TypeCheckError)

	def test_primitive_against_function(self):
		with self.assertRaises(Incompatible):
			self.state.unify(Function(NUMBER, NUMBER), NUMBER)

	def test_result_sees_what_argument_learned(self):
		u1, u2 = self.state.fresh_unknown(), self.state.fresh_unknown()
		self.state.unify(Function(u1, u1), Function(NUMBER, u2))
		self.assertEqual(NUMBER, self.state.apply_solution(u2))

	def test_mismatch_reports_resolved_types(self):
		u1 = self.state.fresh_unknown()
		with self.assertRaises(Incompatible) as cm:
			self.state.unify(Function(u1, u1), Function(NUMBER, BOOL))
		self.assertEqual((NUMBER, BOOL), (cm.exception.prior, cm.exception.term))

	def test_indirect_cycle_is_caught(self):
		u1, u2 = self.state.fresh_unknown(), self.state.fresh_unknown()
		self.state.unify(u1, Function(u2, NUMBER))
		with self.assertRaises(RecursiveTypeError):
			self.state.unify(u2, u1)

	def test_unknown_with_unknown(self):
		u1, u2 = self.state.fresh_unknown(), self.state.fresh_unknown()
		self.state.unify(u1, u2)
		self.assertEqual(self.state.apply_solution(u1), self.state.apply_solution(u2))
		self.state.unify(u2, u1)
		self.assertEqual(1, len(self.state.solution))

	def test_symmetry(self):
		def shape(flip):
			self.state.reset()
			u1, u2, u3 = (self.state.fresh_unknown() for _ in range(3))
			t1 = Function(u1, Function(NUMBER, u2))
			t2 = Function(Function(u3, BOOL), u3)
			pair = (t2, t1) if flip else (t1, t2)
			self.state.unify(*pair)
			return self.state.apply_solution(t1), self.state.apply_solution(t2)
		forward, backward = shape(False), shape(True)
		self.assertEqual(forward, backward)
		self.assertEqual(forward[0], forward[1])
		self.assertEqual("(((Number -> u2) -> Bool) -> (Number -> u2))", str(forward[0]))

if __name__ == '__main__':
	unittest.main()
