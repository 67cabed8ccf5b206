import unittest

from weasel import syntax
from weasel.algebra import NUMBER, BOOL, Function, Unknown, Var, Polytype
from weasel.context import EMPTY, root_context, UnboundVariable
from weasel.front_end import parse_text
from weasel.type_inference import DeductionEngine, generalize, instantiate, infer_type
from weasel.unification import InferenceState, Incompatible, RecursiveTypeError

def _type_of(text:str) -> str:
	return str(infer_type(parse_text(text)))

class GoodExamples(unittest.TestCase):
	""" Things that have a type, and what that type is. """

	def expect(self, cases):
		for text, expected in cases:
			with self.subTest(text):
				self.assertEqual(expected, _type_of(text))

	def test_literals(self):
		self.expect([
			("1", "Number"),
			("true", "Bool"),
			("false", "Bool"),
			('"hello"', "String"),
		])

	def test_number_literal_ignores_context(self):
		state = InferenceState()
		engine = DeductionEngine(state)
		busy = root_context().extend("x", Polytype.mono(BOOL)).extend("n", Polytype.mono(state.fresh_unknown()))
		for n in (0, 1, 42, 10**30):
			for ctx in (EMPTY, root_context(), busy):
				self.assertIs(NUMBER, engine.visit(syntax.Literal(n), ctx))

	def test_lambdas(self):
		self.expect([
			(r"\x => x", "forall a. (a -> a)"),
			(r"\x => true", "forall a. (a -> Bool)"),
			(r"\x => \y => x", "forall a b. (a -> (b -> a))"),
			(r"(\f => f (f 10))", "((Number -> Number) -> Number)"),
			(r"\f => \x => f x + 10", "forall a. ((a -> Number) -> (a -> Number))"),
			(r"(\f => \x => x) (\x => x + 1) 10", "Number"),
		])

	def test_operators(self):
		self.expect([
			("1 + 2 * 3", "Number"),
			("1 - 2 == 3", "Bool"),
			(r"\x => \y => x * y", "(Number -> (Number -> Number))"),
			(r"\x => x == 0", "(Number -> Bool)"),
		])

	def test_conditional(self):
		self.expect([
			("if true then 1 else 2", "Number"),
			(r"\c => \x => if c then x else 0", "(Bool -> (Number -> Number))"),
			(r"\c => \x => \y => if c then x else y", "forall a. (Bool -> (a -> (a -> a)))"),
		])

	def test_let_polymorphism(self):
		self.expect([
			("let identity = \\x => x in let x = identity 10 in let y = identity true in identity", "forall a. (a -> a)"),
			("let identity = \\x => x in identity identity 10", "Number"),
			("let const = \\x => \\y => x in const 10", "forall a. (a -> Number)"),
			("let add3 = \\x => x + 3 in let twice = \\f => \\x => f (f x) in twice add3 10", "Number"),
		])

	def test_shadowing(self):
		self.expect([
			("let x = 1 in let x = true in x", "Bool"),
			(r"\x => \x => x + 1", "forall a. (a -> (Number -> Number))"),
		])

	def test_escape_check(self):
		# y shares x's unknown, so y must not be generalized away from it.
		self.expect([
			(r"\x => let y = x in y + 1", "(Number -> Number)"),
		])

	def test_fix(self):
		self.expect([
			("fix", "forall a. ((a -> a) -> a)"),
			("let fib = fix (\\f => \\n => if n == 0 then 1 else if n == 1 then 1 else f (n - 1) + f (n - 2)) in fib 5", "Number"),
			("let fib = fix \\f => \\n => if n == 0 then 1 else f (n - 1) in fib", "(Number -> Number)"),
		])

	def test_hand_built_tree(self):
		tree = syntax.let("twice", syntax.lam("f", syntax.lam("x", syntax.apply(syntax.var("f"), syntax.apply(syntax.var("f"), syntax.var("x"))))),
			syntax.apply(syntax.var("twice"), syntax.lam("b", syntax.Cond(syntax.var("b"), syntax.Literal(False), syntax.Literal(True)))))
		self.assertEqual("(Bool -> Bool)", str(infer_type(tree)))

class BadExamples(unittest.TestCase):
	""" Things that have no type, and how they fail. """

	def test_unbound(self):
		with self.assertRaises(UnboundVariable) as cm:
			infer_type(parse_text("x"))
		self.assertEqual("x", cm.exception.name)
		self.assertEqual("Unbound variable x", cm.exception.message())

	def test_no_self_reference_without_fix(self):
		with self.assertRaises(UnboundVariable) as cm:
			infer_type(parse_text(r"let f = \n => f n in f"))
		self.assertEqual("f", cm.exception.name)

	def test_self_application(self):
		for text in [r"(\x => x x) (\x => x x)", r"(\f => f f 10) (\x => x)"]:
			with self.subTest(text):
				with self.assertRaises(RecursiveTypeError):
					infer_type(parse_text(text))

	def test_mismatch(self):
		for text in [
			"1 + true",
			'if true then 1 else "no"',
			"if 1 then 2 else 3",
			'"a" == "b"',
			"1 2",
			r"\f => let a = f 1 in f true",
		]:
			with self.subTest(text):
				with self.assertRaises(Incompatible):
					infer_type(parse_text(text))

	def test_state_is_reset_between_runs(self):
		state = InferenceState()
		with self.assertRaises(Incompatible):
			infer_type(parse_text("1 + (\\x => x) true"), state=state)
		self.assertTrue(state.solution)
		self.assertEqual("forall a. (a -> a)", str(infer_type(parse_text(r"\y => y"), state=state)))

class SchemeTests(unittest.TestCase):

	def setUp(self):
		self.state = InferenceState()

	def test_generalize_names_in_order_of_unknown(self):
		u1, u2, u3 = (self.state.fresh_unknown() for _ in range(3))
		scheme = generalize(self.state, EMPTY, Function(u3, Function(u1, u2)))
		self.assertEqual(("a", "b", "c"), scheme.quantified)
		self.assertEqual(Function(Var("c"), Function(Var("a"), Var("b"))), scheme.body)

	def test_generalize_spares_the_context(self):
		u1, u2 = self.state.fresh_unknown(), self.state.fresh_unknown()
		u3 = self.state.fresh_unknown()
		self.state.unify(u3, Function(u1, BOOL))
		ctx = EMPTY.extend("x", Polytype.mono(u3))
		scheme = generalize(self.state, ctx, Function(u1, u2))
		self.assertEqual("forall a. (u1 -> a)", str(scheme))

	def test_instances_never_share(self):
		scheme = root_context().lookup("fix")
		one, two = instantiate(self.state, scheme), instantiate(self.state, scheme)
		self.assertEqual(Function(Function(Unknown(1), Unknown(1)), Unknown(1)), one)
		self.assertEqual(Function(Function(Unknown(2), Unknown(2)), Unknown(2)), two)

	def test_monomorphic_instance_is_itself(self):
		body = Function(Unknown(9), NUMBER)
		self.assertIs(body, instantiate(self.state, Polytype.mono(body)))
		self.assertEqual(0, self.state.supply)

if __name__ == '__main__':
	unittest.main()
