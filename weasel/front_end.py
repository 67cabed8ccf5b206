"""
Turn source text into an expression tree.

The scanner is a single regular expression; the parser is precedence-climbing
recursive descent. Application is juxtaposition and binds tighter than any operator.
"""
import re, sys
from typing import NamedTuple, Iterator
from boozetools.parsing.interface import ParseError
from . import syntax

class WeaselParseError(ParseError):
	""" args are: what was expected, the offending token's text, and its slice. """
	def __init__(self, expected:str, found:str, a_slice:slice):
		super().__init__(expected, found, a_slice)
		self.expected, self.found, self.slice = expected, found, a_slice
	def message(self):
		if self.found:
			return "Expected %s, but saw %r." % (self.expected, self.found)
		else:
			return "Expected %s, but ran out of text." % self.expected

class Token(NamedTuple):
	kind: str
	text: str
	slice: slice

END = "<END>"
RESERVED = frozenset(["LET", "IN", "IF", "THEN", "ELSE", "TRUE", "FALSE"])

_lexicon = re.compile(r"""
	(?P<ignore>\s+|\#[^\n]*)
	|(?P<integer>\d+)
	|(?P<short_string>"[^"\n]*")
	|(?P<word>[A-Za-z_][A-Za-z_0-9']*)
	|(?P<punctuation>=>|==|[-+*=()\\])
""", re.VERBOSE)

def scan(text:str) -> Iterator[Token]:
	pos = 0
	while pos < len(text):
		match = _lexicon.match(text, pos)
		if match is None:
			where = slice(pos, pos+1)
			if text[pos] == '"':
				raise WeaselParseError("a closing quote on the same line", text[pos:].split("\n")[0], where)
			raise WeaselParseError("a token", text[pos], where)
		kind, matched = match.lastgroup, match.group()
		where = slice(pos, match.end())
		pos = match.end()
		if kind == "ignore":
			continue
		elif kind == "punctuation":
			yield Token(sys.intern(matched), matched, where)
		elif kind == "word" and matched.upper() in RESERVED and matched.islower():
			yield Token(matched.upper(), matched, where)
		elif kind == "word":
			yield Token("name", sys.intern(matched), where)
		else:
			yield Token(kind, matched, where)
	yield Token(END, "", slice(len(text), len(text)))

ATOM_STARTERS = frozenset(["integer", "short_string", "name", "TRUE", "FALSE", "(", "\\", "IF", "LET"])

class Parser:
	def __init__(self, text:str):
		self._tokens = list(scan(text))
		self._index = 0

	def peek(self) -> Token: return self._tokens[self._index]

	def next(self) -> Token:
		token = self._tokens[self._index]
		if token.kind != END:
			self._index += 1
		return token

	def expect(self, kind:str, what:str) -> Token:
		token = self.next()
		if token.kind != kind:
			raise WeaselParseError(what, token.text, token.slice)
		return token

	def parse_program(self) -> syntax.ValueExpression:
		expr = self.parse_expr()
		self.expect(END, "the end of the expression")
		return expr

	def parse_expr(self, min_bp=0) -> syntax.ValueExpression:
		lhs = self.parse_application()
		while True:
			glyph = self.peek().kind
			if glyph not in syntax.OPERATORS:
				break
			left_bp, right_bp = syntax.OPERATORS[glyph]
			if left_bp < min_bp:
				break
			self.next()
			rhs = self.parse_expr(right_bp)
			lhs = syntax.BinExp(lhs, glyph, rhs)
		return lhs

	def parse_application(self) -> syntax.ValueExpression:
		expr = self.parse_atom()
		while self.peek().kind in ATOM_STARTERS:
			expr = syntax.Apply(expr, self.parse_atom())
		return expr

	def parse_atom(self) -> syntax.ValueExpression:
		token = self.peek()
		if token.kind not in ATOM_STARTERS:
			raise WeaselParseError("an expression", token.text, token.slice)
		return getattr(self, "parse_"+_ATOM_METHOD.get(token.kind, token.kind))()

	def parse_integer(self):
		token = self.next()
		return syntax.Literal(int(token.text), token.slice)

	def parse_short_string(self):
		token = self.next()
		return syntax.Literal(token.text[1:-1], token.slice)

	def parse_flag(self):
		token = self.next()
		return syntax.Literal(token.kind == "TRUE", token.slice)

	def parse_name(self):
		token = self.next()
		return syntax.Variable(syntax.Nom(token.text, token.slice))

	def parse_group(self):
		self.next()
		inner = self.parse_expr()
		self.expect(")", "a closing parenthesis")
		return inner

	def parse_lambda(self):
		# \binder => body
		start = self.next().slice.start
		binder = self._binder()
		self.expect("=>", "'=>'")
		body = self.parse_expr()
		return syntax.Lambda(binder, body, slice(start, body.span().stop))

	def parse_cond(self):
		# if c then a else b
		start = self.next().slice.start
		if_part = self.parse_expr()
		self.expect("THEN", "'then'")
		then_part = self.parse_expr()
		self.expect("ELSE", "'else'")
		else_part = self.parse_expr()
		return syntax.Cond(if_part, then_part, else_part, slice(start, else_part.span().stop))

	def parse_let(self):
		# let x = e in body
		start = self.next().slice.start
		binder = self._binder()
		self.expect("=", "'='")
		expr = self.parse_expr()
		self.expect("IN", "'in'")
		body = self.parse_expr()
		return syntax.Let(binder, expr, body, slice(start, body.span().stop))

	def _binder(self) -> syntax.Nom:
		token = self.expect("name", "a name to bind")
		return syntax.Nom(token.text, token.slice)

_ATOM_METHOD = {
	"TRUE": "flag", "FALSE": "flag",
	"(": "group", "\\": "lambda",
	"IF": "cond", "LET": "let",
}

def parse_text(text:str) -> syntax.ValueExpression:
	""" Raises WeaselParseError if the text is not a well-formed expression. """
	return Parser(text).parse_program()
