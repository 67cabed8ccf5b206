import sys, random
from typing import Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

from .syntax import Phrase

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Jeepers',
		"Mercy", 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found while checking, and chatters about progress when asked. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def is_verbose(self, level=1) -> bool:
		return self._verbose >= level

	def debug(self, *args):
		if self.is_verbose(2):
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def parse_error(self, listing:Optional["Listing"], ex):
		intro = "Weasel got confused by the syntax. " + ex.message()
		problem = _annotate(listing, ex.slice, "Weasel got confused here")
		self.issue(Pic("parse", intro, problem))

	# Methods the type-checker calls:
	def unbound_variable(self, listing:Optional["Listing"], ex):
		intro = "I don't see what %r refers to." % ex.name
		problem = _annotate_phrase(listing, ex.at, ex.message())
		self.issue(Pic("unbound", intro, problem))

	def occurs_check(self, listing:Optional["Listing"], ex):
		intro = "This tries to equate u%d with %s which contains it, but a type cannot be part of itself." % (ex.nr, ex.term)
		problem = _annotate_phrase(listing, ex.at, ex.message())
		self.issue(Pic("occurs", intro, problem))

	def type_mismatch(self, listing:Optional["Listing"], ex):
		intro = "This tries to be both %s and also %s, which cannot happen." % (ex.prior, ex.term)
		problem = _annotate_phrase(listing, ex.at, ex.message())
		self.issue(Pic("mismatch", intro, problem))

	def too_deep(self, listing:Optional["Listing"], phase:str):
		intro = "This expression is nested too deeply for me while %s." % phase
		footer = ["Try breaking it up with some let-bindings."]
		self.issue(Pic("too_deep", intro, _annotate(listing, slice(0, 1), "starting here"), footer))

class Listing:
	""" Source text plus where it came from, for illustrating issues. """
	def __init__(self, text:str, filename:str=None):
		self.text, self.filename = text, filename
		self.source = SourceText(text, filename=filename)

class Annotation:
	def __init__(self, listing:Listing, a_slice:slice, caption:str=""):
		self.listing = listing
		self.slice = a_slice
		self.caption = caption
	def illustrate(self):
		source = self.listing.source
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, self.slice.stop - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

def _annotate(listing:Optional["Listing"], a_slice:slice, caption:str) -> list[Annotation]:
	if listing is None or not listing.text:
		return []
	# Point at the last character when the trouble is running out of text.
	last = len(listing.text) - 1
	start = min(a_slice.start, last)
	return [Annotation(listing, slice(start, max(start, min(a_slice.stop, last+1))), caption)]

def _annotate_phrase(listing:Optional["Listing"], at:Optional[Phrase], caption:str) -> list[Annotation]:
	if at is None:
		return []
	return _annotate(listing, at.span(), caption)

class Pic:
	def __init__(self, kind:str, intro:str, anns:Sequence[Annotation], footer=()):
		self.kind = kind
		self.intro = intro
		self._anns, self._footer = list(anns), footer
	def as_text(self):
		lines = [self.intro, ""]
		path = None
		for ann in self._anns:
			if ann.listing.filename != path:
				path = ann.listing.filename
				if path: lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
