"""
This is a type-checker for the Weasel expression language.

{0}

For example:

    weasel -e "\\f => f (f 10)"

will print the principal type of that expression, or else try to explain why it has none.

    weasel program.wsl

does the same for the expression in a file.

    weasel -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="weasel",
	description="Type-checker for the Weasel expression language.",
)
parser.add_argument("program", nargs="?", help="a file containing one expression.")
parser.add_argument('-e', "--expression", help="check this expression instead of reading a file.")
parser.add_argument('-v', "--verbose", action="count", help="Narrate the inference: -v for let-bindings, -vv for every step.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .type_inference import check_text
	report = Report(verbose=args.verbose)
	if args.expression is not None:
		text, filename = args.expression, None
	elif args.program is not None:
		path = Path.cwd() / args.program
		try:
			text = path.read_text(encoding="utf-8")
		except OSError as ex:
			print("Something went pear-shaped while trying to read %s: %s" % (path, ex), file=sys.stderr)
			return 1
		filename = str(path)
	else:
		parser.error("Give either a program file or an expression.")
	try:
		typ = check_text(text, report, filename)
	except TooManyIssues:
		report.complain_to_console()
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	print("%s : %s" % (" ".join(text.split()), typ))
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
