"""
This is an interpreter for a small embedded scripting language.

{0}

For example:

    lang program.lang

will run program.lang if possible, or else try to explain why not.

    lang -i

starts an interactive session, and

    lang -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="lang",
	description="Interpreter for a small embedded scripting language.",
)
parser.add_argument("program", nargs="?", help="try examples/hello_world.lang for example.")
parser.add_argument('-c', "--check", action="store_true", help="Parse the program but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", help="Say which modules get loaded and run.")
parser.add_argument('-i', "--interactive", action="store_true", help="Read and evaluate lines from the console.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .executive import check_program, run_program, repl
	report = Report(verbose=args.verbose)
	if args.interactive:
		repl(report)
		return 0
	if args.program is None:
		parser.error("Which program?")
	path = Path.cwd() / args.program
	try:
		if args.check:
			check_program(path, report)
		else:
			run_program(path, report)
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
