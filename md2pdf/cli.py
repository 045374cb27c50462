#!/usr/bin/env python3
"""
Command-line front end for md2pdf.

--help, --diagnostics and --list-fonts are found in a pre-scan, in that order
of priority, and end the run before any other argument is looked at.
Everything else is parsed leniently: tokens named like Markdown files become
the input, unknown tokens are reported and skipped. Long options must be
spelled out in full.
"""

import argparse
import logging
import sys

from md2pdf.config import ConverterConfig, is_markdown_path
from md2pdf.converter import PandocConverter
from md2pdf.diagnostics import list_system_fonts, run_diagnostics
from md2pdf.errors import (
	Md2PdfError,
	MultipleInputFilesError,
	NoInputFileError,
	OperationCancelledError,
	UsageError,
)
from md2pdf.options import confirm_on_terminal, resolve_options
from md2pdf.prober import SystemProber
from md2pdf.watcher import watch_and_convert

logger = logging.getLogger(__name__)

HELP = "help"
DIAGNOSTICS = "diagnostics"
LIST_FONTS = "list-fonts"

# (action, parser dest, flags) in descending priority
PRIORITY_FLAGS = (
	(HELP, "help", ("-h", "--help")),
	(DIAGNOSTICS, "diagnostics", ("--diagnostics",)),
	(LIST_FONTS, "list_fonts", ("--list-fonts",)),
)


class UsageErrorParser(argparse.ArgumentParser):
	"""argparse parser that raises UsageError instead of exiting with status 2"""

	def error(self, message):
		raise UsageError(message)


def build_parser():
	parser = UsageErrorParser(
		prog="md2pdf",
		usage="%(prog)s [options] input_file.md",
		description="Converts a Markdown file to a high-quality PDF using Pandoc and XeLaTeX.",
		add_help=False,
		allow_abbrev=False,
	)
	themes = list(ConverterConfig.THEMES)
	parser.add_argument('-t', '--theme', dest='theme', choices=themes, default=ConverterConfig.DEFAULT_THEME, metavar='THEME', help=f"font theme, one of: {', '.join(themes)} (default: {ConverterConfig.DEFAULT_THEME})")
	parser.add_argument('-l', '--lang', dest='lang', default=ConverterConfig.DEFAULT_LANG, metavar='LANG', help=f"document language, e.g. en, es, pt (default: {ConverterConfig.DEFAULT_LANG})")
	parser.add_argument('-f', '--font', dest='font', default="", metavar='FONT_NAME', help='use a custom system font; cannot be used with -t')
	parser.add_argument('-o', '--output', dest='output', default="", metavar='OUTPUT_FILE', help='name of the output PDF file')
	parser.add_argument('-y', '--yes', dest='yes', action='store_true', help='bypass the overwrite confirmation prompt')
	parser.add_argument('-w', '--watch', dest='watch', action='store_true', help='convert again whenever the input, style.tex or filter.lua changes')
	parser.add_argument('-v', '--verbose', dest='verbose', action='store_true', help='verbose output')
	parser.add_argument('-h', '--help', dest='help', action='store_true', default=argparse.SUPPRESS, help='show this help message and exit')
	parser.add_argument('--diagnostics', dest='diagnostics', action='store_true', default=argparse.SUPPRESS, help='check for pandoc, xelatex, fc-list and the theme fonts, then exit')
	parser.add_argument('--list-fonts', dest='list_fonts', action='store_true', default=argparse.SUPPRESS, help='list usable fonts from your system and exit')
	return parser


def find_priority_action(argv):
	"""Return the highest-priority exit action present in argv, or None"""
	for action, _, flags in PRIORITY_FLAGS:
		if any(arg in flags for arg in argv):
			return action
	return None


def parsed_priority_action(args):
	"""Priority action argparse picked up from grouped short flags such as -yh"""
	for action, dest, _ in PRIORITY_FLAGS:
		if getattr(args, dest, False):
			return action
	return None


def run_priority_action(action, prober):
	if action == HELP:
		build_parser().print_help()
	elif action == DIAGNOSTICS:
		run_diagnostics(prober or SystemProber())
	elif action == LIST_FONTS:
		list_system_fonts(prober or SystemProber())
	return 0


def parse_arguments(argv, strict=False):
	"""
	Parse argv into a Namespace with an extra ``input_file`` attribute.

	Tokens argparse does not recognise are either the Markdown input (at most
	one) or unknown arguments, which are warned about, or rejected when
	``strict`` is set.
	"""
	args, extras = build_parser().parse_known_args(argv)
	args.input_file = ""
	for token in extras:
		if is_markdown_path(token):
			if args.input_file:
				raise MultipleInputFilesError(args.input_file, token)
			args.input_file = token
		elif strict:
			raise UsageError(f"Unknown argument: {token}")
		else:
			print(f"Warning: Ignoring unknown argument: {token}", file=sys.stderr)
	return args


def configure_logging(verbose):
	logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
						format='%(asctime)s - %(message)s',
						datefmt='%Y-%m-%d %H:%M:%S')


def main(argv=None, confirm=confirm_on_terminal, prober=None):
	"""Run md2pdf and return the process exit status"""
	if argv is None:
		argv = sys.argv[1:]

	action = find_priority_action(argv)
	if action:
		return run_priority_action(action, prober)

	try:
		args = parse_arguments(argv)
		action = parsed_priority_action(args)
		if action:
			return run_priority_action(action, prober)
		configure_logging(args.verbose)
		logger.debug(f"parsed arguments: {vars(args)}")
		options = resolve_options(args, confirm=confirm)
	except NoInputFileError as e:
		print(f"Error: {e}", file=sys.stderr)
		build_parser().print_help(file=sys.stderr)
		return e.exit_code
	except OperationCancelledError as e:
		print(e)
		return e.exit_code
	except Md2PdfError as e:
		print(f"Error: {e}", file=sys.stderr)
		return e.exit_code

	converter = PandocConverter(options)
	if args.watch:
		succeeded = watch_and_convert(converter)
	else:
		succeeded = converter.convert()
	return 0 if succeeded else 1


def run():
	sys.exit(main())


if __name__ == "__main__":
	run()
