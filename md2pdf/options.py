"""
Option resolution: validate parsed arguments and settle the output path.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from md2pdf.config import ConverterConfig
from md2pdf.errors import (
	ConflictingOptionsError,
	InputFileNotFoundError,
	NoInputFileError,
	OperationCancelledError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOptions:
	"""Validated settings for one conversion"""
	input_file: str
	output_file: str
	lang: str = ConverterConfig.DEFAULT_LANG
	theme: str = ConverterConfig.DEFAULT_THEME
	custom_font: str = ""
	verbose: bool = False


def derive_output_path(input_file):
	"""Swap the Markdown extension for .pdf, or append .pdf if there is none"""
	lowered = input_file.lower()
	for extension in ConverterConfig.MARKDOWN_EXTENSIONS:
		if lowered.endswith(extension):
			return input_file[:-len(extension)] + ConverterConfig.OUTPUT_EXTENSION
	return input_file + ConverterConfig.OUTPUT_EXTENSION


def confirm_on_terminal(prompt):
	"""
	Ask a y/N question on the terminal.

	Reads a whole line, so the answer needs Enter, unlike a one-key prompt.
	Surrounding whitespace is ignored; only a lone 'y' or 'Y' means yes.
	"""
	try:
		reply = input(prompt)
	except EOFError:
		print()
		return False
	return reply.strip() in ("y", "Y")


def resolve_options(args, confirm=confirm_on_terminal):
	"""
	Turn parsed command-line arguments into ConversionOptions.

	``confirm`` is called with the prompt text when the output file already
	exists and ``--yes`` was not given; it returns True to overwrite.
	"""
	custom_font = args.font or ""
	if args.theme != ConverterConfig.DEFAULT_THEME and custom_font:
		raise ConflictingOptionsError()

	if not args.input_file:
		raise NoInputFileError()
	if not Path(args.input_file).is_file():
		raise InputFileNotFoundError(args.input_file)

	output_file = args.output or derive_output_path(args.input_file)
	logger.debug(f"output file: {output_file}")

	if not args.yes and Path(output_file).is_file():
		if not confirm(f"File '{output_file}' already exists. Overwrite? (y/N) "):
			raise OperationCancelledError()

	return ConversionOptions(
		input_file=args.input_file,
		output_file=output_file,
		lang=args.lang,
		theme=args.theme,
		custom_font=custom_font,
		verbose=args.verbose,
	)
