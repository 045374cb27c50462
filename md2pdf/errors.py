"""Errors raised while preparing a conversion. Each maps to exit status 1."""


class Md2PdfError(Exception):
	exit_code = 1


class UsageError(Md2PdfError):
	"""Bad or missing command-line input"""


class NoInputFileError(UsageError):
	def __init__(self):
		super().__init__("No input file specified.")


class MultipleInputFilesError(UsageError):
	def __init__(self, first, second):
		self.first = first
		self.second = second
		super().__init__(f"Multiple input files specified ('{first}' and '{second}').")


class ConflictingOptionsError(UsageError):
	def __init__(self):
		super().__init__(
			"The -t (theme) and -f (custom font) options are mutually exclusive.\n"
			"Please use one or the other, but not both."
		)


class InputFileNotFoundError(Md2PdfError):
	def __init__(self, path):
		self.path = path
		super().__init__(f"Input file '{path}' not found.")


class OperationCancelledError(Md2PdfError):
	def __init__(self):
		super().__init__("Operation cancelled.")
