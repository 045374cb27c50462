"""
Dependency diagnostics and system font listing.

Both reports are advisory: they print their findings and never fail the run.
The prober argument is anything with ``is_program_available``,
``has_font_family`` and ``list_font_families`` (see ``md2pdf.prober``).
"""

from dataclasses import dataclass

from md2pdf.config import ConverterConfig


@dataclass
class DependencyCheck:
	"""Found/missing outcome for one program or font"""
	name: str
	found: bool
	theme: str = ""
	suggestion: str = ""


def check_programs(prober):
	return [DependencyCheck(prog, prober.is_program_available(prog), suggestion=ConverterConfig.PROGRAM_SUGGESTION) for prog in ConverterConfig.REQUIRED_PROGRAMS]


def check_theme_fonts(prober):
	return [
		DependencyCheck(family, prober.has_font_family(family), theme, ConverterConfig.FONT_SUGGESTION)
		for theme, family in ConverterConfig.THEMES.items()
	]


def run_diagnostics(prober):
	"""Print the dependency report. Returns True if everything was found."""
	print("--- Running System Diagnostics ---")
	print("This tool will check for required programs and fonts.")
	print()

	# 1. Programs
	print("[1] Checking for required programs...")
	programs = check_programs(prober)
	for check in programs:
		if check.found:
			print(f"  ✅ Found: {check.name}")
		else:
			print(f"  ❌ Missing: {check.name}")
	all_programs_found = all(check.found for check in programs)
	if not all_programs_found:
		print("  -> Suggestion: Install missing programs. On Debian/Ubuntu, try:")
		for suggestion in sorted({check.suggestion for check in programs if not check.found}):
			print(f"     {suggestion}")
	print()

	# 2. Theme fonts
	print("[2] Checking for required font themes...")
	if not prober.is_program_available(ConverterConfig.FONT_QUERY_PROGRAM):
		print(f"  ⚠️ Could not check for fonts because '{ConverterConfig.FONT_QUERY_PROGRAM}' is not installed.")
		print(f"  -> Suggestion: {ConverterConfig.FONTCONFIG_SUGGESTION}")
		return False

	fonts = check_theme_fonts(prober)
	for check in fonts:
		if check.found:
			print(f"  ✅ Found font for theme '{check.theme}': {check.name}")
		else:
			print(f"  ❌ Missing font for theme '{check.theme}': {check.name}")
	all_fonts_found = all(check.found for check in fonts)
	if not all_fonts_found:
		print("  -> Suggestion: Install the 'texlive-fonts-recommended' package.")
		for suggestion in sorted({check.suggestion for check in fonts if not check.found}):
			print(f"     On Debian/Ubuntu, try: {suggestion}")
	print()

	print("--- Diagnostics Complete ---")
	return all_programs_found and all_fonts_found


def list_system_fonts(prober):
	"""Print the installed font families, one per line. Returns False if fc-list is missing."""
	print("--- Searching for Recommended System Fonts ---")
	print("The following fonts are likely suitable for use with the -f flag.")
	print()

	if not prober.is_program_available(ConverterConfig.FONT_QUERY_PROGRAM):
		print(f"  ❌ Error: '{ConverterConfig.FONT_QUERY_PROGRAM}' command not found.")
		print("  -> Suggestion: Install the 'fontconfig' package to use this feature.")
		return False

	for family in prober.list_font_families():
		print(family)

	print()
	print("Usage Tip: To use a font with spaces in its name, enclose it in quotes.")
	print('Example: md2pdf -f "DejaVu Sans" my_document.md')
	return True
