"""
Converter Configuration
Fixed defaults, font themes and local file names
"""

from types import MappingProxyType


class ConverterConfig:
	"""Configuration for the pandoc/XeLaTeX conversion"""

	DEFAULT_LANG = "en"
	DEFAULT_THEME = "modern"

	# Typesetting defaults passed to pandoc
	FONT_SIZE = "11pt"
	GEOMETRY = "a4paper,left=3cm,right=2cm,top=2.5cm,bottom=2.5cm"
	HIGHLIGHT_STYLE = "tango"
	URL_COLOR = "blue"

	# External programs
	CONVERTER_PROGRAM = "pandoc"
	PDF_ENGINE = "xelatex"
	FONT_QUERY_PROGRAM = "fc-list"
	REQUIRED_PROGRAMS = (CONVERTER_PROGRAM, PDF_ENGINE, FONT_QUERY_PROGRAM)

	# Theme name -> font family. 'modern' is pandoc's built-in default.
	THEMES = MappingProxyType({
		"modern": "Latin Modern Roman",
		"heros": "TeX Gyre Heros",
		"termes": "TeX Gyre Termes",
		"pagella": "TeX Gyre Pagella",
	})

	# Languages typeset with indented paragraphs (first one included)
	INDENT_LANGUAGES = frozenset({"pt", "es"})
	URL_PACKAGE = r"\usepackage{xurl}"
	INDENT_DIRECTIVES = (
		r"\usepackage{indentfirst}",
		r"\setlength{\parindent}{1.5em}",
		r"\setlength{\parskip}{0pt}",
	)

	# File names
	MARKDOWN_EXTENSIONS = (".md", ".markdown")
	OUTPUT_EXTENSION = ".pdf"
	STYLE_INCLUDE = "style.tex"
	LUA_FILTER = "filter.lua"

	# Installation hints (Debian/Ubuntu)
	PROGRAM_SUGGESTION = "sudo apt-get install pandoc texlive-xetex fontconfig"
	FONT_SUGGESTION = "sudo apt-get install texlive-fonts-recommended"
	FONTCONFIG_SUGGESTION = "Install the 'fontconfig' package."


def is_markdown_path(token):
	"""True if the token is named like a Markdown file"""
	return token.lower().endswith(ConverterConfig.MARKDOWN_EXTENSIONS)
