#!/usr/bin/env python3

import logging
import shlex
import shutil
import subprocess
import sys
from pathlib import Path

from md2pdf.config import ConverterConfig

logger = logging.getLogger(__name__)


class PandocConverter:
		def __init__(self, options, working_directory=None):
				"""Prepare a pandoc run for the given ConversionOptions"""
				self.options = options
				self.program_name = ConverterConfig.CONVERTER_PROGRAM
				self.program_path = shutil.which(self.program_name) or self.program_name
				self.working_directory = Path(working_directory) if working_directory else Path('.')

		def header_includes(self):
				"""LaTeX preamble lines passed as one header-includes variable"""
				lines = [ConverterConfig.URL_PACKAGE]
				if self.options.lang in ConverterConfig.INDENT_LANGUAGES:
						lines.extend(ConverterConfig.INDENT_DIRECTIVES)
				return "\n".join(lines)

		def main_font(self):
				"""Font family for -V mainfont, or None to keep pandoc's Latin Modern"""
				if self.options.custom_font:
						return self.options.custom_font
				if self.options.theme == ConverterConfig.DEFAULT_THEME:
						return None
				return ConverterConfig.THEMES[self.options.theme]

		def font_description(self):
				if self.options.custom_font:
						return f"{self.options.custom_font} (Custom)"
				if self.options.theme == ConverterConfig.DEFAULT_THEME:
						return f"Latin Modern (Theme: {self.options.theme})"
				return f"{ConverterConfig.THEMES[self.options.theme]} (Theme: {self.options.theme})"

		def build_arguments(self):
				"""Build the pandoc argument list (without the program itself)"""
				parameters = [
						f'{self.options.input_file}',
						'--standalone',
						f'--pdf-engine={ConverterConfig.PDF_ENGINE}',
						f'--highlight-style={ConverterConfig.HIGHLIGHT_STYLE}',
						'-V', f'fontsize={ConverterConfig.FONT_SIZE}',
						'-V', f'geometry:{ConverterConfig.GEOMETRY}',
						'-V', f'lang={self.options.lang}',
						'-V', 'lmodern=false',
						'-V', f'urlcolor={ConverterConfig.URL_COLOR}',
						'-o', f'{self.options.output_file}',
						'-V', f'header-includes={self.header_includes()}',
				]

				main_font = self.main_font()
				if main_font:
						parameters += ['-V', f'mainfont={main_font}']

				# optional files next to the document being run from
				style_include = self.working_directory / ConverterConfig.STYLE_INCLUDE
				if style_include.is_file():
						parameters += ['-H', f'{style_include}']
						print(f"Found and using local '{ConverterConfig.STYLE_INCLUDE}'.")
				lua_filter = self.working_directory / ConverterConfig.LUA_FILTER
				if lua_filter.is_file():
						parameters.append(f'--lua-filter={lua_filter}')
						print(f"Found and using local '{ConverterConfig.LUA_FILTER}'.")

				if self.options.verbose:
						parameters.append('--verbose')
				return parameters

		def print_summary(self):
				print("---")
				print(f"Input:    {self.options.input_file}")
				print(f"Output:   {self.options.output_file}")
				print(f"Font:     {self.font_description()}")
				print(f"Language: {self.options.lang}")
				print("---")

		def convert(self):
				"""Run pandoc once. Returns True when the PDF was generated."""
				command = [self.program_path] + self.build_arguments()
				self.print_summary()
				logger.debug(f"calling pandoc: {shlex.join(command)}")

				try:
						result = subprocess.run(command)
				except FileNotFoundError:
						print(f"❌ Error: '{self.program_name}' was not found. Run with --diagnostics to check your setup.", file=sys.stderr)
						return False

				if result.returncode == 0:
						print(f"✅ Successfully created {self.options.output_file}")
						return True
				logger.debug(f"pandoc exited with status {result.returncode}")
				print("❌ Error: PDF generation failed.", file=sys.stderr)
				return False
