"""
Host environment queries: programs on PATH and the fontconfig catalog.

A font query that fails is logged and treated as an empty catalog, so the
reports built on top of it stay advisory.
"""

import logging
import shutil
import subprocess

from md2pdf.config import ConverterConfig

logger = logging.getLogger(__name__)


class SystemProber:
	"""Answers questions about the host by shelling out to fc-list"""

	def __init__(self, font_query_program=ConverterConfig.FONT_QUERY_PROGRAM):
		self.font_query_program = font_query_program
		self._catalog = None

	def is_program_available(self, name):
		path = shutil.which(name)
		logger.debug(f"which {name}: {path}")
		return path is not None

	def has_font_family(self, family):
		"""Substring match against the full fc-list output"""
		return family in self._font_catalog()

	def list_font_families(self):
		"""Sorted, distinct primary family names"""
		output = self._query_fonts("-f", "%{family[0]}\n")
		return sorted({line.strip() for line in output.splitlines() if line.strip()})

	def _font_catalog(self):
		if self._catalog is None:
			logger.debug(f"querying font catalog with {self.font_query_program}")
			self._catalog = self._query_fonts()
		return self._catalog

	def _query_fonts(self, *arguments):
		command = [self.font_query_program, *arguments]
		try:
			result = subprocess.run(command, capture_output=True, text=True, check=True)
		except (subprocess.CalledProcessError, OSError) as e:
			logger.warning(f"font query failed: {e}")
			return ""
		return result.stdout
