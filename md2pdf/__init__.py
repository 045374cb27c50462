"""Convert Markdown files to PDF with pandoc and XeLaTeX."""

__version__ = "1.0.0"
