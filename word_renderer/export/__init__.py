"""Export Package

Rendering backends that turn the document model into output bytes:
- DocxExporter: Word (.docx) via python-docx
- PdfExporter: PDF via ReportLab
"""

from .docx_exporter import DocxExporter
from .pdf_exporter import PdfExporter

__all__ = [
    'DocxExporter',
    'PdfExporter',
]
