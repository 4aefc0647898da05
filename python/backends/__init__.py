"""Rendering backend implementations for the ZPL interpreter."""

from .pdf_backend import PdfBackend
from .trace_backend import TraceBackend

__all__ = ["PdfBackend", "TraceBackend"]
