"""Vault loading and parsing utilities."""

from .loader import ScanResult, iter_documents, load_document, scan_vault
from .parser import count_words, extract_inline_tags, extract_links

__all__ = [
    "ScanResult",
    "iter_documents",
    "load_document",
    "scan_vault",
    "count_words",
    "extract_inline_tags",
    "extract_links",
]
