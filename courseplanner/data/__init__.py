"""
Data loading and parsing module.

This package handles all file I/O, the catalog index and OCR response parsing.
"""

from .loader import DataLoader
from .catalog import Catalog
from .parser import OCRResponseParser
from .plan_store import save_plan, load_plan

__all__ = ["DataLoader", "Catalog", "OCRResponseParser", "save_plan", "load_plan"]
