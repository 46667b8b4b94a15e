"""Source discovery and loading."""

from scan.files import find_source_files
from scan.sources import load_source_files

__all__ = ["find_source_files", "load_source_files"]
