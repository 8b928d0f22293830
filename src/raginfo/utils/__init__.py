"""Utility functions for raginfo."""

from raginfo.utils.binary import extract_text, is_binary_content, is_binary_extension

__all__ = ["extract_text", "is_binary_content", "is_binary_extension"]
