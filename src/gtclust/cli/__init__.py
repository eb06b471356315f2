"""
Command-line interface for gtclust.
"""

__all__ = ["main"]
