"""Core utilities shared across syntax and transform layers.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    depth_clamp: Clamp a depth limit against the interpreter recursion limit
    is_babel_available: Check for the optional Babel dependency
    read_text_file, write_text_file: File I/O with LocalizeFileError wrapping
    run_concurrently: Per-locale fan-out on a thread pool

Python 3.13+.
"""

from .babel_compat import is_babel_available
from .depth_guard import DepthGuard, depth_clamp
from .files import read_text_file, run_concurrently, write_text_file

__all__ = [
    "DepthGuard",
    "depth_clamp",
    "is_babel_available",
    "read_text_file",
    "run_concurrently",
    "write_text_file",
]
