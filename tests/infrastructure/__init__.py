"""
Shared test helpers for tplc.

Modules:
- file_utils: creating template and config files
- tree_utils: compact views of compiled trees for assertions
"""

from .file_utils import write
from .tree_utils import shape, compile_text

__all__ = ["write", "shape", "compile_text"]
