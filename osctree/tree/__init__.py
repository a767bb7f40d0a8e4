"""
The OscTree node abstraction.

One node type represents arguments, messages and bundles; see osc_tree.py.
"""

from .arg_type import ArgType
from .osc_tree import OscTree, MAX_BLOB_SIZE

__all__ = ["ArgType", "OscTree", "MAX_BLOB_SIZE"]
