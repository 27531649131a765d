# tests/utils/__init__.py

from .config import write_config_file
from .constants import DEFAULT_TEST_LOG_LEVEL
from .patch_everywhere import patch_everywhere
from .tree import make_tree, rel_set


__all__ = [
    "DEFAULT_TEST_LOG_LEVEL",
    "make_tree",
    "patch_everywhere",
    "rel_set",
    "write_config_file",
]
