"""PascalCase → kebab-case renaming and import rewriting."""

from .converter import to_kebab, to_kebab_name  # noqa: F401
from .imports import rewrite_imports, rewrite_tree  # noqa: F401
from .renamer import rename_tree  # noqa: F401

__all__ = ["to_kebab", "to_kebab_name", "rewrite_imports", "rewrite_tree", "rename_tree"]
