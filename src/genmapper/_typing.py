__all__ = [
    "Self",
    "TypeAlias",
    "assert_never",
    "override",
]

from typing_extensions import Self, TypeAlias, assert_never, override
