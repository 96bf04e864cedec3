"""Parser backends producing syntax trees and token streams."""

from .base import ParsedUnit, RawToken, SyntaxNode, UnitParser
from .libclang import ClangParser, libclang_available

__all__ = [
    "ClangParser",
    "ParsedUnit",
    "RawToken",
    "SyntaxNode",
    "UnitParser",
    "libclang_available",
]
