"""libclang-backed parser for C and C++ translation units."""

from __future__ import annotations

from contextlib import contextmanager
from ctypes import byref, c_uint
from typing import Iterable, Iterator, List, Optional, Tuple

from clang import cindex

from ..logging import get_logger
from ..models import CompileUnitTask, LexicalTag, SourcePosition

_LOGGER = get_logger("parsing.libclang")


def libclang_available() -> bool:
    """Return True when the libclang shared library can be loaded."""
    try:
        cindex.Index.create()
    except (cindex.LibclangError, OSError):
        return False
    return True


def _presumed_location(location: "cindex.SourceLocation") -> Tuple[str, int, int]:
    """Return (file, line, column) after ``#line`` adjustments."""
    filename = cindex._CXString()
    line = c_uint()
    column = c_uint()
    cindex.conf.lib.clang_getPresumedLocation(
        location, byref(filename), byref(line), byref(column)
    )
    name = cindex.conf.lib.clang_getCString(filename)
    if isinstance(name, bytes):
        name = name.decode("utf-8", errors="replace")
    return name or "", line.value, column.value


def _resolve_location(location: "cindex.SourceLocation") -> Optional[SourcePosition]:
    if location is None or location.file is None:
        return None
    origin = location.file.name
    file_name, line, column = _presumed_location(location)
    return SourcePosition(
        file=file_name or origin,
        line=line,
        column=column,
        in_system_header=bool(cindex.conf.lib.clang_Location_isInSystemHeader(location)),
        origin_file=origin,
    )


class ClangNode:
    """Syntax node view over a libclang cursor."""

    __slots__ = ("_cursor",)

    def __init__(self, cursor: "cindex.Cursor") -> None:
        self._cursor = cursor

    @property
    def spelling(self) -> str:
        return self._cursor.spelling or ""

    @property
    def position(self) -> Optional[SourcePosition]:
        return _resolve_location(self._cursor.location)

    def is_definition(self) -> bool:
        return bool(self._cursor.is_definition())

    def children(self) -> Iterable["ClangNode"]:
        return [ClangNode(child) for child in self._cursor.get_children()]


class ClangToken:
    """Raw token view over a libclang token."""

    __slots__ = ("_token",)

    def __init__(self, token: "cindex.Token") -> None:
        self._token = token

    @property
    def tag(self) -> LexicalTag:
        return LexicalTag[self._token.kind.name]

    @property
    def spelling(self) -> str:
        return self._token.spelling or ""

    @property
    def position(self) -> Optional[SourcePosition]:
        return _resolve_location(self._token.location)


class ClangUnit:
    """A parsed translation unit; valid only inside ``ClangParser.open``."""

    def __init__(self, translation_unit: "cindex.TranslationUnit") -> None:
        self._tu: Optional["cindex.TranslationUnit"] = translation_unit

    @property
    def primary_file(self) -> str:
        return self._unit().spelling

    @property
    def root(self) -> ClangNode:
        return ClangNode(self._unit().cursor)

    def tokens(self) -> Iterator[ClangToken]:
        tu = self._unit()
        for token in tu.get_tokens(extent=tu.cursor.extent):
            yield ClangToken(token)

    def diagnostics(self) -> List[str]:
        messages: List[str] = []
        for diagnostic in self._unit().diagnostics:
            position = _resolve_location(diagnostic.location)
            prefix = f"{position}: " if position is not None else ""
            messages.append(f"{prefix}{diagnostic.spelling}")
        return messages

    def close(self) -> None:
        # Dropping the last reference disposes the libclang translation unit.
        self._tu = None

    def _unit(self) -> "cindex.TranslationUnit":
        if self._tu is None:
            raise RuntimeError("Translation unit has already been released")
        return self._tu


class ClangParser:
    """Parses compile units with libclang."""

    def __init__(self, options: int = 0) -> None:
        self._options = options

    def arguments_for(self, task: CompileUnitTask) -> List[str]:
        args: List[str] = []
        if task.directory:
            args.extend(["-working-directory", task.directory])
        args.extend(task.arguments)
        return args

    @contextmanager
    def open(self, task: CompileUnitTask) -> Iterator[Optional[ClangUnit]]:
        """Yield the parsed unit for ``task``, or None when libclang rejects it."""
        index = cindex.Index.create()
        translation_unit: Optional["cindex.TranslationUnit"]
        try:
            translation_unit = index.parse(
                task.source, args=self.arguments_for(task), options=self._options
            )
        except cindex.TranslationUnitLoadError as exc:
            _LOGGER.debug("libclang could not parse %s: %s", task.source, exc)
            translation_unit = None

        if translation_unit is None:
            yield None
            return

        # The translation unit holds the index; the unit owns the only reference.
        unit = ClangUnit(translation_unit)
        del translation_unit, index
        try:
            yield unit
        finally:
            unit.close()


__all__ = ["ClangNode", "ClangParser", "ClangToken", "ClangUnit", "libclang_available"]
