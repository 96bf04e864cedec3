"""Smoke tests for the libclang parser backend."""

from __future__ import annotations

import pytest

from spelcpp.analyzers import UnitTraversal
from spelcpp.models import CompileUnitTask, ObservationKind
from spelcpp.parsing import ClangParser, libclang_available
from spelcpp.sinks import CollectingSink
from tests._fixtures.project_builder import ProjectBuilder

pytestmark = pytest.mark.skipif(not libclang_available(), reason="libclang not loadable")


def _write_project(project_builder: ProjectBuilder) -> CompileUnitTask:
    project_builder.write(
        {
            "sys/fakesys.h": """
            // system comment
            inline int bar() { return 1; }
            """,
            "include/local.h": """
            // local header comment
            inline int local_fn() { return 2; }
            """,
            "src/main.cpp": """
            #include <fakesys.h>
            #include "local.h"

            // greeting helper
            int helper(int value);

            int helper(int value) {
                return value + 42;
            }

            const char* greet() {
                return "hello";
            }
            """,
        }
    )
    return CompileUnitTask(
        source=project_builder.source("src/main.cpp"),
        arguments=(
            "-x",
            "c++",
            "-isystem",
            project_builder.source("sys"),
            "-I",
            project_builder.source("include"),
        ),
        directory=str(project_builder.root),
    )


def test_clang_unit_reports_definitions_comments_and_literals(
    project_builder: ProjectBuilder, sink: CollectingSink
) -> None:
    task = _write_project(project_builder)

    with ClangParser().open(task) as unit:
        assert unit is not None
        UnitTraversal(sink).process(unit)

    definitions = {item.text: item for item in sink.of_kind(ObservationKind.DEFINITION)}
    assert "helper" in definitions
    assert definitions["helper"].position.line == 7
    assert "greet" in definitions
    assert "bar" not in definitions
    assert "local_fn" not in definitions

    comments = [item.text for item in sink.of_kind(ObservationKind.COMMENT)]
    assert comments == ["// greeting helper"]

    literals = [item.text for item in sink.of_kind(ObservationKind.LITERAL)]
    assert '"hello"' in literals


def test_clang_parser_passes_working_directory() -> None:
    task = CompileUnitTask(source="main.cpp", arguments=("-DX",), directory="/work")
    assert ClangParser().arguments_for(task) == ["-working-directory", "/work", "-DX"]


def test_definitions_follow_line_directives(
    project_builder: ProjectBuilder, sink: CollectingSink
) -> None:
    project_builder.write(
        {
            "src/lines.cpp": """
            int before() { return 0; }
            #line 100
            int moved() { return 1; }
            #line 200 "renamed.cpp"
            int renamed() { return 2; }
            """,
        }
    )
    task = CompileUnitTask(
        source=project_builder.source("src/lines.cpp"),
        arguments=("-x", "c++"),
        directory=str(project_builder.root),
    )

    with ClangParser().open(task) as unit:
        assert unit is not None
        UnitTraversal(sink).process(unit)

    definitions = {item.text: item.position for item in sink.of_kind(ObservationKind.DEFINITION)}
    assert definitions["before"].line == 1
    assert definitions["moved"].line == 100
    assert definitions["moved"].column == 5
    assert definitions["renamed"].line == 200
    assert definitions["renamed"].file == "renamed.cpp"
