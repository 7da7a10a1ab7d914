from __future__ import annotations

from artifacts.models.artifacts.files import ExportRecord, FileRecord, ImportRecord
from graph.builder import build_module_graph
from graph.exports import find_dead_exports, is_test_module
from rules.config import DEFAULT_TEST_FILE_SUFFIXES


def _import(specifier: str, *names: str, kind: str = "static-import") -> ImportRecord:
    return ImportRecord(specifier=specifier, kind=kind, names=list(names))


def _file(
    path: str,
    *,
    imports: list[ImportRecord] | None = None,
    exports: list[str] | None = None,
) -> FileRecord:
    return FileRecord(
        path=path,
        imports=imports or [],
        exports=[ExportRecord(name=name, declaration_kind="const") for name in exports or []],
    )


def _findings(files: list[FileRecord]) -> list[tuple[str, str, str]]:
    return find_dead_exports(build_module_graph(files), DEFAULT_TEST_FILE_SUFFIXES)


def test_unimported_export_is_dead() -> None:
    findings = _findings(
        [
            _file("dead/a.ts", exports=["unused", "used"]),
            _file("dead/b.ts", imports=[_import("./a", "used")]),
        ]
    )

    assert findings == [("dead-export", "dead/a.ts", "unused")]


def test_export_imported_only_from_test_files_is_test_only() -> None:
    findings = _findings(
        [
            _file("dead/a.ts", exports=["onlyTest"]),
            _file(
                "dead/a.spec.ts",
                imports=[_import("./a", "onlyTest")],
                exports=["helper"],
            ),
        ]
    )

    assert findings == [("test-only-export", "dead/a.ts", "onlyTest")]


def test_export_used_by_production_and_tests_is_live() -> None:
    findings = _findings(
        [
            _file("src/a.ts", exports=["shared"]),
            _file("src/a.test.ts", imports=[_import("./a", "shared")]),
            _file("src/main.ts", imports=[_import("./a", "shared")]),
        ]
    )

    assert findings == []


def test_self_import_does_not_keep_an_export_alive() -> None:
    findings = _findings(
        [_file("src/a.ts", imports=[_import("./a", "foo")], exports=["foo"])]
    )

    assert findings == [("dead-export", "src/a.ts", "foo")]


def test_namespace_and_dynamic_imports_use_every_export() -> None:
    findings = _findings(
        [
            _file("src/a.ts", exports=["one", "two"]),
            _file("src/b.ts", exports=["three"]),
            _file(
                "src/main.ts",
                imports=[
                    _import("./a", "*"),
                    _import("./b", "*", kind="dynamic-import"),
                ],
            ),
        ]
    )

    assert findings == []


def test_side_effect_import_uses_nothing() -> None:
    findings = _findings(
        [
            _file("src/polyfill.ts", exports=["install"]),
            _file("src/main.ts", imports=[_import("./polyfill")]),
        ]
    )

    assert findings == [("dead-export", "src/polyfill.ts", "install")]


def test_star_reexport_forwards_named_usage_to_the_declaring_module() -> None:
    findings = _findings(
        [
            _file("src/lib/impl.ts", exports=["thing", "other"]),
            _file(
                "src/lib/index.ts",
                imports=[_import("./impl", kind="export-from")],
            ),
            _file("src/main.ts", imports=[_import("./lib", "thing")]),
        ]
    )

    assert findings == [("dead-export", "src/lib/impl.ts", "other")]


def test_star_reexport_does_not_forward_default() -> None:
    findings = _findings(
        [
            _file("src/lib/impl.ts", exports=["default"]),
            _file(
                "src/lib/index.ts",
                imports=[_import("./impl", kind="export-from")],
            ),
            _file("src/main.ts", imports=[_import("./lib", "default")]),
        ]
    )

    assert findings == [("dead-export", "src/lib/impl.ts", "default")]


def test_named_reexport_marks_source_used_and_barrel_export_dead() -> None:
    files = [
        _file("src/impl.ts", exports=["thing"]),
        FileRecord(
            path="src/index.ts",
            imports=[_import("./impl", "thing", kind="export-from")],
            exports=[ExportRecord(name="thing", declaration_kind="re-export")],
        ),
    ]

    assert _findings(files) == [("dead-export", "src/index.ts", "thing")]


def test_usage_through_barrel_from_tests_only_is_test_only() -> None:
    findings = _findings(
        [
            _file("src/impl.ts", exports=["thing"]),
            _file("src/index.ts", imports=[_import("./impl", kind="export-from")]),
            _file("src/index.spec.ts", imports=[_import("./index", "thing")]),
        ]
    )

    assert findings == [("test-only-export", "src/impl.ts", "thing")]


def test_is_test_module_matches_configured_suffixes() -> None:
    assert is_test_module("src/a.spec.ts", DEFAULT_TEST_FILE_SUFFIXES)
    assert is_test_module("src/a.test.jsx", DEFAULT_TEST_FILE_SUFFIXES)
    assert not is_test_module("src/spec.ts", DEFAULT_TEST_FILE_SUFFIXES)
    assert is_test_module("src/a_it.ts", ["_it.ts"])
