from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def errx_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    return [p for p in sorted(base.rglob("*.py")) if "__pycache__" not in p.parts]


def parse_imports(path: Path) -> list[ImportRef]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[ImportRef] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(ImportRef(module=alias.name, line=node.lineno))
            continue

        if isinstance(node, ast.ImportFrom):
            if node.level and node.level > 0:
                continue
            if node.module is None:
                continue
            imports.append(ImportRef(module=node.module, line=node.lineno))

    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(base: Path, forbidden: tuple[str, ...]) -> list[str]:
    root = errx_root()
    offenders: list[str] = []
    for file_path in iter_python_files(base):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_core_has_no_presentation_dependencies() -> None:
    offenders = _offenders(
        errx_root() / "core",
        ("errx.output", "errx.cli", "typer", "rich"),
    )
    assert not offenders, "core -> presentation dependency violations:\n" + "\n".join(offenders)


def test_output_does_not_import_cli() -> None:
    offenders = _offenders(errx_root() / "output", ("errx.cli", "typer"))
    assert not offenders, "output -> cli dependency violations:\n" + "\n".join(offenders)
