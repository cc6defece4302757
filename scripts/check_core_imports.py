#!/usr/bin/env python3
"""
Keep planka_mcp.core independent of the MCP server layer.

Everything under src/planka_mcp/core/ must be usable without FastMCP: the
server module imports core, never the other way round. Exits 1 and prints one
line per offending import otherwise.

Usage: check_core_imports.py [CORE_DIR]
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterator

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "planka_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "mcp.server",
    "fastmcp",
    "planka_mcp.server",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def _imported_modules(tree: ast.AST) -> Iterator[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            yield node.lineno, node.module


def scan_file(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(), filename=str(path))
    found = sorted(
        (lineno, mod) for lineno, mod in _imported_modules(tree) if is_forbidden(mod)
    )
    return [f"{path}:{lineno}: forbidden import '{mod}'" for lineno, mod in found]


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    core_dir = Path(argv[0]) if argv else CORE_DIR

    violations = [
        line
        for py_file in sorted(core_dir.rglob("*.py"))
        for line in scan_file(py_file)
    ]
    for line in violations:
        print(line, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
