from __future__ import annotations

import ast
import builtins
import sys
import tokenize
from collections.abc import Callable, Iterable
from io import StringIO
from pathlib import Path

Check = Callable[[Path, str, ast.Module], list[str]]

FORBIDDEN_TYPING = {"Any", "cast"}

# Modules whose failures must stay inside the error taxonomy.
GUARD_MODULES = {"primitives.py", "combinators.py", "env.py"}

_BUILTIN_ERRORS = {
    name
    for name, obj in vars(builtins).items()
    if isinstance(obj, type) and issubclass(obj, BaseException)
} - {"AssertionError", "NotImplementedError"}


def iter_python_files(roots: Iterable[str]) -> Iterable[Path]:
    for root in roots:
        base = Path(root)
        if base.is_file() and base.suffix == ".py":
            yield base
        elif base.is_dir():
            yield from sorted(base.rglob("*.py"))


def check_exceptions(path: Path, text: str, tree: ast.Module) -> list[str]:
    errors: list[str] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.ExceptHandler):
            continue
        if node.type is None:
            errors.append(f"{path}:{node.lineno} bare 'except' is forbidden")
        if not any(isinstance(n, ast.Raise) for n in ast.walk(node)):
            errors.append(f"{path}:{node.lineno} except without re-raise is forbidden")
    return errors


def check_suppress(path: Path, text: str, tree: ast.Module) -> list[str]:
    errors: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module == "contextlib":
            errors.extend(
                f"{path}:{node.lineno} contextlib.suppress swallows errors"
                for alias in node.names
                if alias.name == "suppress"
            )
        if isinstance(node, ast.Attribute) and node.attr == "suppress":
            errors.append(f"{path}:{node.lineno} contextlib.suppress swallows errors")
    return errors


def check_print(path: Path, text: str, tree: ast.Module) -> list[str]:
    return [
        f"{path}:{n.lineno} use logger; 'print' is forbidden"
        for n in ast.walk(tree)
        if isinstance(n, ast.Call) and isinstance(n.func, ast.Name) and n.func.id == "print"
    ]


def check_typing(path: Path, text: str, tree: ast.Module) -> list[str]:
    errors: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module == "typing":
            errors.extend(
                f"{path}:{node.lineno} forbidden typing import '{alias.name}'"
                for alias in node.names
                if alias.name in FORBIDDEN_TYPING
            )
        elif isinstance(node, ast.Name) and node.id == "Any":
            errors.append(f"{path}:{node.lineno} forbidden type 'Any'")
        elif (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "cast"
        ):
            errors.append(f"{path}:{node.lineno} forbidden use of cast()")
    # Tokenize so that string literals mentioning the marker are not flagged.
    errors.extend(
        f"{path}:{tok.start[0]} forbidden 'type: ignore'"
        for tok in tokenize.generate_tokens(StringIO(text).readline)
        if tok.type == tokenize.COMMENT and "type: ignore" in tok.string
    )
    return errors


def check_classified_raises(path: Path, text: str, tree: ast.Module) -> list[str]:
    if path.name not in GUARD_MODULES:
        return []
    errors: list[str] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Raise) or node.exc is None:
            continue
        target = node.exc.func if isinstance(node.exc, ast.Call) else node.exc
        if isinstance(target, ast.Name) and target.id in _BUILTIN_ERRORS:
            errors.append(
                f"{path}:{node.lineno} raise a guardkit.errors class, not {target.id}"
            )
    return errors


ALL_CHECKS: tuple[Check, ...] = (
    check_typing,
    check_exceptions,
    check_suppress,
    check_print,
    check_classified_raises,
)


def run(roots: list[str], checks: Iterable[Check] = ALL_CHECKS) -> int:
    selected = tuple(checks)
    errors: list[str] = []
    for path in iter_python_files(roots):
        text = path.read_text(encoding="utf-8")
        try:
            tree = ast.parse(text, filename=str(path))
        except SyntaxError as exc:
            sys.stderr.write(f"{path}: PARSE_ERROR {exc}\n")
            raise
        for check in selected:
            errors.extend(check(path, text, tree))
    if errors:
        sys.stderr.write("\n".join(errors) + "\n")
        return 1
    return 0
