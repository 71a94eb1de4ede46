from __future__ import annotations

from pathlib import Path

import pytest

from tools import guard
from tools.checks import (
    check_classified_raises,
    check_exceptions,
    check_print,
    check_suppress,
    check_typing,
    run,
)

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write(tmp_path: Path, name: str, source: str) -> Path:
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return path


def test_repository_is_clean() -> None:
    roots = [str(REPO_ROOT / name) for name in guard.DEFAULT_ROOTS]
    assert run(roots) == 0


def test_bare_and_swallowing_handlers_are_flagged(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(
        tmp_path,
        "bad.py",
        "try:\n    x = 1\nexcept:\n    pass\n"
        "try:\n    y = 2\nexcept ValueError:\n    y = 0\n",
    )
    rc = run([str(tmp_path)], checks=[check_exceptions])
    err = capsys.readouterr().err
    assert rc == 1
    assert "bare 'except' is forbidden" in err
    assert err.count("except without re-raise is forbidden") == 2


def test_reraising_handler_is_allowed(tmp_path: Path) -> None:
    _write(tmp_path, "ok.py", "try:\n    x = 1\nexcept ValueError as exc:\n    raise RuntimeError() from exc\n")
    assert run([str(tmp_path)], checks=[check_exceptions]) == 0


def test_suppress_is_flagged(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path, "a.py", "from contextlib import suppress\n")
    _write(tmp_path, "b.py", "import contextlib\nwith contextlib.suppress(KeyError):\n    pass\n")
    rc = run([str(tmp_path)], checks=[check_suppress])
    assert rc == 1
    assert capsys.readouterr().err.count("contextlib.suppress swallows errors") == 2


def test_print_is_flagged(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path, "p.py", "print('hi')\n")
    assert run([str(tmp_path)], checks=[check_print]) == 1
    assert "'print' is forbidden" in capsys.readouterr().err


def test_typing_escapes_are_flagged(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(
        tmp_path,
        "t.py",
        "from typing import Any, cast\n"
        "x: Any = cast(int, 1)\n"
        "y = 1  # type: ignore\n"
        "z = 'type: ignore inside a string is fine'\n",
    )
    assert run([str(tmp_path)], checks=[check_typing]) == 1
    err = capsys.readouterr().err
    assert "forbidden typing import 'Any'" in err
    assert "forbidden typing import 'cast'" in err
    assert "forbidden type 'Any'" in err
    assert "forbidden use of cast()" in err
    assert err.count("forbidden 'type: ignore'") == 1


def test_guard_modules_raise_classified_errors(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = "def f(x):\n    if x:\n        raise ValueError('x')\n    raise BadRequest('y')\n"
    _write(tmp_path, "primitives.py", source)
    _write(tmp_path, "helpers.py", source)
    assert run([str(tmp_path)], checks=[check_classified_raises]) == 1
    err = capsys.readouterr().err
    assert "primitives.py:3 raise a guardkit.errors class, not ValueError" in err
    assert "helpers.py" not in err


def test_missing_roots_are_skipped(tmp_path: Path) -> None:
    assert run([str(tmp_path / "absent")]) == 0


def test_guard_main_uses_given_roots(tmp_path: Path) -> None:
    _write(tmp_path, "p.py", "print('hi')\n")
    assert guard.main([str(tmp_path)]) == 1
