from __future__ import annotations

import sys

from tools.checks import run

DEFAULT_ROOTS = ["guardkit", "tests", "tools"]


def main(argv: list[str] | None = None) -> int:
    roots = argv if argv else DEFAULT_ROOTS
    return run(roots)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
