"""Run the CLI from a checkout: `python main.py run --paths ...`.

Adds `src/` to `sys.path` so no install is needed; CI installs the package
and calls the `cdn-refresh` script instead (see `action.yml`).
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
