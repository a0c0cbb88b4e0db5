"""Run the finger CLI from a source checkout.

    python -m main <hostname> [<port>] [<query>]

An editable install (`pip install -e .`) makes this unnecessary; it only
exposes `src/` so `cli`, `core` and `adapters` import without one.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def _expose_src() -> None:
    path = str(SRC_DIR)
    if path not in sys.path:
        sys.path.insert(0, path)


if __name__ == "__main__":
    _expose_src()

    from cli.main import run  # noqa: E402

    run()
