from __future__ import annotations

import sys
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"


def pytest_configure() -> None:
    # Packages under src/ are imported as top-level `exporters`, `managers`, `utils`.
    if str(SRC_ROOT) not in sys.path:
        sys.path.insert(0, str(SRC_ROOT))
