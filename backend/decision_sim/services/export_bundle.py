"""Export Bundle — packages the simulator's own sources into one downloadable file.

Invariants:
    - Output is a single executable zip archive (shebang + zip, the zipapp layout)
    - Archive root holds __main__.py, which launches the server and prompts the
      viewer for their own API key when none is configured
    - The launcher checks its runtime libraries first and exits with an install
      hint when any is missing
    - Only .py sources are bundled; caches and tests never are
    - Any failure surfaces as ExportError (session state is never touched)

Design Decisions:
    - In-memory build: nothing written to disk, bytes handed straight to the route
    - Standalone collaborator: no import from the session machine or advisory client
"""

import importlib.util
import io
import logging
import zipfile
from pathlib import Path

from decision_sim.core.errors import ExportError

logger = logging.getLogger(__name__)

BUNDLE_FILENAME = "Agile_Decision_Simulator.pyz"
BUNDLE_MEDIA_TYPE = "application/zip"

_PACKAGE_DIR = Path(__file__).resolve().parents[1]
_SHEBANG = b"#!/usr/bin/env python3\n"

_ENTRY_POINT = '''"""Agile Decision Simulator — standalone launcher."""

import sys

from decision_sim.services.export_bundle import missing_runtime_message

message = missing_runtime_message()
if message:
    sys.exit(message)

from decision_sim.__main__ import main

main(["--prompt-key"])
'''

# import name → distribution name on the package index
RUNTIME_REQUIREMENTS: dict[str, str] = {
    "fastapi": "fastapi",
    "uvicorn": "uvicorn",
    "pydantic_settings": "pydantic-settings",
    "anthropic": "anthropic",
}


def missing_runtime_message(
    requirements: dict[str, str] = RUNTIME_REQUIREMENTS,
) -> str | None:
    """Install hint for the libraries the bundle needs but cannot import."""
    missing = [
        dist for module, dist in requirements.items()
        if importlib.util.find_spec(module) is None
    ]
    if not missing:
        return None
    return (
        "시뮬레이터 실행에 필요한 라이브러리가 설치되어 있지 않습니다: "
        f"{', '.join(missing)}\n"
        f"설치 후 다시 실행해주세요: pip install {' '.join(missing)}"
    )


def collect_sources(package_dir: Path = _PACKAGE_DIR) -> dict[str, str]:
    """Map archive path → source text for every module in the package."""
    sources: dict[str, str] = {}
    for path in sorted(package_dir.rglob("*.py")):
        if "__pycache__" in path.parts:
            continue
        arcname = Path(package_dir.name) / path.relative_to(package_dir)
        sources[arcname.as_posix()] = path.read_text(encoding="utf-8")
    return sources


def build_export_bundle(package_dir: Path = _PACKAGE_DIR) -> bytes:
    """Build the archive bytes. Raises ExportError on any failure."""
    try:
        sources = collect_sources(package_dir)
    except (OSError, UnicodeDecodeError) as e:
        raise ExportError(f"could not read sources: {e}") from e
    if not sources:
        raise ExportError(f"no sources found under {package_dir}")

    buffer = io.BytesIO()
    buffer.write(_SHEBANG)
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("__main__.py", _ENTRY_POINT)
        for arcname, text in sources.items():
            archive.writestr(arcname, text)

    data = buffer.getvalue()
    logger.info(f"Export bundle built: {len(sources)} modules, {len(data)} bytes")
    return data
