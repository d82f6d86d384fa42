import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from iocrypter.crypto.settings import KDFSettings  # noqa: E402


@pytest.fixture
def fast_settings() -> KDFSettings:
    # Argon2 needs at least 8 KiB per lane; keep tests quick.
    return KDFSettings(time=1, memory=64, threads=1)
