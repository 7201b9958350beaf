import sys
from pathlib import Path
import os


# Ensure project src is on path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

# Keep boto3 offline
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

import pytest  # noqa: E402

from data_loader import load_place_catalog  # noqa: E402
from reviewscore.fuzzy import CanonicalResolver  # noqa: E402


@pytest.fixture
def resolver() -> CanonicalResolver:
    places, aliases = load_place_catalog(None)
    return CanonicalResolver(places, aliases)
