from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Build a small monorepo-style tree with profile files at several levels.

    project/
      .env.production
      config/.env.staging
      services/api/.env.other
      services/api/src/      (empty, used as a starting point)
    """
    root = tmp_path / "project"
    (root / "config").mkdir(parents=True)
    (root / "services" / "api" / "src").mkdir(parents=True)
    (root / ".env.production").write_text("MODE=prod\n", encoding="utf-8")
    (root / "config" / ".env.staging").write_text("MODE=staging\n", encoding="utf-8")
    (root / "services" / "api" / ".env.other").write_text("MODE=other\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _no_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_ENV", raising=False)
