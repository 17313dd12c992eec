import textwrap
from pathlib import Path
from uuid import uuid4

import pytest

from classrepo.config import get_settings
from classrepo.helper import _reset as _reset_helper

_ENV_KEYS = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_JSON",
    "CLASSREPO_CACHE_DIR",
    "CLASSREPO_AUTO_WRITE",
)


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    _reset_helper()
    yield
    get_settings.cache_clear()
    _reset_helper()


@pytest.fixture
def cache_folder(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def classes_package(tmp_path: Path, monkeypatch) -> tuple[Path, str]:
    """An importable package of finder classes, with a unique name per test."""
    name = f"finder_{uuid4().hex[:12]}"
    root = tmp_path / "src"
    package = root / name
    (package / "sub").mkdir(parents=True)
    (package / "__init__.py").write_text("")
    (package / "finder.py").write_text(
        textwrap.dedent(
            """
            class FinderInterface:
                pass


            class FinderImplementsInterface(FinderInterface):
                pass


            class Unrelated:
                class Nested:
                    pass
            """
        )
    )
    (package / "helpers.py").write_text("def helper():\n    return 1\n")
    (package / "sub" / "__init__.py").write_text("")
    (package / "sub" / "deep.py").write_text(
        f"from {name}.finder import FinderInterface\n\n\nclass Deep(FinderInterface):\n    pass\n"
    )
    monkeypatch.syspath_prepend(str(root))
    return package, name
