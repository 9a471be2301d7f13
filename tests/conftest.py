"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from xrates_bank import create_app  # noqa: E402
from xrates_bank.providers.registry import reset_registry  # noqa: E402
from xrates_bank.services.bank import XratesBank  # noqa: E402
from xrates_bank.services.expiration import ExpirationPolicy  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_default_policy() -> Iterator[None]:
    """Give every test a fresh process-wide expiration policy."""

    original = XratesBank.default_policy
    XratesBank.default_policy = ExpirationPolicy()
    yield
    XratesBank.default_policy = original
    reset_registry()


@pytest.fixture()
def app() -> Iterator:
    """Flask application backed by the mock provider."""

    flask_app = create_app("testing")
    yield flask_app


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return the path to bundled HTML fixtures."""

    return ROOT_DIR / "tests" / "fixtures"


@pytest.fixture()
def load_html_fixture(fixtures_dir: Path) -> Callable[[str], str]:
    """Load an HTML fixture by filename."""

    def _loader(filename: str) -> str:
        return (fixtures_dir / filename).read_text(encoding="utf-8")

    return _loader
