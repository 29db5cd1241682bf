"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from ember_definitions.core.project import LAYOUT_ENV_VAR, POD_PREFIX_ENV_VAR, StaticLayoutMetadata

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_layout_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's shell overrides out of layout detection."""
    monkeypatch.delenv(LAYOUT_ENV_VAR, raising=False)
    monkeypatch.delenv(POD_PREFIX_ENV_VAR, raising=False)


@pytest.fixture
def javascript_parser() -> Parser:
    """Return a tree-sitter parser for JavaScript."""
    return get_parser("javascript")


@pytest.fixture
def classic_layout() -> StaticLayoutMetadata:
    return StaticLayoutMetadata()


@pytest.fixture
def pod_layout() -> StaticLayoutMetadata:
    return StaticLayoutMetadata(pod_prefix="pods")


@pytest.fixture
def unified_layout() -> StaticLayoutMetadata:
    return StaticLayoutMetadata(unified=True)


@pytest.fixture
def classic_project(tmp_path: Path) -> Path:
    """A classic-layout project on disk with one model and one transform."""
    (tmp_path / "app" / "models").mkdir(parents=True)
    (tmp_path / "app" / "models" / "user.js").write_text("export default class User {}\n")
    (tmp_path / "app" / "transforms").mkdir(parents=True)
    (tmp_path / "app" / "transforms" / "date.ts").write_text("export default class DateTransform {}\n")
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "environment.js").write_text(
        "module.exports = function () {\n  return { modulePrefix: 'my-app' };\n};\n"
    )
    return tmp_path
