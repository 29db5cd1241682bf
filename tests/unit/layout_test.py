"""Unit tests for layout-dependent candidate path construction."""

import os

import pytest

from ember_definitions.core.layout import (
    LAYOUT_TEMPLATES,
    SOURCE_EXTENSIONS,
    expand_extensions,
    paths_to_locations,
    resolve_candidates,
)
from ember_definitions.models import FILE_START, ItemKind, LayoutKind

ROOT = os.path.join(os.sep, "projects", "my-app")


def _rel(*candidates: str) -> list[str]:
    return [os.path.join(ROOT, *candidate.split("/")) for candidate in candidates]


class TestClassicLayout:
    def test_model(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, None, ItemKind.MODEL, "user")
        assert paths == _rel("app/models/user.ts", "app/models/user.js")

    def test_transform(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, None, ItemKind.TRANSFORM, "date")
        assert paths == _rel("app/transforms/date.ts", "app/transforms/date.js")

    def test_nested_model_name(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, None, ItemKind.MODEL, "admin/user")
        assert paths == _rel("app/models/admin/user.ts", "app/models/admin/user.js")

    def test_import_drops_package_segment(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, None, ItemKind.IMPORT_TARGET, "my-app/components/foo-bar")
        assert paths == _rel("app/components/foo-bar.ts", "app/components/foo-bar.js")

    def test_bare_package_import_has_no_candidates(self) -> None:
        assert resolve_candidates(ROOT, LayoutKind.CLASSIC, None, ItemKind.IMPORT_TARGET, "ember-data") == []


class TestPodOverlay:
    def test_model_pod_candidates_follow_classic_ones(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, "pods", ItemKind.MODEL, "user")
        assert paths == _rel(
            "app/models/user.ts",
            "app/models/user.js",
            "app/pods/user/model.ts",
            "app/pods/user/model.js",
        )

    def test_transform_pod_candidates(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, "pods", ItemKind.TRANSFORM, "date")
        assert paths == _rel(
            "app/transforms/date.ts",
            "app/transforms/date.js",
            "app/pods/date/transform.ts",
            "app/pods/date/transform.js",
        )

    def test_imports_ignore_pod_prefix(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, "pods", ItemKind.IMPORT_TARGET, "my-app/utils/x")
        assert paths == _rel("app/utils/x.ts", "app/utils/x.js")

    def test_unified_layout_ignores_pod_prefix(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.UNIFIED, "pods", ItemKind.MODEL, "user")
        assert paths == _rel("src/data/models/user/model.ts", "src/data/models/user/model.js")

    def test_empty_pod_prefix_is_ignored(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.CLASSIC, "", ItemKind.MODEL, "user")
        assert paths == _rel("app/models/user.ts", "app/models/user.js")


class TestUnifiedLayout:
    def test_model(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.UNIFIED, None, ItemKind.MODEL, "user")
        assert paths == _rel("src/data/models/user/model.ts", "src/data/models/user/model.js")

    def test_transform(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.UNIFIED, None, ItemKind.TRANSFORM, "currency")
        assert paths == _rel("src/data/transforms/currency.ts", "src/data/transforms/currency.js")

    def test_import_is_root_relative(self) -> None:
        paths = resolve_candidates(ROOT, LayoutKind.UNIFIED, None, ItemKind.IMPORT_TARGET, "my-app/src/ui/routes/x")
        assert paths == _rel("src/ui/routes/x.ts", "src/ui/routes/x.js")


class TestDispatch:
    def test_every_layout_and_item_kind_is_covered(self) -> None:
        assert set(LAYOUT_TEMPLATES) == {(layout, item) for layout in LayoutKind for item in ItemKind}

    def test_dispatch_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            LAYOUT_TEMPLATES[(LayoutKind.CLASSIC, ItemKind.MODEL)] = lambda name: ()  # type: ignore[index]

    def test_unknown_item_kind_returns_empty_list(self) -> None:
        assert resolve_candidates(ROOT, LayoutKind.CLASSIC, "pods", "component", "foo") == []  # type: ignore[arg-type]

    def test_typed_extension_comes_first(self) -> None:
        assert SOURCE_EXTENSIONS == (".ts", ".js")
        assert expand_extensions(ROOT, ("app", "x")) == _rel("app/x.ts", "app/x.js")

    def test_empty_segments_expand_to_nothing(self) -> None:
        assert expand_extensions(ROOT, ()) == []


class TestPathsToLocations:
    def test_locations_start_at_file_start(self) -> None:
        locations = paths_to_locations(_rel("app/models/user.ts"))
        assert len(locations) == 1
        assert locations[0].path == _rel("app/models/user.ts")[0]
        assert locations[0].range == FILE_START
