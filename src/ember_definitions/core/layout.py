"""Candidate file paths for a model, transform or import target.

Each supported ``(LayoutKind, ItemKind)`` pair maps to a template returning the
root-relative path segments of the definition, without extension. Every
template is expanded into one path per entry of ``SOURCE_EXTENSIONS``.
"""

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from types import MappingProxyType

from ember_definitions.models import ItemKind, LayoutKind, Location

SOURCE_EXTENSIONS = (".ts", ".js")

SegmentTemplate = Callable[[str], tuple[str, ...]]
PodTemplate = Callable[[str, str], tuple[str, ...]]


def _module_path_tail(module_path: str) -> tuple[str, ...]:
    """Drop the leading package segment of ``my-app/components/foo``."""
    return tuple(part for part in module_path.split("/")[1:] if part)


def _unified_import(module_path: str) -> tuple[str, ...]:
    return _module_path_tail(module_path)


def _classic_import(module_path: str) -> tuple[str, ...]:
    tail = _module_path_tail(module_path)
    return ("app", *tail) if tail else ()


LAYOUT_TEMPLATES: MappingProxyType[tuple[LayoutKind, ItemKind], SegmentTemplate] = MappingProxyType(
    {
        (LayoutKind.UNIFIED, ItemKind.MODEL): lambda name: ("src", "data", "models", name, "model"),
        (LayoutKind.UNIFIED, ItemKind.TRANSFORM): lambda name: ("src", "data", "transforms", name),
        (LayoutKind.UNIFIED, ItemKind.IMPORT_TARGET): _unified_import,
        (LayoutKind.CLASSIC, ItemKind.MODEL): lambda name: ("app", "models", name),
        (LayoutKind.CLASSIC, ItemKind.TRANSFORM): lambda name: ("app", "transforms", name),
        (LayoutKind.CLASSIC, ItemKind.IMPORT_TARGET): _classic_import,
    }
)

# Appended after the classic candidates when the project has a pod prefix.
POD_TEMPLATES: MappingProxyType[ItemKind, PodTemplate] = MappingProxyType(
    {
        ItemKind.MODEL: lambda name, prefix: ("app", prefix, name, "model"),
        ItemKind.TRANSFORM: lambda name, prefix: ("app", prefix, name, "transform"),
    }
)


def expand_extensions(root: str, segments: Sequence[str]) -> list[str]:
    """Join ``segments`` onto ``root`` once per source extension, typed first."""
    if not segments:
        return []
    *head, last = segments
    return [str(Path(root, *head, f"{last}{extension}")) for extension in SOURCE_EXTENSIONS]


def resolve_candidates(
    root: str,
    layout_kind: LayoutKind,
    pod_prefix: str | None,
    item_kind: ItemKind,
    name: str,
) -> list[str]:
    template = LAYOUT_TEMPLATES.get((layout_kind, item_kind))
    if template is None:
        return []

    templates = [template(name)]
    pod_template = POD_TEMPLATES.get(item_kind)
    if layout_kind is LayoutKind.CLASSIC and pod_prefix and pod_template is not None:
        templates.append(pod_template(name, pod_prefix))

    return [path for segments in templates for path in expand_extensions(root, segments)]


def paths_to_locations(paths: Iterable[str]) -> list[Location]:
    return [Location(path=path) for path in paths]
