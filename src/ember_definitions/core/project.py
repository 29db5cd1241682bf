"""Layout metadata for a project root.

Detection reads the project on disk; ``EMBER_DEFINITIONS_LAYOUT`` and
``EMBER_DEFINITIONS_POD_PREFIX`` override it.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from ember_definitions.core.ports.layout import LayoutMetadata
from ember_definitions.models import LayoutKind

logger = logging.getLogger(__name__)

LAYOUT_ENV_VAR = "EMBER_DEFINITIONS_LAYOUT"
POD_PREFIX_ENV_VAR = "EMBER_DEFINITIONS_POD_PREFIX"

_POD_MODULE_PREFIX_RE = re.compile(r"""podModulePrefix\s*:\s*(['"`])(?P<prefix>[^'"`]+)\1""")


@dataclass(frozen=True)
class StaticLayoutMetadata:
    """Layout metadata for callers that already know the project's layout."""

    unified: bool = False
    pod_prefix: str | None = None

    def is_unified_layout(self, root: str) -> bool:
        return self.unified

    def pod_prefix_for(self, root: str) -> str | None:
        return self.pod_prefix


class FilesystemLayoutMetadata:
    """Reads the layout from the project files under ``root``."""

    def is_unified_layout(self, root: str) -> bool:
        return (Path(root) / "src" / "ui").is_dir()

    def pod_prefix_for(self, root: str) -> str | None:
        environment_file = Path(root) / "config" / "environment.js"
        try:
            content = environment_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        match = _POD_MODULE_PREFIX_RE.search(content)
        if match is None:
            return None
        return strip_application_name(match.group("prefix"))


@dataclass(frozen=True)
class OverriddenLayoutMetadata:
    base: LayoutMetadata
    layout: LayoutKind | None = None
    pod_prefix: str | None = None

    def is_unified_layout(self, root: str) -> bool:
        if self.layout is not None:
            return self.layout is LayoutKind.UNIFIED
        return self.base.is_unified_layout(root)

    def pod_prefix_for(self, root: str) -> str | None:
        if self.pod_prefix is not None:
            return self.pod_prefix or None
        return self.base.pod_prefix_for(root)


def strip_application_name(pod_module_prefix: str) -> str | None:
    """``my-app/pods`` -> ``pods``; a bare application name yields ``None``."""
    remainder = "/".join(part for part in pod_module_prefix.split("/")[1:] if part)
    return remainder or None


def get_layout_metadata() -> LayoutMetadata:
    layout_value = os.getenv(LAYOUT_ENV_VAR)
    pod_prefix = os.getenv(POD_PREFIX_ENV_VAR)
    if not layout_value and pod_prefix is None:
        return FilesystemLayoutMetadata()

    layout: LayoutKind | None = None
    if layout_value:
        try:
            layout = LayoutKind(layout_value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unsupported {LAYOUT_ENV_VAR} '{layout_value}'. Supported: {[kind.value for kind in LayoutKind]}"
            ) from None

    logger.debug("Layout overrides from environment: layout=%s pod_prefix=%r", layout_value, pod_prefix)
    return OverriddenLayoutMetadata(FilesystemLayoutMetadata(), layout=layout, pod_prefix=pod_prefix)
