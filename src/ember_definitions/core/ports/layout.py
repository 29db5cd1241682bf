from typing import Protocol


class LayoutMetadata(Protocol):
    def is_unified_layout(self, root: str) -> bool: ...

    def pod_prefix_for(self, root: str) -> str | None: ...
