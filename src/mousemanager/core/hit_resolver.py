"""Resolve which managed item, if any, sits under the pointer."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from mousemanager.core.registry import ManagedItem, Registry
from mousemanager.core.types import Region

__all__ = ["HitResolver", "RegionProvider"]

RegionProvider = Callable[[Any], Optional[Region]]


class HitResolver:
    """Identity-based click resolution and geometric hover resolution."""

    def __init__(self, registry: Registry, region_provider: RegionProvider) -> None:
        self._registry = registry
        self._region_provider = region_provider

    def resolve_click_target(
        self, current_object: Any
    ) -> tuple[Optional[ManagedItem], Optional[Region]]:
        """Match the host's topmost object at press time against the registry.

        The host already accounts for occlusion, so this is an identity lookup.
        """
        if current_object is None or not len(self._registry):
            return None, None
        item = self._registry.get(current_object)
        if item is None:
            return None, None
        return item, self._region_provider(item.handle)

    def resolve_hover_target(
        self, pointer_position: tuple[float, float]
    ) -> tuple[Optional[ManagedItem], Optional[Region]]:
        """Return the first hover-active item (registration order) containing the pointer."""
        for item in self._registry:
            if not item.active_on_hover:
                continue
            region = self._region_provider(item.handle)
            if region is None:
                continue
            if region.contains(pointer_position):
                return item, region
        return None, None
