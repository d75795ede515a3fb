"""
Base class for bundles of configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config_builder import SchemaGeneratorConfigBuilder


class Module(ABC):
    """A reusable set of resolvers registered on a configuration builder."""

    @abstractmethod
    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        """Register this module's resolvers on the builder's config parts."""
        pass
