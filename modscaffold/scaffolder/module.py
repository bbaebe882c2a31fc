"""Module Descriptor: where a module lives and what its root namespace is."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from modscaffold.config import ScaffoldConfig

from .errors import ConfigurationError, InvalidName
from .naming import join_namespace, split_segments, studly


class ModuleDescriptor(BaseModel):
    """Resolved location of one module for the duration of an operation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="StudlyCased module name, '/'-separated when nested")
    root_path: Path = Field(..., description="Absolute root directory of the module")
    root_namespace: str = Field(..., description="Root namespace of the module")

    @property
    def segments(self) -> list[str]:
        """Module name split into segments (more than one for nested modules)."""
        return split_segments(self.name)


def describe_module(config: ScaffoldConfig, name: str) -> ModuleDescriptor:
    """Build the ``ModuleDescriptor`` for *name* from the live configuration.

    Each segment of the module name is StudlyCased (``blog`` -> ``Blog``,
    ``shop/catalog`` -> ``Shop/Catalog``).

    Raises:
        InvalidName: If *name* is empty.
        ConfigurationError: If the base namespace is empty.
    """
    segments = [studly(s) for s in split_segments(name)]
    if not segments:
        raise InvalidName(name, "module name is empty")

    base_segments = split_segments(config.base_namespace)
    if not base_segments:
        raise ConfigurationError("Base namespace is not configured")

    root_path = Path(config.base_path).joinpath(*segments).absolute()
    root_namespace = join_namespace(base_segments + segments, config.namespace_separator)
    return ModuleDescriptor(
        name="/".join(segments),
        root_path=root_path,
        root_namespace=root_namespace,
    )
