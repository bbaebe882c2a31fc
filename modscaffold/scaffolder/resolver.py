"""Component Path Resolver.

Turns ``(module, kind, requested name)`` into the concrete output file and
namespace.  The kind's relative path comes from ``ScaffoldConfig.paths``;
the Duplication Guard in :mod:`.naming` makes sure a name that already
re-embeds the module root or the relative path is not concatenated twice.

Nothing is cached: every call reads the live configuration.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from modscaffold.config import ScaffoldConfig

from .errors import InvalidName, UnknownKind
from .module import ModuleDescriptor, describe_module
from .naming import ensure_suffix, join_namespace, split_segments, strip_overlap, studly


ModuleRef = Union[str, ModuleDescriptor]

_VALID_SEGMENT = re.compile(r"^[A-Za-z0-9_-]+$")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ComponentKindTemplate(BaseModel):
    """Per-kind generation template read from configuration."""

    model_config = ConfigDict(frozen=True)

    kind: str
    relative_path: str = Field(..., description="Path below the module root, '/'-separated")
    suffix: str = Field(default="", description="Suffix enforced when append_suffix is on")
    extension: str = Field(default=".php")
    generates_class: bool = Field(default=True, description="StudlyCase names and enforce the suffix")

    @property
    def relative_segments(self) -> list[str]:
        return split_segments(self.relative_path)


class ResolvedTarget(BaseModel):
    """Where a generated component goes and what it is called."""

    model_config = ConfigDict(frozen=True)

    kind: str
    absolute_path: Path
    namespace: str
    final_name: str
    separator: str = "\\"

    @property
    def qualified_name(self) -> str:
        """Fully-qualified class name, ``namespace + separator + final_name``."""
        return join_namespace([self.namespace, self.final_name], self.separator)

    @property
    def directory(self) -> Path:
        return self.absolute_path.parent

    def with_file_name(self, file_name: str) -> "ResolvedTarget":
        """Return a copy written to *file_name* in the same directory."""
        return self.model_copy(update={"absolute_path": self.absolute_path.parent / file_name})


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class ComponentPathResolver:
    """Resolves paths and namespaces for components inside a module."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self.config = config

    # -- Lookups -----------------------------------------------------------

    def describe(self, module: ModuleRef) -> ModuleDescriptor:
        """Accept a module name or an existing descriptor."""
        if isinstance(module, ModuleDescriptor):
            return module
        return describe_module(self.config, module)

    def kind_template(self, kind: str) -> ComponentKindTemplate:
        """Build the template for *kind* from the live configuration.

        Raises:
            UnknownKind: If ``paths.<kind>`` is not configured.
        """
        relative = self.config.paths.get(kind)
        if relative is None:
            raise UnknownKind(kind)
        return ComponentKindTemplate(
            kind=kind,
            relative_path=relative,
            suffix=self.config.suffixes.get(kind, ""),
            extension=self.config.extension_for(kind),
            generates_class=self.config.generates_class(kind),
        )

    # -- Kind location -----------------------------------------------------

    def kind_segments(self, descriptor: ModuleDescriptor, template: ComponentKindTemplate) -> list[str]:
        """Relative-path segments with any overlap with the module root removed."""
        root = split_segments(descriptor.root_namespace)
        return strip_overlap(root, template.relative_segments)

    def kind_namespace(self, module: ModuleRef, kind: str) -> str:
        """Namespace every component of *kind* in *module* lives under."""
        descriptor = self.describe(module)
        template = self.kind_template(kind)
        segments = split_segments(descriptor.root_namespace) + self.kind_segments(descriptor, template)
        return join_namespace(segments, self.config.namespace_separator)

    def kind_directory(self, module: ModuleRef, kind: str) -> Path:
        """Directory every component of *kind* in *module* is written to."""
        descriptor = self.describe(module)
        template = self.kind_template(kind)
        return descriptor.root_path.joinpath(*self.kind_segments(descriptor, template))

    # -- Resolution --------------------------------------------------------

    def resolve(self, module: ModuleRef, kind: str, name: str) -> ResolvedTarget:
        """Resolve the output file and namespace for one component.

        Args:
            module: Module name or descriptor.
            kind: Component kind, e.g. ``"cast"``.
            name: Requested name, optionally nested (``"Serializers/JsonCast"``)
                or already qualified (``"App\\Modules\\Blog\\...\\JsonCast"``).

        Raises:
            UnknownKind: If the kind has no configured path.
            InvalidName: If the bare name is empty or contains invalid characters.
        """
        template = self.kind_template(kind)
        descriptor = self.describe(module)

        segments = split_segments(name)
        if not segments:
            raise InvalidName(name)
        for segment in segments:
            if not _VALID_SEGMENT.match(segment):
                raise InvalidName(name, f"segment '{segment}' contains invalid characters")

        if template.generates_class:
            segments = [studly(s) for s in segments]
        *prefix, bare = segments
        if not bare:
            raise InvalidName(name)

        root = split_segments(descriptor.root_namespace)
        relative = self.kind_segments(descriptor, template)
        prefix = self._strip_duplicates(root + relative, prefix, len(relative))

        final_name = bare
        if template.generates_class:
            final_name = ensure_suffix(bare, template.suffix, self.config.append_suffix)

        namespace = join_namespace(root + relative + prefix, self.config.namespace_separator)
        path = descriptor.root_path.joinpath(*relative, *prefix, final_name + template.extension)

        return ResolvedTarget(
            kind=kind,
            absolute_path=path,
            namespace=namespace,
            final_name=final_name,
            separator=self.config.namespace_separator,
        )

    @staticmethod
    def _strip_duplicates(anchor: list[str], prefix: list[str], relative_length: int) -> list[str]:
        # A partial overlap shorter than the relative path is a legitimate
        # folder name; only full re-embeddings are removed.
        while True:
            stripped = strip_overlap(anchor, prefix, min_length=relative_length)
            if stripped == prefix:
                return prefix
            prefix = stripped
