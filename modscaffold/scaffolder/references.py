"""Reference Resolver.

Decides whether a secondary component reference (the model a controller
works on, the event a listener handles, ...) must be qualified inside the
current module or is already an absolute/global name that must be left
alone.  Module-local references go through :class:`ComponentPathResolver`
so the same Duplication Guard and suffix rules apply.
"""

from __future__ import annotations

from modscaffold.config import ScaffoldConfig

from .resolver import ComponentPathResolver, ModuleRef
from .naming import split_segments, starts_with_segments


class ReferenceResolver:
    """Qualifies references against a module, short-circuiting global ones."""

    ROOT_MARKER = "\\"

    def __init__(self, paths: ComponentPathResolver) -> None:
        self.paths = paths

    @property
    def config(self) -> ScaffoldConfig:
        return self.paths.config

    def global_prefixes(self, module: ModuleRef) -> list[list[str]]:
        """Namespace prefixes (as segment lists) that mark a reference as global."""
        descriptor = self.paths.describe(module)
        prefixes = [
            split_segments(descriptor.root_namespace),
            split_segments(self.config.app_namespace),
        ]
        prefixes.extend(split_segments(ns) for ns in self.config.global_namespaces)
        return [p for p in prefixes if p]

    def is_global(self, module: ModuleRef, reference: str) -> bool:
        """True when *reference* must not be rewritten into *module*."""
        ref = reference.strip()
        if ref.startswith(self.ROOT_MARKER):
            return True
        segments = split_segments(ref)
        return any(starts_with_segments(segments, prefix) for prefix in self.global_prefixes(module))

    def is_module_local(self, module: ModuleRef, reference: str) -> bool:
        """True when *reference* denotes (or will be qualified into) *module*."""
        descriptor = self.paths.describe(module)
        if not self.is_global(module, reference):
            return True
        segments = split_segments(reference)
        return starts_with_segments(segments, split_segments(descriptor.root_namespace))

    def resolve(self, module: ModuleRef, kind: str, reference: str) -> str:
        """Return the fully-qualified name for *reference*.

        Global references are returned exactly as given, leading marker
        included.  Anything else is resolved as a *kind* component of
        *module*, e.g. ``"PostCreated"`` as an event of ``Blog`` becomes
        ``App\\Modules\\Blog\\Infrastructure\\Events\\PostCreated``.
        """
        if self.is_global(module, reference):
            return reference
        return self.paths.resolve(module, kind, reference).qualified_name
