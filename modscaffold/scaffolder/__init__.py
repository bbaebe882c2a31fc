"""modscaffold scaffolder -- resolves, renders and writes module components.

This package takes a ``ScaffoldConfig`` plus a ``(module, kind, name)``
request and writes the rendered stub to the right place inside the module,
recording the outcome in a ``GenerationLedger``.

Quick usage::

    from modscaffold.config import ScaffoldConfig
    from modscaffold.scaffolder import ComponentGenerator

    generator = ComponentGenerator(ScaffoldConfig(base_path="app/Modules"))
    generator.generate("Blog", "controller", "PostController", references={"model": "Post"})
    assert generator.ledger.was_successful()
"""

from modscaffold.scaffolder.discovery import ComponentDiscovery, ModuleInfo, classify_folders, discover_modules
from modscaffold.scaffolder.errors import (
    ConfigurationError,
    InvalidName,
    ScaffoldError,
    StubNotFound,
    UnknownKind,
    WriteFailure,
)
from modscaffold.scaffolder.generator import ComponentGenerator, ModuleGenerator
from modscaffold.scaffolder.kinds import GenerationRequest, KindHooks
from modscaffold.scaffolder.ledger import GenerationLedger, LedgerEntry
from modscaffold.scaffolder.module import ModuleDescriptor, describe_module
from modscaffold.scaffolder.naming import ensure_suffix
from modscaffold.scaffolder.references import ReferenceResolver
from modscaffold.scaffolder.resolver import ComponentKindTemplate, ComponentPathResolver, ResolvedTarget
from modscaffold.scaffolder.templates import StubRenderer

__all__ = [
    "ComponentDiscovery",
    "ComponentGenerator",
    "ComponentKindTemplate",
    "ComponentPathResolver",
    "ConfigurationError",
    "GenerationLedger",
    "GenerationRequest",
    "InvalidName",
    "KindHooks",
    "LedgerEntry",
    "ModuleDescriptor",
    "ModuleGenerator",
    "ModuleInfo",
    "ReferenceResolver",
    "ResolvedTarget",
    "ScaffoldError",
    "StubNotFound",
    "StubRenderer",
    "UnknownKind",
    "WriteFailure",
    "describe_module",
    "classify_folders",
    "discover_modules",
    "ensure_suffix",
]
