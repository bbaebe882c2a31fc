"""Main scaffolding orchestrator.

``ComponentGenerator`` is the engine every per-kind command calls into: it
resolves where a component goes, builds the replacement map (running the
kind's hooks from :mod:`.kinds`), renders the configured stub and records the
outcome in a :class:`GenerationLedger`.

``ModuleGenerator`` creates a brand new module: its folder skeleton plus the
scaffold files (config, service provider, route files).

Both convert engine errors into ledger failures per artifact, so a run that
generates several artifacts always attempts all of them.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from modscaffold.config import ScaffoldConfig

from .discovery import ComponentDiscovery, HostEnumerator
from .errors import ConfigurationError, InvalidName, ScaffoldError, StubNotFound, UnknownKind, WriteFailure
from .kinds import COMPANIONS, GenerationRequest, KindHooks, companion_requests, hooks_for
from .ledger import GenerationLedger, LedgerEntry
from .module import ModuleDescriptor, describe_module
from .naming import join_namespace, snake, split_segments, studly
from .references import ReferenceResolver
from .resolver import ComponentPathResolver, ModuleRef, ResolvedTarget
from .templates import StubRenderer, WriteResult


Confirm = Callable[[str], bool]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Component generator
# ---------------------------------------------------------------------------


class ComponentGenerator:
    """Generates components of any configured kind inside a module.

    Args:
        config: Live configuration; read on every call.
        confirm: Optional yes/no callback.  When a module-local reference
            (e.g. the model of a controller) does not exist yet, the engine
            asks it whether to generate the referenced component first.
        clock: Source of the current time (migration file stamps).
        renderer: Stub renderer; one bound to *config* is created by default.
        ledger: Ledger to record into; a fresh one by default.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        confirm: Optional[Confirm] = None,
        clock: Optional[Clock] = None,
        renderer: Optional[StubRenderer] = None,
        ledger: Optional[GenerationLedger] = None,
    ) -> None:
        self.config = config
        self.paths = ComponentPathResolver(config)
        self.references = ReferenceResolver(self.paths)
        self.discovery = ComponentDiscovery(self.paths)
        self.renderer = renderer or StubRenderer(config)
        self.ledger = ledger if ledger is not None else GenerationLedger()
        self.confirm = confirm
        self.clock = clock or _utcnow

    # -- Caller contract ---------------------------------------------------

    def resolve_path(self, module: ModuleRef, kind: str, name: str) -> ResolvedTarget:
        """Resolve the target file and namespace; raises on invalid input."""
        return self.paths.resolve(module, kind, name)

    def resolve_reference(self, module: ModuleRef, kind: str, name: str) -> str:
        """Qualify a reference to a *kind* component, leaving global ones alone."""
        return self.references.resolve(module, kind, name)

    def list_existing(
        self,
        module: ModuleRef,
        kind: str,
        include_host_wide: bool = False,
        host_enumerator: Optional[HostEnumerator] = None,
    ) -> set[str]:
        """Names of the *kind* components already present in *module*."""
        return self.discovery.list_existing(module, kind, include_host_wide, host_enumerator)

    def available_kinds(self) -> list[str]:
        """Kinds that have both a path and a stub configured."""
        return sorted(kind for kind in self.config.stubs if kind in self.config.paths)

    def generate(
        self,
        module: ModuleRef,
        kind: str,
        name: str,
        replacements: Optional[dict[str, Any]] = None,
        overwrite: bool = False,
        references: Optional[dict[str, str]] = None,
    ) -> LedgerEntry:
        """Generate one component and record the outcome.

        Args:
            module: Module name or descriptor.
            kind: Component kind (``"model"``, ``"controller"``, ...).
            name: Requested component name, optionally nested.
            replacements: Extra stub replacements; they override computed ones.
            overwrite: Replace the file when it already exists.
            references: Short references consumed by the kind's hooks, e.g.
                ``{"model": "Post"}`` for a controller.

        Returns:
            The ledger entry appended for this artifact.  Errors never
            propagate; they become failure entries.
        """
        try:
            result = self._generate(module, kind, name, replacements or {}, overwrite, references or {})
        except ScaffoldError as exc:
            return self.ledger.log_failure(kind, exc.message, error=exc.code)
        except OSError as exc:
            return self.ledger.log_failure(kind, str(exc), error=WriteFailure.code)
        return self.ledger.log_success(kind, result.path, skipped=result.skipped)

    def generate_many(self, module: ModuleRef, requests: Iterable[GenerationRequest]) -> GenerationLedger:
        """Generate every request in order, continuing past failures."""
        for request in requests:
            self.generate(
                module,
                request.kind,
                request.name,
                replacements=request.replacements,
                overwrite=request.overwrite,
                references=request.references,
            )
        return self.ledger

    def generate_with_companions(
        self,
        module: ModuleRef,
        name: str,
        companions: Iterable[str] = COMPANIONS,
        overwrite: bool = False,
        replacements: Optional[dict[str, Any]] = None,
    ) -> GenerationLedger:
        """Generate a model plus the requested companion artifacts.

        Companions are any of ``factory``, ``migration``, ``seeder``,
        ``controller``, ``policy`` and ``requests``.  An unknown companion is
        recorded as a failure and the others are still generated.
        """
        self.generate(module, "model", name, replacements=replacements, overwrite=overwrite)
        for companion in companions:
            try:
                requests = companion_requests(name, companion, overwrite=overwrite)
            except UnknownKind as exc:
                self.ledger.log_failure(companion, exc.message, error=exc.code)
                continue
            self.generate_many(module, requests)
        return self.ledger

    # -- Internals ---------------------------------------------------------

    def _generate(
        self,
        module: ModuleRef,
        kind: str,
        name: str,
        replacements: dict[str, Any],
        overwrite: bool,
        references: dict[str, str],
    ) -> WriteResult:
        descriptor = self.paths.describe(module)
        target = self.paths.resolve(descriptor, kind, name)
        hooks = hooks_for(kind)
        if hooks.file_name is not None:
            target = target.with_file_name(hooks.file_name(target, self.clock()))

        if target.absolute_path.is_file() and not overwrite:
            return WriteResult(path=target.absolute_path, skipped=True)

        stub_id = self.config.stubs.get(kind)
        if not stub_id:
            raise StubNotFound(kind, "no stub configured for this kind")

        context = self.build_replacements(descriptor, target, hooks, references)
        context.update(replacements)
        content = self.renderer.render(stub_id, context)
        return self.renderer.write(target.absolute_path, content, overwrite=overwrite)

    def build_replacements(
        self,
        descriptor: ModuleDescriptor,
        target: ResolvedTarget,
        hooks: Optional[KindHooks] = None,
        references: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Compute the replacement map for *target* before caller overrides."""
        hooks = hooks or hooks_for(target.kind)
        context: dict[str, Any] = {
            "namespace": target.namespace,
            "class": target.final_name,
            "name": target.final_name,
            "rootNamespace": descriptor.root_namespace,
            "module": descriptor.name,
            "module_lower": descriptor.name.lower(),
            "module_snake": snake(descriptor.name),
            "type": target.kind,
            "type_studly": studly(target.kind),
        }
        if hooks.extra_replacements is not None:
            context.update(hooks.extra_replacements(target))

        option = hooks.reference_option
        reference = (references or {}).get(option) if option else None
        if reference and hooks.reference_kind and hooks.reference_replacements is not None:
            qualified = self._resolve_reference(descriptor, hooks.reference_kind, reference)
            context.update(hooks.reference_replacements(qualified))
        return context

    def _resolve_reference(self, descriptor: ModuleDescriptor, kind: str, reference: str) -> str:
        qualified = self.references.resolve(descriptor, kind, reference)
        if self.confirm is None or self.references.is_global(descriptor, reference):
            return qualified

        referenced = self.paths.resolve(descriptor, kind, reference)
        if not referenced.absolute_path.is_file():
            question = f"A {qualified} {kind} does not exist. Do you want to generate it?"
            if self.confirm(question):
                self.generate(descriptor, kind, reference)
        return qualified


# ---------------------------------------------------------------------------
# Module generator
# ---------------------------------------------------------------------------

_MODULE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

ROUTE_STUBS: dict[str, str] = {
    "route_web": "web",
    "route_api": "api",
    "route_console": "console",
}


class ModuleGenerator:
    """Creates a new module: folder skeleton plus scaffold files."""

    def __init__(
        self,
        config: ScaffoldConfig,
        renderer: Optional[StubRenderer] = None,
        ledger: Optional[GenerationLedger] = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or StubRenderer(config)
        self.ledger = ledger if ledger is not None else GenerationLedger()

    # -- Public API --------------------------------------------------------

    def generate_all(self, names: Iterable[str]) -> GenerationLedger:
        """Create every module in *names*; one failing module does not stop the rest."""
        for name in names:
            self.generate(name)
        return self.ledger

    def generate(self, name: str) -> bool:
        """Create one module.

        The name must start with a letter and contain only letters and
        digits; it is StudlyCased before use.

        Returns:
            ``True`` when every folder and scaffold file succeeded.
        """
        if not _MODULE_NAME.match(name):
            error = InvalidName(name, "module name must start with a letter and contain only letters and numbers")
            self.ledger.log_failure("module", error.message, error=error.code)
            return False
        try:
            self.validate_configuration()
            descriptor = describe_module(self.config, studly(name))
        except ScaffoldError as exc:
            self.ledger.log_failure("module", exc.message, error=exc.code)
            return False

        folders_ok = self.create_folders(descriptor)
        files_ok = self.create_scaffold_files(descriptor)
        return folders_ok and files_ok

    def validate_configuration(self) -> None:
        """Raise ``ConfigurationError`` when the base namespace is blank."""
        if not self.config.base_namespace.strip():
            raise ConfigurationError("Base namespace is not configured")

    # -- Folders -----------------------------------------------------------

    def create_folders(self, descriptor: ModuleDescriptor) -> bool:
        """Create ``folders_to_generate`` and ``scaffold`` under the module root."""
        success = True
        for folder in [*self.config.folders_to_generate, *self.config.scaffold]:
            path = descriptor.root_path.joinpath(*split_segments(folder))
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                error = WriteFailure(path, exc)
                self.ledger.log_failure("folder", error.message, error=error.code)
                success = False
            else:
                self.ledger.log_success("folder", path)
        return success

    # -- Scaffold files ----------------------------------------------------

    def create_scaffold_files(self, descriptor: ModuleDescriptor) -> bool:
        """Render every ``stubs_scaffold`` entry; existing files are kept."""
        replacements = self.build_replacements(descriptor)
        success = True
        for stub_type, stub_id in self.config.stubs_scaffold.items():
            try:
                target = self.scaffold_target(descriptor, stub_type)
                result = self.renderer.render_to_file(stub_id, target, replacements)
            except ScaffoldError as exc:
                self.ledger.log_failure(stub_type, exc.message, error=exc.code)
                success = False
            else:
                self.ledger.log_success(stub_type, result.path, skipped=result.skipped)
        return success

    def scaffold_target(self, descriptor: ModuleDescriptor, stub_type: str) -> Path:
        """Output file for a scaffold stub type.

        Raises:
            UnknownKind: If the path key the stub type maps to is not configured.
        """
        if stub_type == "config":
            return self._under(descriptor, "config", "config")
        if stub_type == "service_provider":
            return self._under(descriptor, "provider", self.provider_class_name(descriptor))
        if stub_type in ROUTE_STUBS:
            return self._under(descriptor, "routes", ROUTE_STUBS[stub_type])
        return self._under(descriptor, stub_type, stub_type)

    def provider_class_name(self, descriptor: ModuleDescriptor) -> str:
        return f"{split_segments(descriptor.name)[-1]}ServiceProvider"

    def build_replacements(self, descriptor: ModuleDescriptor) -> dict[str, Any]:
        """Replacement map shared by every scaffold stub of the module."""
        name = split_segments(descriptor.name)[-1]
        provider_dir = self.config.paths.get("provider", "Providers")
        provider_namespace = join_namespace(
            split_segments(descriptor.root_namespace) + split_segments(provider_dir),
            self.config.namespace_separator,
        )
        replacements: dict[str, Any] = {
            "name": name,
            "class": self.provider_class_name(descriptor),
            "class_namespace": provider_namespace,
            "base_namespace": descriptor.root_namespace,
            "scope_namespace": name.lower(),
            "base_path": Path(self.config.base_path).joinpath(*split_segments(descriptor.name)).as_posix(),
        }
        for kind, path in self.config.paths.items():
            replacements[f"{kind}_path"] = path
        return replacements

    def _under(self, descriptor: ModuleDescriptor, path_key: str, file_name: str) -> Path:
        relative = self.config.paths.get(path_key)
        if relative is None:
            raise UnknownKind(path_key)
        return descriptor.root_path.joinpath(*split_segments(relative), file_name + self.config.file_extension)
