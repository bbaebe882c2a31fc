"""modscaffold configuration.

Centralised, typed configuration for the scaffolding engine. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.

A fresh ``ScaffoldConfig`` is built once per invocation and passed to every
component.  Nothing downstream caches values read from it, so mutating an
instance takes effect on the very next resolution call.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Defaults (Clean Architecture module layout)
# ---------------------------------------------------------------------------

DEFAULT_FOLDERS: list[str] = [
    # Application layer
    "Application/Actions",
    "Application/DTOs",
    "Application/Mappers",
    "Application/Interfaces",
    "Application/Services",
    "Application/Validation",
    "Application/Rules",
    # Domain layer
    "Domain/Entities",
    "Domain/Services",
    "Domain/ValueObjects",
    # Infrastructure layer
    "Infrastructure/Mappers",
    "Infrastructure/Models",
    "Infrastructure/Casts",
    "Infrastructure/Persistence",
    "Infrastructure/Services",
    "Infrastructure/Exceptions",
    # Presentation layer
    "Presentation/Mappers",
    "Presentation/Console/Commands",
    "Presentation/Http/Controllers",
    "Presentation/Http/Requests",
    "Presentation/Http/Middlewares",
    "Presentation/Http/Resources",
    "Presentation/Views/Components",
    "Presentation/resources/views",
    # Database layer
    "Database/Factories",
    "Database/Seeders",
    "Database/Migrations",
    "lang",
    "Tests/Unit",
    "Tests/Feature",
]

DEFAULT_SCAFFOLD_FOLDERS: list[str] = ["Providers", "config", "routes"]

DEFAULT_PATHS: dict[str, str] = {
    "provider": "Providers",
    "config": "config",
    "routes": "routes",
    "entity": "Domain/Entities",
    "valueobject": "Domain/ValueObjects",
    "interface": "Application/Interfaces",
    "repository": "Infrastructure/Persistence/Repositories",
    "model": "Infrastructure/Models",
    "scope": "Infrastructure/Models/Scopes",
    "cast": "Infrastructure/Casts",
    "job": "Infrastructure/Jobs",
    "job-middleware": "Infrastructure/Jobs/Middlewares",
    "event": "Infrastructure/Events",
    "listener": "Infrastructure/Listeners",
    "mail": "Infrastructure/Mails",
    "notification": "Infrastructure/Notifications",
    "policy": "Infrastructure/Policies",
    "rule": "Infrastructure/Rules",
    "observer": "Infrastructure/Observers",
    "channel": "Infrastructure/Broadcasting",
    "exception": "Infrastructure/Exceptions",
    "command": "Presentation/Console/Commands",
    "controller": "Presentation/Http/Controllers",
    "request": "Presentation/Http/Requests",
    "middleware": "Presentation/Http/Middlewares",
    "resource": "Presentation/Http/Resources",
    "component": "Presentation/Views/Components",
    "view": "Presentation/resources/views",
    "migration": "Database/Migrations",
    "seeder": "Database/Seeders",
    "factory": "Database/Factories",
    "lang": "lang",
    "unittest": "Tests/Unit",
    "featuretest": "Tests/Feature",
}

DEFAULT_SUFFIXES: dict[str, str] = {
    "model": "Model",
    "controller": "Controller",
    "request": "Request",
    "resource": "Resource",
    "cast": "Cast",
    "factory": "Factory",
    "seeder": "Seeder",
    "migration": "Migration",
    "middleware": "Middleware",
    "command": "Command",
    "job": "Job",
    "event": "Event",
    "listener": "Listener",
    "mail": "Mail",
    "notification": "Notification",
    "policy": "Policy",
    "provider": "Provider",
    "rule": "Rule",
    "observer": "Observer",
    "channel": "Channel",
    "exception": "Exception",
    "entity": "Entity",
    "interface": "Interface",
    "scope": "Scope",
    "component": "Component",
}

DEFAULT_STUBS: dict[str, str] = {
    "provider": "provider.stub",
    "entity": "entity.stub",
    "valueobject": "valueobject.stub",
    "interface": "interface.stub",
    "repository": "repository.stub",
    "model": "model.stub",
    "scope": "scope.stub",
    "cast": "cast.stub",
    "factory": "factory.stub",
    "seeder": "seeder.stub",
    "migration": "migration.stub",
    "middleware": "middleware.stub",
    "command": "command.stub",
    "job": "job.stub",
    "job-middleware": "job.middleware.stub",
    "event": "event.stub",
    "listener": "listener.stub",
    "mail": "mail.stub",
    "notification": "notification.stub",
    "policy": "policy.stub",
    "rule": "rule.stub",
    "observer": "observer.stub",
    "channel": "channel.stub",
    "exception": "exception.stub",
    "controller": "controller.stub",
    "request": "request.stub",
    "resource": "resource.stub",
    "component": "component.stub",
    "unittest": "test.stub",
    "featuretest": "feature-test.stub",
}

DEFAULT_SCAFFOLD_STUBS: dict[str, str] = {
    "config": "scaffold/config.stub",
    "service_provider": "scaffold/service_provider.stub",
    "route_web": "scaffold/route_web.stub",
    "route_api": "scaffold/route_api.stub",
    "route_console": "scaffold/route_console.stub",
}

# Kinds whose output is a plain file rather than a named class: no StudlyCase
# conversion and no suffix enforcement.
DEFAULT_FILE_KINDS: list[str] = ["migration", "view", "lang", "config", "routes"]


# ---------------------------------------------------------------------------
# ScaffoldConfig
# ---------------------------------------------------------------------------


class ScaffoldConfig(BaseModel):
    """Global modscaffold configuration.

    Mirrors the nested key/value surface the engine reads from: the module
    base path and namespace, per-kind relative paths and suffixes, the global
    suffix toggle and the stub identifiers.
    """

    base_path: Path = Field(default=Path("app/Modules"), description="Root directory of all modules")
    base_namespace: str = Field(default="App\\Modules", description="Root namespace of all modules")
    app_namespace: str = Field(
        default="App", description="Namespace of the host application outside any module"
    )
    global_namespaces: list[str] = Field(
        default_factory=lambda: ["Illuminate"],
        description="Namespace prefixes that references are never rewritten into a module",
    )
    namespace_separator: str = Field(default="\\", min_length=1)
    file_extension: str = Field(default=".php")
    extensions: dict[str, str] = Field(
        default_factory=lambda: {"view": ".blade.php"},
        description="Per-kind file extension overrides",
    )

    folders_to_generate: list[str] = Field(default_factory=lambda: list(DEFAULT_FOLDERS))
    scaffold: list[str] = Field(default_factory=lambda: list(DEFAULT_SCAFFOLD_FOLDERS))
    paths: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PATHS))
    file_kinds: list[str] = Field(default_factory=lambda: list(DEFAULT_FILE_KINDS))

    append_suffix: bool = Field(default=False, description="Enforce per-kind suffixes on generated names")
    suffixes: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SUFFIXES))

    stubs: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_STUBS))
    stubs_scaffold: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SCAFFOLD_STUBS))
    stubs_dir: Optional[Path] = Field(
        default=None, description="Directory searched for stub overrides before the packaged stubs"
    )

    # ------------------------------------------------------------------
    # Key/value access
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Read a dotted key such as ``"paths.model"`` or ``"append_suffix"``.

        Returns *default* when any segment along the way is missing.
        """
        head, _, rest = key.partition(".")
        if head not in type(self).model_fields:
            return default
        value: Any = getattr(self, head)
        if not rest:
            return value
        for part in rest.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            elif isinstance(value, BaseModel) and hasattr(value, part):
                value = getattr(value, part)
            else:
                return default
        return value

    def extension_for(self, kind: str) -> str:
        """Return the file extension (with leading dot) used for *kind*."""
        ext = self.extensions.get(kind, self.file_extension)
        if ext and not ext.startswith("."):
            ext = f".{ext}"
        return ext

    def generates_class(self, kind: str) -> bool:
        """Whether *kind* produces a named class (StudlyCase + suffix rules)."""
        return kind not in self.file_kinds

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            MODSCAFFOLD_BASE_PATH, MODSCAFFOLD_BASE_NAMESPACE,
            MODSCAFFOLD_APP_NAMESPACE, MODSCAFFOLD_APPEND_SUFFIX,
            MODSCAFFOLD_STUBS_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MODSCAFFOLD_BASE_PATH"):
            kwargs["base_path"] = Path(os.environ["MODSCAFFOLD_BASE_PATH"])
        if os.environ.get("MODSCAFFOLD_BASE_NAMESPACE"):
            kwargs["base_namespace"] = os.environ["MODSCAFFOLD_BASE_NAMESPACE"]
        if os.environ.get("MODSCAFFOLD_APP_NAMESPACE"):
            kwargs["app_namespace"] = os.environ["MODSCAFFOLD_APP_NAMESPACE"]
        if os.environ.get("MODSCAFFOLD_APPEND_SUFFIX"):
            kwargs["append_suffix"] = os.environ["MODSCAFFOLD_APPEND_SUFFIX"].strip().lower() in (
                "1",
                "true",
                "yes",
                "on",
            )
        if os.environ.get("MODSCAFFOLD_STUBS_DIR"):
            kwargs["stubs_dir"] = Path(os.environ["MODSCAFFOLD_STUBS_DIR"])
        return cls(**kwargs)
