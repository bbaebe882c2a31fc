"""Component and module discovery.

``ComponentDiscovery`` lists the components of one kind that already exist
inside a module (used for interactive selection and validation), optionally
merged with a host-wide listing supplied by the caller.  ``discover_modules``
enumerates the modules present under the configured base path.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from fnmatch import fnmatch
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from modscaffold.config import ScaffoldConfig

from .naming import join_namespace, split_segments
from .resolver import ComponentPathResolver, ModuleRef


DEFAULT_EXCLUDES: tuple[str, ...] = ("Abstract*", "*Trait", "*Interface")

HostEnumerator = Callable[[], Iterable[str]]


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class ComponentDiscovery:
    """Lists existing components of a kind inside a module."""

    def __init__(self, paths: ComponentPathResolver) -> None:
        self.paths = paths

    def list_existing(
        self,
        module: ModuleRef,
        kind: str,
        include_host_wide: bool = False,
        host_enumerator: Optional[HostEnumerator] = None,
        *,
        recursive: bool = False,
        exclude: Iterable[str] = DEFAULT_EXCLUDES,
    ) -> set[str]:
        """Return the names of existing *kind* components in *module*.

        Names have the kind's extension stripped.  With *recursive* the
        whole subtree is scanned and nested names are returned relative to
        the kind directory (``"Sub/Foo"``).  Files whose base name matches one
        of the *exclude* globs are skipped.

        With *include_host_wide* the names produced by *host_enumerator*
        (the host framework's own listing, opaque to the engine) are merged in.
        """
        directory = self.paths.kind_directory(module, kind)
        extension = self.paths.config.extension_for(kind)
        patterns = tuple(exclude)

        names: set[str] = set()
        if directory.is_dir():
            candidates = directory.rglob("*") if recursive else directory.iterdir()
            for file in candidates:
                if not file.is_file() or not file.name.endswith(extension):
                    continue
                base = file.name[: len(file.name) - len(extension)] if extension else file.stem
                if not base or any(fnmatch(base, pattern) for pattern in patterns):
                    continue
                parent = file.parent.relative_to(directory)
                names.add(base if parent == Path(".") else f"{parent.as_posix()}/{base}")

        if include_host_wide and host_enumerator is not None:
            names.update(host_enumerator())
        return names


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------


class ModuleInfo(BaseModel):
    """A module found under the base path."""

    name: str
    path: Path
    provider: str = Field(..., description="Fully-qualified service provider class")
    routes: dict[str, bool] = Field(default_factory=dict, description="route file -> exists")
    folders: list[str] = Field(default_factory=list, description="Configured folders present on disk")
    missing_folders: list[str] = Field(default_factory=list, description="Configured folders not on disk")
    additional_folders: list[str] = Field(
        default_factory=list, description="Top-level folders no configuration entry accounts for"
    )


ROUTE_FILES: tuple[str, ...] = ("web", "api", "console")


def configured_folders(config: ScaffoldConfig) -> list[str]:
    """``scaffold`` followed by ``folders_to_generate``, without duplicates."""
    folders: list[str] = []
    for folder in [*config.scaffold, *config.folders_to_generate]:
        normalised = "/".join(split_segments(folder))
        if normalised and normalised not in folders:
            folders.append(normalised)
    return folders


def classify_folders(config: ScaffoldConfig, module_root: Path) -> dict[str, list[str]]:
    """Compare a module's folders with the configured layout.

    Returns a mapping with three lists:

    - ``existing``: configured folders (``scaffold`` + ``folders_to_generate``)
      that are directories under *module_root*.
    - ``missing``: configured folders that are not.
    - ``additional``: top-level directories of the module that neither a
      configured folder nor a ``paths`` entry starts with, sorted.
    """
    configured = configured_folders(config)
    existing = [f for f in configured if module_root.joinpath(*split_segments(f)).is_dir()]
    missing = [f for f in configured if f not in existing]

    known_roots = {split_segments(f)[0] for f in configured}
    known_roots.update(split_segments(p)[0] for p in config.paths.values() if split_segments(p))
    additional: list[str] = []
    if module_root.is_dir():
        additional = sorted(
            d.name for d in module_root.iterdir() if d.is_dir() and d.name not in known_roots
        )
    return {"existing": existing, "missing": missing, "additional": additional}


def discover_modules(config: ScaffoldConfig) -> list[ModuleInfo]:
    """Return the modules under ``config.base_path``, sorted by name.

    A directory counts as a module when it contains its service provider
    (``<paths.provider>/<Name>ServiceProvider<ext>``).  Each module carries
    its route file flags and the folder audit from :func:`classify_folders`.
    """
    base = Path(config.base_path)
    if not base.is_dir():
        return []

    provider_dir = config.paths.get("provider", "Providers")
    routes_dir = config.paths.get("routes", "routes")
    extension = config.file_extension

    modules: list[ModuleInfo] = []
    for directory in base.iterdir():
        if not directory.is_dir():
            continue
        name = directory.name
        provider_file = directory.joinpath(*split_segments(provider_dir), f"{name}ServiceProvider{extension}")
        if not provider_file.is_file():
            continue
        routes_path = directory.joinpath(*split_segments(routes_dir))
        provider_class = join_namespace(
            split_segments(config.base_namespace) + [name] + split_segments(provider_dir) + [f"{name}ServiceProvider"],
            config.namespace_separator,
        )
        audit = classify_folders(config, directory)
        modules.append(
            ModuleInfo(
                name=name,
                path=directory,
                provider=provider_class,
                routes={route: (routes_path / f"{route}{extension}").is_file() for route in ROUTE_FILES},
                folders=audit["existing"],
                missing_folders=audit["missing"],
                additional_folders=audit["additional"],
            )
        )
    return sorted(modules, key=lambda m: m.name)
