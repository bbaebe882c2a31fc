"""Per-kind hooks.

Most kinds need nothing beyond the generic generator.  The few that do
(controllers and policies that reference a model, listeners that reference
an event, timestamped migrations, ...) register small hook functions in
``KIND_HOOKS`` instead of specialising a generator class.

Also defines the companion artifacts that can be generated alongside a
model (factory, migration, seeder, controller, policy, form requests).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from .errors import UnknownKind
from .naming import camel, class_basename, pluralize, snake, studly, split_segments
from .resolver import ResolvedTarget


# ---------------------------------------------------------------------------
# Hook container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KindHooks:
    """Optional extension points for one component kind.

    Attributes:
        reference_kind: Kind of the component this kind may reference
            (``"model"`` for a controller).
        reference_key: Key in the caller's ``references`` mapping holding
            the short reference.  Defaults to *reference_kind*.
        reference_replacements: Builds stub replacements from the resolved,
            fully-qualified reference.
        extra_replacements: Builds additional replacements from the target.
        file_name: Rewrites the output file name (receives the target and
            the generator's clock reading).
    """

    reference_kind: Optional[str] = None
    reference_key: Optional[str] = None
    reference_replacements: Optional[Callable[[str], dict[str, str]]] = None
    extra_replacements: Optional[Callable[[ResolvedTarget], dict[str, str]]] = None
    file_name: Optional[Callable[[ResolvedTarget, datetime], str]] = None

    @property
    def reference_option(self) -> Optional[str]:
        return self.reference_key or self.reference_kind


# ---------------------------------------------------------------------------
# Hook functions
# ---------------------------------------------------------------------------


def model_replacements(qualified: str) -> dict[str, str]:
    """``namespacedModel`` / ``model`` / ``modelVariable`` for a model reference."""
    name = class_basename(qualified)
    return {
        "namespacedModel": qualified.strip("\\"),
        "model": name,
        "modelVariable": camel(name),
    }


def event_replacements(qualified: str) -> dict[str, str]:
    """``event`` / ``eventNamespace`` for an event reference."""
    return {
        "event": class_basename(qualified),
        "eventNamespace": qualified.strip("\\"),
    }


def entity_replacements(target: ResolvedTarget) -> dict[str, str]:
    return {
        "entity_id_type": "string|int",
        "entity_variable": camel(target.final_name),
    }


_CREATE_TABLE = re.compile(r"^create_(\w+?)_table$")
_ALTER_TABLE = re.compile(r"^\w+_(?:to|from|in)_(\w+?)(?:_table)?$")


def guess_table(migration_name: str) -> str:
    """Guess the table a migration works on from its name.

    Examples::

        guess_table("create_posts_table")        -> "posts"
        guess_table("add_votes_to_users_table")  -> "users"
        guess_table("tweak_things")              -> ""
    """
    for pattern in (_CREATE_TABLE, _ALTER_TABLE):
        match = pattern.match(migration_name)
        if match:
            return match.group(1)
    return ""


def migration_replacements(target: ResolvedTarget) -> dict[str, str]:
    return {"table": guess_table(target.final_name)}


def migration_file_name(target: ResolvedTarget, now: datetime) -> str:
    """Prefix the migration file with a sortable ``YYYY_MM_DD_HHMMSS_`` stamp."""
    return f"{now:%Y_%m_%d_%H%M%S}_{target.absolute_path.name}"


# ---------------------------------------------------------------------------
# Hook table
# ---------------------------------------------------------------------------

_MODEL_REFERENCE = KindHooks(reference_kind="model", reference_replacements=model_replacements)

KIND_HOOKS: dict[str, KindHooks] = {
    "controller": _MODEL_REFERENCE,
    "policy": _MODEL_REFERENCE,
    "factory": _MODEL_REFERENCE,
    "observer": _MODEL_REFERENCE,
    "listener": KindHooks(reference_kind="event", reference_replacements=event_replacements),
    "entity": KindHooks(extra_replacements=entity_replacements),
    "migration": KindHooks(
        extra_replacements=migration_replacements,
        file_name=migration_file_name,
    ),
}

_NO_HOOKS = KindHooks()


def hooks_for(kind: str) -> KindHooks:
    """Return the hooks registered for *kind* (empty hooks when none are)."""
    return KIND_HOOKS.get(kind, _NO_HOOKS)


# ---------------------------------------------------------------------------
# Generation requests & model companions
# ---------------------------------------------------------------------------


class GenerationRequest(BaseModel):
    """One artifact to generate as part of a multi-artifact run."""

    kind: str
    name: str
    replacements: dict[str, Any] = Field(default_factory=dict)
    references: dict[str, str] = Field(default_factory=dict)
    overwrite: bool = False


COMPANIONS: tuple[str, ...] = ("factory", "migration", "seeder", "controller", "policy", "requests")


def companion_requests(model_name: str, companion: str, overwrite: bool = False) -> list[GenerationRequest]:
    """Requests for one *companion* of the model *model_name*.

    ``"requests"`` expands to the ``Store`` and ``Update`` form requests.

    Raises:
        UnknownKind: If *companion* is not one of ``COMPANIONS``.
    """
    base = studly(class_basename(model_name))
    model_ref = {"model": "/".join(studly(s) for s in split_segments(model_name))}

    if companion == "factory":
        return [GenerationRequest(kind="factory", name=f"{base}Factory", references=model_ref, overwrite=overwrite)]
    if companion == "migration":
        table = snake(pluralize(base))
        return [
            GenerationRequest(
                kind="migration",
                name=f"create_{table}_table",
                replacements={"table": table},
                overwrite=overwrite,
            )
        ]
    if companion == "seeder":
        return [GenerationRequest(kind="seeder", name=f"{base}Seeder", overwrite=overwrite)]
    if companion == "controller":
        return [
            GenerationRequest(kind="controller", name=f"{base}Controller", references=model_ref, overwrite=overwrite)
        ]
    if companion == "policy":
        return [GenerationRequest(kind="policy", name=f"{base}Policy", references=model_ref, overwrite=overwrite)]
    if companion == "requests":
        return [
            GenerationRequest(kind="request", name=f"Store{base}Request", overwrite=overwrite),
            GenerationRequest(kind="request", name=f"Update{base}Request", overwrite=overwrite),
        ]
    raise UnknownKind(companion)
