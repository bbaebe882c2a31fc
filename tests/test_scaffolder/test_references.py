"""Tests for the Reference Resolver."""

from __future__ import annotations

import pytest

from modscaffold.config import ScaffoldConfig
from modscaffold.scaffolder.references import ReferenceResolver
from modscaffold.scaffolder.resolver import ComponentPathResolver


pytestmark = pytest.mark.unit


@pytest.fixture
def references(config: ScaffoldConfig) -> ReferenceResolver:
    return ReferenceResolver(ComponentPathResolver(config))


# ---------------------------------------------------------------------------
# Global references
# ---------------------------------------------------------------------------


class TestGlobalReferences:
    def test_root_marker_returned_unchanged(self, references: ReferenceResolver):
        assert references.resolve("Blog", "event", "\\App\\Events\\GlobalEvent") == "\\App\\Events\\GlobalEvent"

    @pytest.mark.parametrize("module", ["Blog", "Shop", "Shop/Catalog"])
    def test_root_marker_ignores_module(self, references: ReferenceResolver, module: str):
        assert references.resolve(module, "model", "\\Vendor\\Thing") == "\\Vendor\\Thing"

    def test_app_namespace(self, references: ReferenceResolver):
        assert references.resolve("Blog", "model", "App\\Models\\User") == "App\\Models\\User"

    def test_framework_namespace(self, references: ReferenceResolver):
        ref = "Illuminate\\Auth\\Events\\Login"
        assert references.resolve("Blog", "event", ref) == ref

    def test_module_namespace(self, references: ReferenceResolver):
        ref = "App\\Modules\\Blog\\Infrastructure\\Models\\Post"
        assert references.resolve("Blog", "model", ref) == ref

    def test_configured_global_namespace(self, config: ScaffoldConfig, references: ReferenceResolver):
        config.global_namespaces.append("Spatie\\Permission")
        ref = "Spatie\\Permission\\Models\\Role"
        assert references.resolve("Blog", "model", ref) == ref

    def test_is_global(self, references: ReferenceResolver):
        assert references.is_global("Blog", "\\Anything")
        assert references.is_global("Blog", "App\\Models\\User")
        assert not references.is_global("Blog", "PostCreated")


# ---------------------------------------------------------------------------
# Module-local references
# ---------------------------------------------------------------------------


class TestLocalReferences:
    def test_short_event_reference(self, references: ReferenceResolver):
        assert references.resolve("Blog", "event", "PostCreated") == (
            "App\\Modules\\Blog\\Infrastructure\\Events\\PostCreated"
        )

    def test_nested_reference(self, references: ReferenceResolver):
        assert references.resolve("Blog", "model", "Admin/User") == (
            "App\\Modules\\Blog\\Infrastructure\\Models\\Admin\\User"
        )

    def test_prefix_check_is_segment_aware(self, references: ReferenceResolver):
        assert references.resolve("Blog", "event", "Applications\\Submitted") == (
            "App\\Modules\\Blog\\Infrastructure\\Events\\Applications\\Submitted"
        )

    def test_suffix_applies_to_local_references(self, suffix_config: ScaffoldConfig):
        references = ReferenceResolver(ComponentPathResolver(suffix_config))
        assert references.resolve("Blog", "event", "PostCreated").endswith("\\PostCreatedEvent")

    def test_is_module_local(self, references: ReferenceResolver):
        assert references.is_module_local("Blog", "Post")
        assert references.is_module_local("Blog", "App\\Modules\\Blog\\Infrastructure\\Models\\Post")
        assert not references.is_module_local("Blog", "App\\Modules\\Shop\\Infrastructure\\Models\\Product")
        assert not references.is_module_local("Blog", "\\App\\Models\\User")

    def test_no_filesystem_side_effects(self, references: ReferenceResolver, modules_dir):
        references.resolve("Blog", "event", "PostCreated")
        assert list(modules_dir.iterdir()) == []
