"""Tests for capability resolution and per-user role management."""

from dataclasses import dataclass

import pytest

from neo_network_roles.bootstrap import NetworkRoles
from neo_network_roles.features.capabilities import ResolvedCapabilities
from neo_network_roles.features.hooks import NetworkRoleEvent


@pytest.fixture
def editor_app(app):
    app.registry.add_role("editor", "Editor", {"a": True, "b": False})
    app.registry.add_role("author", "Author", {"b": True, "c": True})
    return app


class TestResolve:
    """Test cases for CapabilityResolver.resolve."""

    def test_missing_record_resolves_empty(self, resolver):
        resolved = resolver.resolve(42)

        assert resolved == ResolvedCapabilities(user_id=42, network_id=1)
        assert resolved.is_empty
        assert resolver.has_cap(42, "anything") is False

    def test_individual_entries_beat_role_capabilities(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True, "b": True})

        resolved = editor_app.resolver.resolve(5, 1)

        assert resolved.allcaps == {"a": True, "b": True}
        assert resolved.roles == ("editor",)
        assert resolved.caps == {"editor": True, "b": True}

    def test_individual_deny_beats_role_grant(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True, "a": False})

        assert editor_app.resolver.has_cap(5, "a") is False

    def test_later_role_in_record_wins(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"author": True, "editor": True})
        user_meta.set(6, "wp_network_1_capabilities", {"editor": True, "author": True})

        assert editor_app.resolver.resolve(5).allcaps == {"b": False, "c": True, "a": True}
        assert editor_app.resolver.resolve(6).allcaps == {"a": True, "b": True, "c": True}
        assert editor_app.resolver.get_roles(5) == ["author", "editor"]

    def test_removed_role_contributes_nothing(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True, "d": True})
        assert editor_app.resolver.has_cap(5, "a") is True

        editor_app.registry.remove_role("editor")
        resolved = editor_app.resolver.resolve(5)

        assert resolved.roles == ()
        assert resolved.allcaps == {"d": True}
        assert "editor" not in resolved.allcaps

    def test_unknown_keys_are_individual_capabilities(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"never_a_role": True})

        assert editor_app.resolver.resolve(5).allcaps == {"never_a_role": True}

    def test_resolving_other_network_restores_registry(self, app, user_meta):
        with app.registry.tenant_scope(2) as registry:
            registry.add_role("member", "Member", {"read": True})
        user_meta.set(5, "wp_network_2_capabilities", {"member": True})

        resolved = app.resolver.resolve(5, 2)

        assert resolved.network_id == 2
        assert resolved.allcaps == {"read": True}
        assert app.registry.network_id == 1
        assert app.context.network_id == 1

    def test_results_are_cached(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True})

        first = editor_app.resolver.resolve(5)
        second = editor_app.resolver.resolve(5)

        assert first is second
        assert editor_app.cache.get_stats()["hits"] >= 1

    def test_role_changes_invalidate_network_cache(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True})
        assert editor_app.resolver.has_cap(5, "z") is False

        editor_app.registry.add_cap("editor", "z")

        assert editor_app.resolver.has_cap(5, "z") is True

    def test_tenant_switch_invalidates_previous_network(self, editor_app, user_meta):
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True})
        editor_app.resolver.resolve(5)
        assert (5, 1) in editor_app.cache

        editor_app.switch_to(2)

        assert (5, 1) not in editor_app.cache

    def test_pinned_role_changes_invalidate_every_network(self, settings, user_meta, directory):
        settings = settings.model_copy(update={"role_definitions_override": {"member": {}}})
        app = NetworkRoles(settings, user_meta=user_meta, directory=directory)
        user_meta.set(5, "wp_network_2_capabilities", {"member": True})
        assert app.resolver.has_cap(5, "x", 2) is False

        app.registry.add_cap("member", "x")

        assert app.registry.network_id == 1
        assert app.resolver.has_cap(5, "x", 2) is True

        app.registry.remove_cap("member", "x")

        assert app.resolver.has_cap(5, "x", 2) is False

    def test_cached_result_cannot_be_altered(self, resolver):
        resolver.add_cap(5, "read")
        resolved = resolver.resolve(5)

        with pytest.raises(TypeError):
            resolved.allcaps["manage_network"] = True
        with pytest.raises(TypeError):
            resolved.caps["read"] = False
        with pytest.raises(AttributeError):
            resolved.roles.append("administrator")

        assert resolver.has_cap(5, "manage_network") is False
        assert resolver.get_capabilities(5) == {"read": True}

    def test_role_and_capability_getters_return_copies(self, editor_app):
        editor_app.resolver.add_role(5, "editor")

        editor_app.resolver.get_roles(5).append("author")
        editor_app.resolver.get_capabilities(5)["c"] = True

        assert editor_app.resolver.get_roles(5) == ["editor"]
        assert editor_app.resolver.has_cap(5, "c") is False

    def test_custom_result_factory(self, settings, directory):
        @dataclass(frozen=True)
        class AuditedCapabilities(ResolvedCapabilities):
            def has_cap(self, cap):
                return cap == "audit" or super().has_cap(cap)

        app = NetworkRoles(settings, directory=directory, result_factory=AuditedCapabilities)

        resolved = app.resolver.resolve(1)

        assert isinstance(resolved, AuditedCapabilities)
        assert app.resolver.has_cap(1, "audit") is True

    def test_capability_key(self, resolver):
        assert resolver.capability_key() == "wp_network_1_capabilities"
        assert resolver.capability_key(7) == "wp_network_7_capabilities"


class TestRoleMembership:
    """Test cases for per-user role mutations."""

    def test_add_role(self, editor_app, user_meta, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLE_ADDED, handler)

        assert editor_app.resolver.add_role(5, "editor") is True

        assert user_meta.get(5, "wp_network_1_capabilities") == {"editor": True}
        assert editor_app.resolver.has_cap(5, "a") is True
        handler.assert_called_once_with(5, "editor")

    def test_add_empty_role_is_noop(self, resolver, user_meta):
        assert resolver.add_role(5, "") is False
        assert user_meta.get(5, "wp_network_1_capabilities") is None

    def test_add_role_invalidates_cached_result(self, editor_app):
        assert editor_app.resolver.has_cap(5, "a") is False

        editor_app.resolver.add_role(5, "editor")

        assert editor_app.resolver.has_cap(5, "a") is True

    def test_remove_role(self, editor_app, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLE_REMOVED, handler)
        editor_app.resolver.add_role(5, "editor")
        editor_app.resolver.add_cap(5, "x")

        assert editor_app.resolver.remove_role(5, "editor") is True

        assert editor_app.resolver.get_capabilities(5) == {"x": True}
        handler.assert_called_once_with(5, "editor")

    def test_remove_role_user_does_not_have(self, editor_app, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLE_REMOVED, handler)

        assert editor_app.resolver.remove_role(5, "editor") is False
        handler.assert_not_called()

    def test_set_role_replaces_roles_and_keeps_caps(self, editor_app, hooks, mocker, user_meta):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLE_SET, handler)
        user_meta.set(5, "wp_network_1_capabilities", {"editor": True, "x": False, "author": True})

        assert editor_app.resolver.set_role(5, "author") is True

        assert user_meta.get(5, "wp_network_1_capabilities") == {"x": False, "author": True}
        handler.assert_called_once_with(5, "author", ["editor", "author"])

    def test_set_same_single_role_is_noop(self, editor_app, hooks, mocker):
        editor_app.resolver.add_role(5, "editor")
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLE_SET, handler)

        assert editor_app.resolver.set_role(5, "editor") is False
        handler.assert_not_called()

    def test_set_empty_role_clears_roles(self, editor_app):
        editor_app.resolver.add_role(5, "editor")
        editor_app.resolver.add_cap(5, "x")

        editor_app.resolver.set_role(5, "")

        assert editor_app.resolver.get_roles(5) == []
        assert editor_app.resolver.get_capabilities(5) == {"x": True}

    def test_mutations_target_given_network(self, editor_app, user_meta):
        editor_app.resolver.add_role(5, "member", 2)

        assert user_meta.get(5, "wp_network_2_capabilities") == {"member": True}
        assert user_meta.get(5, "wp_network_1_capabilities") is None


class TestIndividualCapabilities:
    """Test cases for individual capability mutations."""

    def test_add_and_remove_cap(self, resolver):
        assert resolver.add_cap(5, "read") is True
        assert resolver.add_cap(5, "write", grant=False) is True
        assert resolver.resolve(5).allcaps == {"read": True, "write": False}

        assert resolver.remove_cap(5, "write") is True
        assert resolver.remove_cap(5, "write") is False
        assert resolver.get_capabilities(5) == {"read": True}

    def test_add_empty_cap_is_noop(self, resolver):
        assert resolver.add_cap(5, "") is False

    def test_remove_all_caps(self, resolver, user_meta):
        resolver.add_cap(5, "read")

        assert resolver.remove_all_caps(5) is True
        assert resolver.remove_all_caps(5) is False
        assert user_meta.get(5, "wp_network_1_capabilities") is None
        assert resolver.resolve(5).is_empty
