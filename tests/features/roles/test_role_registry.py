"""Tests for the network role registry."""

import pytest

from neo_network_roles.core.shared import TenantContext
from neo_network_roles.features.hooks import HookRegistry, NetworkRoleEvent
from neo_network_roles.features.roles import Role, RoleRegistry, RoleSet, RoleSetRepository


class TestRoleRegistry:
    """Test cases for RoleRegistry."""

    def test_starts_on_current_network_with_empty_set(self, registry):
        assert registry.network_id == 1
        assert len(registry.roles) == 0
        assert registry.is_persistent is True

    def test_add_role_persists_whole_set(self, registry, options):
        role = registry.add_role("editor", "Network Editor", {"edit": True, "delete": False})

        assert role == Role("editor", "Network Editor", {"edit": True, "delete": False})
        assert options.get(1, "user_roles") == {
            "editor": {"name": "Network Editor", "capabilities": {"edit": True, "delete": False}},
        }

    def test_add_role_is_idempotent(self, registry):
        first = registry.add_role("editor", "Editor", {"a": True})
        second = registry.add_role("editor", "Editor", {"b": True})

        assert first is not None
        assert second is None
        assert registry.get_role_names() == {"editor": "Editor"}
        assert registry.get_role("editor").capabilities == {"a": True}

    def test_add_role_with_empty_key_is_rejected(self, registry):
        assert registry.add_role("", "Nothing") is None
        assert len(registry.roles) == 0

    def test_remove_role(self, registry, options):
        registry.add_role("editor", "Editor")

        assert registry.remove_role("editor") is True
        assert registry.remove_role("editor") is False
        assert not registry.is_role_name("editor")
        assert registry.is_retired_role("editor")
        assert options.get(1, "user_roles") == {}
        assert options.get(1, "retired_user_roles") == ["editor"]

    def test_re_adding_role_clears_retirement(self, registry, options):
        registry.add_role("editor", "Editor")
        registry.remove_role("editor")
        registry.add_role("editor", "Editor")

        assert not registry.is_retired_role("editor")
        assert options.get(1, "retired_user_roles") is None

    def test_add_and_remove_cap(self, registry, options):
        registry.add_role("member", "Member")

        assert registry.add_cap("member", "read") is True
        assert registry.add_cap("member", "write", grant=False) is True
        assert registry.get_role("member").capabilities == {"read": True, "write": False}
        assert options.get(1, "user_roles")["member"]["capabilities"] == {"read": True, "write": False}

        assert registry.remove_cap("member", "write") is True
        assert registry.remove_cap("member", "write") is False
        assert registry.get_role("member").capabilities == {"read": True}

    def test_cap_mutations_on_missing_role_are_noops(self, registry, options):
        assert registry.add_cap("ghost", "read") is False
        assert registry.remove_cap("ghost", "read") is False
        assert registry.add_cap("ghost", "") is False
        assert options.get(1, "user_roles") is None

    def test_roles_data_view(self, registry):
        registry.add_role("member", "Network Member", {"read": True})

        assert registry.roles_data == {"member": {"name": "Network Member", "capabilities": {"read": True}}}
        assert registry.role_names == {"member": "Network Member"}

    def test_mutations_fire_roles_changed(self, registry, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLES_CHANGED, handler)

        registry.add_role("member", "Member")
        registry.add_cap("member", "read")
        registry.remove_role("member")

        assert handler.call_count == 3
        handler.assert_called_with(1)


class TestTenantSwitching:
    """Test cases for per-network role sets."""

    def test_networks_are_isolated(self, registry):
        registry.add_role("member", "Member")
        with registry.tenant_scope(2):
            registry.add_role("member", "Member")

        registry.add_cap("member", "x")
        registry.for_tenant(2)

        assert registry.network_id == 2
        assert registry.get_role("member").capabilities == {}
        registry.for_tenant(1)
        assert registry.get_role("member").capabilities == {"x": True}

    def test_for_tenant_defaults_to_current_network(self, registry):
        registry.for_tenant(2)
        registry.for_tenant()

        assert registry.network_id == 1

    def test_for_tenant_rereads_storage(self, registry, options):
        options.set(1, "user_roles", {"reader": {"name": "Reader", "capabilities": {"read": True}}})

        registry.for_tenant(1)

        assert registry.get_role_names() == {"reader": "Reader"}

    def test_roles_initialized_allows_late_registration(self, app, hooks):
        def add_auditor(registry):
            registry.add_role("auditor", "Network Auditor", {"view_network": True})

        hooks.add_action(NetworkRoleEvent.ROLES_INITIALIZED, add_auditor)
        app.registry.for_tenant(2)

        assert app.registry.get_role("auditor").has_cap("view_network")

    def test_context_switch_reloads_registry(self, app):
        with app.registry.tenant_scope(2) as registry:
            registry.add_role("network-two-only", "Two")

        app.switch_to(2)

        assert app.registry.network_id == 2
        assert app.registry.is_role_name("network-two-only")

    def test_with_tenant_restores_previous_network(self, registry):
        seen = registry.with_tenant(2, lambda: registry.network_id)

        assert seen == 2
        assert registry.network_id == 1

    def test_tenant_scope_restores_on_error(self, registry):
        with pytest.raises(ValueError):
            with registry.tenant_scope(2):
                assert registry.network_id == 2
                raise ValueError("fail inside scope")

        assert registry.network_id == 1

    def test_tenant_scope_on_same_network_does_not_reload(self, registry, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLES_INITIALIZED, handler)

        with registry.tenant_scope(1):
            pass

        handler.assert_not_called()

    def test_tenant_scope_fires_no_tenant_switched(self, registry, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.TENANT_SWITCHED, handler)

        with registry.tenant_scope(2):
            pass

        handler.assert_not_called()


class TestPinnedRegistry:
    """Test cases for registries built from an immutable override."""

    @pytest.fixture
    def pinned(self, options, hooks):
        context = TenantContext(hooks, network_id=1)
        roles = RoleSet([Role("member", "Network Member", {"read": True})])
        return RoleRegistry(RoleSetRepository(options), context, hooks, pinned_roles=roles)

    def test_mutations_stay_in_memory(self, pinned, options):
        assert pinned.is_persistent is False

        pinned.add_role("editor", "Editor")
        pinned.add_cap("member", "write")
        pinned.remove_role("editor")

        assert pinned.get_role("member").capabilities == {"read": True, "write": True}
        assert options.get(1, "user_roles") is None
        assert options.get(1, "retired_user_roles") is None

    def test_mutations_fire_roles_changed_for_every_network(self, pinned, hooks, mocker):
        handler = mocker.Mock()
        hooks.add_action(NetworkRoleEvent.ROLES_CHANGED, handler)

        pinned.add_cap("member", "write")

        handler.assert_called_once_with(None)

    def test_switching_networks_keeps_pinned_roles(self, pinned, options):
        options.set(2, "user_roles", {"other": {"name": "Other", "capabilities": {}}})

        pinned.for_tenant(2)

        assert pinned.network_id == 2
        assert pinned.get_role_names() == {"member": "Network Member"}

    def test_empty_override_is_still_pinned(self, options):
        hooks = HookRegistry()
        registry = RoleRegistry(RoleSetRepository(options), TenantContext(hooks, 1), hooks, pinned_roles=RoleSet())

        registry.add_role("member", "Member")

        assert registry.is_persistent is False
        assert options.get(1, "user_roles") is None
