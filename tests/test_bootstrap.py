"""Tests for service wiring."""

import fakeredis
import pytest

from neo_network_roles.bootstrap import NetworkRoles
from neo_network_roles.config.constants import StorageBackend
from neo_network_roles.core.exceptions import ConfigurationError
from neo_network_roles.features.hooks import NetworkRoleEvent
from neo_network_roles.features.storage import RedisOptionStore, RedisUserMetaStore


class TestNetworkRoles:
    """Test cases for NetworkRoles."""

    def test_memory_backend_by_default(self, settings):
        app = NetworkRoles(settings)

        assert app.context.network_id == 1
        assert app.registry.is_persistent
        assert app.options.get(1, "user_roles") is None

    def test_redis_backend_requires_url(self, settings):
        settings = settings.model_copy(update={"storage_backend": StorageBackend.REDIS, "redis_url": None})

        with pytest.raises(ConfigurationError):
            NetworkRoles(settings)

    def test_redis_backend_with_client(self, settings, directory):
        settings = settings.model_copy(update={"storage_backend": StorageBackend.REDIS})
        client = fakeredis.FakeRedis(decode_responses=True)

        app = NetworkRoles(settings, directory=directory, redis_client=client)
        app.handle_request()

        assert isinstance(app.options, RedisOptionStore)
        assert isinstance(app.user_meta, RedisUserMetaStore)
        assert app.resolver.has_cap(1, "manage_network")

        reloaded = NetworkRoles(settings, directory=directory, redis_client=client)
        assert reloaded.migration.is_done()
        assert reloaded.registry.get_role_names()["administrator"] == "Network Administrator"

    def test_pinned_override(self, settings):
        settings = settings.model_copy(update={
            "role_definitions_override": {"auditor": {"name": "Auditor", "capabilities": {"view": True}}},
        })

        app = NetworkRoles(settings)

        assert not app.registry.is_persistent
        assert app.registry.get_role_names() == {"auditor": "Auditor"}

    def test_register_hooks_is_idempotent(self, app, hooks):
        app.register_hooks()
        app.register_hooks()

        options = app.create_tenant(5, {"site_admins": ["bob"]})

        assert list(options["user_roles"]) == ["administrator", "member"]
        assert app.records.load(3, 5) == {"administrator": True}

    def test_create_tenant_without_hooks(self, app, options):
        stored = app.create_tenant(6, {"site_name": "Six"})

        assert stored == {"site_name": "Six"}
        assert options.get(6, "site_name") == "Six"

    def test_switch_to(self, app, hooks):
        events = []
        hooks.add_action(NetworkRoleEvent.TENANT_SWITCHED, lambda *args: events.append(args))

        assert app.switch_to(2) == 1
        assert app.registry.network_id == 2
        assert events == [(2, 1)]

    def test_durable_storage(self, settings, options, user_meta):
        redis_settings = settings.model_copy(update={"storage_backend": StorageBackend.REDIS})

        assert NetworkRoles(settings).has_durable_storage is False
        assert NetworkRoles(settings, options=options).has_durable_storage is False
        assert NetworkRoles(settings, options=options, user_meta=user_meta).has_durable_storage is True
        assert NetworkRoles(
            redis_settings, redis_client=fakeredis.FakeRedis(decode_responses=True)
        ).has_durable_storage is True
