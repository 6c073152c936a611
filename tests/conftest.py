"""Pytest configuration and fixtures for neo-network-roles tests."""

import pytest

from neo_network_roles.bootstrap import NetworkRoles
from neo_network_roles.config.settings import NetworkRolesSettings
from neo_network_roles.features.hooks import HookRegistry
from neo_network_roles.features.storage import (
    InMemoryOptionStore,
    InMemoryUserDirectory,
    InMemoryUserMetaStore,
)


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return NetworkRolesSettings(
        _env_file=None,
        main_network_id=1,
        default_network_id=1,
        table_prefix="wp_",
        migration_batch_size=20,
        storage_backend="memory",
        role_definitions_override=None,
        initial_site_admins=["admin"],
    )


@pytest.fixture
def hooks():
    return HookRegistry()


@pytest.fixture
def options():
    return InMemoryOptionStore()


@pytest.fixture
def user_meta():
    return InMemoryUserMetaStore()


@pytest.fixture
def directory():
    """Two networks: sites 1 and 2 in network 1, site 3 in network 2.

    Users:
        1 admin  - site 1
        2 alice  - sites 1 and 3
        3 bob    - site 3
        4 carol  - site 2
    """
    directory = InMemoryUserDirectory()
    directory.add_site(1, 1)
    directory.add_site(2, 1)
    directory.add_site(3, 2)

    directory.add_user(1, "admin")
    directory.add_user(2, "alice")
    directory.add_user(3, "bob")
    directory.add_user(4, "carol")

    directory.add_user_to_site(1, 1)
    directory.add_user_to_site(2, 1)
    directory.add_user_to_site(2, 3)
    directory.add_user_to_site(3, 3)
    directory.add_user_to_site(4, 2)
    return directory


@pytest.fixture
def app(settings, options, user_meta, directory, hooks):
    """Wired services on network 1 with empty stores."""
    return NetworkRoles(
        settings,
        options=options,
        user_meta=user_meta,
        directory=directory,
        hooks=hooks,
        network_id=1,
        site_id=1,
    )


@pytest.fixture
def seeded_app(app):
    """Wired services with the built-in roles on networks 1 and 2 and hooks registered."""
    app.register_hooks()
    app.defaults.populate()
    with app.registry.tenant_scope(2) as registry:
        registry.add_role("administrator", "Network Administrator", {"manage_network": True})
        registry.add_role("member", "Network Member")
    return app


@pytest.fixture
def registry(app):
    return app.registry


@pytest.fixture
def resolver(app):
    return app.resolver
