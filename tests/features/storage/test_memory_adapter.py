"""Tests for the in-memory storage adapters."""

from neo_network_roles.features.storage import (
    InMemoryOptionStore,
    InMemoryUserDirectory,
    InMemoryUserMetaStore,
)


class TestInMemoryOptionStore:
    """Test cases for InMemoryOptionStore."""

    def test_get_missing_returns_default(self):
        store = InMemoryOptionStore()
        assert store.get(1, "user_roles") is None
        assert store.get(1, "user_roles", {}) == {}

    def test_values_are_scoped_per_network(self):
        store = InMemoryOptionStore()
        store.set(1, "site_admins", ["admin"])
        store.set(2, "site_admins", ["bob"])

        assert store.get(1, "site_admins") == ["admin"]
        assert store.get(2, "site_admins") == ["bob"]
        assert store.scopes() == [1, 2]

    def test_values_are_copied(self):
        store = InMemoryOptionStore()
        value = {"member": {"name": "Network Member", "capabilities": {}}}
        store.set(1, "user_roles", value)

        value["member"]["capabilities"]["x"] = True
        loaded = store.get(1, "user_roles")
        loaded["member"]["name"] = "Changed"

        assert store.get(1, "user_roles") == {"member": {"name": "Network Member", "capabilities": {}}}

    def test_delete(self):
        store = InMemoryOptionStore({(1, "_migrated"): True})

        assert store.delete(1, "_migrated") is True
        assert store.delete(1, "_migrated") is False
        assert store.get(1, "_migrated") is None


class TestInMemoryUserMetaStore:
    """Test cases for InMemoryUserMetaStore."""

    def test_set_get_delete(self):
        store = InMemoryUserMetaStore()
        store.set(5, "wp_network_1_capabilities", {"member": True})

        assert store.get(5, "wp_network_1_capabilities") == {"member": True}
        assert store.delete(5, "wp_network_1_capabilities") is True
        assert store.delete(5, "wp_network_1_capabilities") is False
        assert store.get(5, "wp_network_1_capabilities", {}) == {}

    def test_find_returns_holders_by_ascending_user_id(self):
        store = InMemoryUserMetaStore()
        store.set(9, "_relationship_migrated", True)
        store.set(2, "_relationship_migrated", True)
        store.set(4, "other", True)

        assert store.find("_relationship_migrated") == {2: True, 9: True}


class TestInMemoryUserDirectory:
    """Test cases for InMemoryUserDirectory."""

    def test_lookups(self, directory):
        assert directory.get_username(2) == "alice"
        assert directory.get_username(99) is None
        assert directory.get_user_ids() == [1, 2, 3, 4]
        assert directory.get_user_ids_by_logins(["bob", "admin", "nobody"]) == [1, 3]
        assert directory.get_site_network(3) == 2
        assert directory.get_site_network(42) is None

    def test_sites_of_user_map_to_networks(self, directory):
        assert directory.get_sites_of_user(2) == {1: 1, 3: 2}
        assert directory.get_sites_of_user(99) == {}

    def test_primary_network_follows_first_site(self, directory):
        assert directory.get_primary_network(2) == 1
        assert directory.get_primary_network(3) == 2

        directory.remove_user_from_site(2, 1)
        assert directory.get_primary_network(2) == 2

        directory.remove_user_from_site(2, 3)
        assert directory.get_primary_network(2) is None

    def test_explicit_primary_site(self):
        directory = InMemoryUserDirectory()
        directory.add_site(7, 3)
        directory.add_user(1, "dora", primary_site_id=7)

        assert directory.get_primary_network(1) == 3
