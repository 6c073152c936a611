"""One-time setup of network roles and migration of existing users.

Two idempotent steps, both safe to trigger on every request:

- per network, guarded by the ``_migrated`` option: add the built-in roles
  and make the users of the stored ``site_admins`` list administrators;
- once for the whole installation, guarded by ``_user_network_migration_done``
  on the main network: walk the users in batches, giving each of them a
  capability record in every network they belong to. A user is flagged with
  ``_relationship_migrated`` once processed, so interrupted runs resume where
  they stopped.
"""

import logging
from typing import Any, Dict, List, Optional

from ....config.constants import NetworkRoleKeys, OptionKeys, UserMetaKeys, get_default_network_roles
from ....config.settings import NetworkRolesSettings
from ....core.shared import TenantContext
from ...capabilities import CapabilityRecordRepository, CapabilityResolver
from ...hooks import HookPriority, HookRegistry, NetworkRoleEvent
from ...roles import RoleDefaults, RoleRegistry, RoleSet
from ...storage.entities import OptionStore, UserDirectory, UserMetaStore
from ...sync import LegacySuperAdminSync
from ..entities import MigrationBatchResult, MigrationStatus

logger = logging.getLogger(__name__)


class MigrationCoordinator:
    """Drives network setup and the user relationship migration."""

    def __init__(
        self,
        options: OptionStore,
        user_meta: UserMetaStore,
        directory: UserDirectory,
        records: CapabilityRecordRepository,
        registry: RoleRegistry,
        resolver: CapabilityResolver,
        legacy_sync: LegacySuperAdminSync,
        context: TenantContext,
        hooks: HookRegistry,
        settings: NetworkRolesSettings,
    ):
        self._options = options
        self._user_meta = user_meta
        self._directory = directory
        self._records = records
        self._registry = registry
        self._resolver = resolver
        self._legacy_sync = legacy_sync
        self._context = context
        self._hooks = hooks
        self._settings = settings

    def register(self) -> None:
        """Pre-populate the role set of new networks before anything else sees them."""
        self._hooks.add_filter(NetworkRoleEvent.TENANT_CREATED, self.on_tenant_created, HookPriority.EARLY)

    def unregister(self) -> None:
        self._hooks.remove_filter(NetworkRoleEvent.TENANT_CREATED, self.on_tenant_created)

    # State

    def is_done(self) -> bool:
        return bool(self._options.get(self._settings.main_network_id, OptionKeys.USER_NETWORK_MIGRATION_DONE))

    def is_tenant_set_up(self, network_id: Optional[int] = None) -> bool:
        return bool(self._options.get(self._context.resolve(network_id), OptionKeys.MIGRATED))

    def status(self) -> MigrationStatus:
        if self.is_done():
            return MigrationStatus.DONE
        if self._user_meta.find(UserMetaKeys.RELATIONSHIP_MIGRATED):
            return MigrationStatus.IN_PROGRESS
        return MigrationStatus.NOT_STARTED

    def run(self, network_id: Optional[int] = None) -> MigrationStatus:
        """Run both steps for a network (defaults to the current one)."""
        self.maybe_setup_tenant(network_id)
        self.maybe_migrate_users()
        return self.status()

    # Per-network setup

    def maybe_setup_tenant(self, network_id: Optional[int] = None) -> bool:
        """Set up the built-in roles and administrators of a network once.

        Returns:
            True if the setup ran, False if the network was already set up
        """
        network_id = self._context.resolve(network_id)
        if self.is_tenant_set_up(network_id):
            return False

        with self._registry.tenant_scope(network_id) as registry:
            RoleDefaults(registry).populate()

        logins = self._legacy_sync.get_stored_site_admins(network_id, default=list(self._settings.initial_site_admins))
        user_ids = self._directory.get_user_ids_by_logins(logins)
        for user_id in user_ids:
            self._resolver.add_role(user_id, NetworkRoleKeys.ADMINISTRATOR, network_id)

        self._options.set(network_id, OptionKeys.MIGRATED, True)
        logger.info(f"Set up network roles on network {network_id} with {len(user_ids)} administrator(s)")
        return True

    # User relationship migration

    def pending_user_ids(self, limit: Optional[int] = None) -> List[int]:
        """Get the IDs of users not migrated yet, ascending."""
        migrated = self._user_meta.find(UserMetaKeys.RELATIONSHIP_MIGRATED)
        pending = [user_id for user_id in self._directory.get_user_ids() if user_id not in migrated]
        return pending[:limit] if limit is not None else pending

    def maybe_migrate_users(self) -> MigrationBatchResult:
        """Migrate the next batch of users, unless the migration is done."""
        if self.is_done():
            return MigrationBatchResult(status=MigrationStatus.DONE)

        RoleDefaults(self._registry).populate()

        batch_size = self._settings.migration_batch_size
        user_ids = self.pending_user_ids(batch_size)
        legacy_admins: Dict[int, List[str]] = {}
        grants = 0

        for user_id in user_ids:
            login = self._directory.get_username(user_id)
            network_ids = list(dict.fromkeys(self._directory.get_sites_of_user(user_id).values()))

            for network_id in network_ids:
                if network_id not in legacy_admins:
                    with self._legacy_sync.suppressed():
                        legacy_admins[network_id] = self._legacy_sync.get_site_admins(network_id)

                if login and login in legacy_admins[network_id]:
                    self._resolver.set_role(user_id, NetworkRoleKeys.ADMINISTRATOR, network_id)
                    grants += 1
                elif not self._records.exists(user_id, network_id):
                    self._records.save(user_id, network_id, {})

            self._user_meta.set(user_id, UserMetaKeys.RELATIONSHIP_MIGRATED, True)

        if len(user_ids) < batch_size:
            self._options.set(self._settings.main_network_id, OptionKeys.USER_NETWORK_MIGRATION_DONE, True)
            logger.info("User network relationship migration done")
        else:
            logger.info(f"Migrated network relationships of {len(user_ids)} user(s)")

        return MigrationBatchResult(
            processed_user_ids=tuple(user_ids),
            administrator_grants=grants,
            status=self.status(),
        )

    # New networks

    def on_tenant_created(self, options: Dict[str, Any], network_id: int) -> Dict[str, Any]:
        """Add the built-in role set to a new network's initial options."""
        options = dict(options)
        options[OptionKeys.USER_ROLES] = RoleSet.from_definitions(get_default_network_roles()).to_payload()
        logger.debug(f"Pre-populated built-in roles for new network {network_id}")
        return options
