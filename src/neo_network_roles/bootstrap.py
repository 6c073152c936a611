"""Wiring of the network roles services.

``NetworkRoles`` builds every service from settings and shares one hook
registry and one tenant context between them. Each instance is independent;
there is no module-level state.

    roles = NetworkRoles(settings, directory=my_directory)
    roles.register_hooks()
    roles.handle_request()
    roles.resolver.has_cap(user_id, "manage_network")
"""

import logging
from typing import Any, Dict, Optional

from redis import Redis

from .config.settings import NetworkRolesSettings, get_settings
from .core.exceptions import ConfigurationError
from .core.shared import TenantContext
from .features.capabilities import (
    CapabilityRecordRepository,
    CapabilityResolver,
    CapabilitySetFactory,
    NetworkUserQuery,
    ResolvedCapabilities,
    RoleResolutionCache,
)
from .features.hooks import HookRegistry, NetworkRoleEvent
from .features.migration import MigrationCoordinator, MigrationStatus
from .features.roles import RoleDefaults, RoleRegistry, RoleSet, RoleSetRepository
from .features.storage import (
    InMemoryOptionStore,
    InMemoryUserDirectory,
    InMemoryUserMetaStore,
    OptionStore,
    RedisOptionStore,
    RedisUserMetaStore,
    UserDirectory,
    UserMetaStore,
)
from .features.sync import LegacySuperAdminSync, MembershipSync

logger = logging.getLogger(__name__)


class NetworkRoles:
    """Facade owning the stores, context, hooks and services of one process."""

    def __init__(
        self,
        settings: Optional[NetworkRolesSettings] = None,
        options: Optional[OptionStore] = None,
        user_meta: Optional[UserMetaStore] = None,
        directory: Optional[UserDirectory] = None,
        hooks: Optional[HookRegistry] = None,
        network_id: Optional[int] = None,
        site_id: Optional[int] = None,
        redis_client: Optional[Redis] = None,
        result_factory: CapabilitySetFactory = ResolvedCapabilities,
    ):
        self.settings = settings or get_settings()
        self.hooks = hooks or HookRegistry()

        # Memory stores built here do not outlive the process
        self.has_durable_storage = self.settings.is_redis_backend or (options is not None and user_meta is not None)
        if options is None or user_meta is None:
            default_options, default_user_meta = self._create_stores(redis_client)
            options = options if options is not None else default_options
            user_meta = user_meta if user_meta is not None else default_user_meta
        self.options = options
        self.user_meta = user_meta
        self.directory = directory if directory is not None else InMemoryUserDirectory()

        self.context = TenantContext(self.hooks, network_id or self.settings.default_network_id, site_id)

        pinned = None
        if self.settings.is_pinned:
            pinned = RoleSet.from_payload(self.settings.role_definitions_override)
        self.registry = RoleRegistry(RoleSetRepository(self.options), self.context, self.hooks, pinned)

        self.records = CapabilityRecordRepository(self.user_meta, self.settings)
        self.cache = RoleResolutionCache()
        self.resolver = CapabilityResolver(
            self.records, self.registry, self.context, self.hooks, self.cache, result_factory
        )
        self.query = NetworkUserQuery(self.records, self.registry, self.context)

        self.legacy_sync = LegacySuperAdminSync(
            self.options, self.directory, self.resolver, self.query, self.context, self.hooks
        )
        self.membership_sync = MembershipSync(self.resolver, self.directory, self.context, self.hooks)
        self.migration = MigrationCoordinator(
            self.options,
            self.user_meta,
            self.directory,
            self.records,
            self.registry,
            self.resolver,
            self.legacy_sync,
            self.context,
            self.hooks,
            self.settings,
        )
        self._hooks_registered = False

        logger.debug(
            f"Network roles initialized on network {self.context.network_id} "
            f"(backend={self.settings.storage_backend.value}, persistent={self.registry.is_persistent})"
        )

    def _create_stores(self, redis_client: Optional[Redis]):
        if not self.settings.is_redis_backend:
            return InMemoryOptionStore(), InMemoryUserMetaStore()

        if redis_client is None:
            if self.settings.redis_url is None:
                raise ConfigurationError(
                    "redis_url is required when storage_backend is 'redis'",
                    details={"setting": "NETWORK_ROLES_REDIS_URL"},
                )
            redis_client = Redis.from_url(str(self.settings.redis_url), decode_responses=True)

        prefix = self.settings.redis_key_prefix
        return RedisOptionStore(redis_client, prefix), RedisUserMetaStore(redis_client, prefix)

    @property
    def defaults(self) -> RoleDefaults:
        return RoleDefaults(self.registry)

    def register_hooks(self) -> None:
        """Subscribe the sync and migration handlers. Calling it again is a no-op."""
        if self._hooks_registered:
            return
        self.migration.register()
        self.legacy_sync.register()
        self.membership_sync.register()
        self._hooks_registered = True

    def handle_request(self, network_id: Optional[int] = None, site_id: Optional[int] = None) -> MigrationStatus:
        """Per-request entry point: select the network and run pending migration steps."""
        if site_id is not None:
            self.context.set_site(site_id)
        if network_id:
            self.switch_to(network_id)
        return self.migration.run()

    def switch_to(self, network_id: int) -> int:
        """Make ``network_id`` the current network. Returns the previous one."""
        return self.context.switch_to(network_id)

    def create_tenant(self, network_id: int, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Store the initial options of a new network after running the creation filters.

        Returns:
            The options as stored
        """
        network_id = int(network_id)
        options = self.hooks.apply_filters(NetworkRoleEvent.TENANT_CREATED, dict(options or {}), network_id)
        for key, value in options.items():
            self.options.set(network_id, key, value)
        logger.info(f"Created network {network_id} with {len(options)} option(s)")
        return options
