"""Protocols for the capabilities feature."""

from typing import Dict, List, Protocol, runtime_checkable

from .resolved import ResolvedCapabilities


@runtime_checkable
class CapabilitySetFactory(Protocol):
    """Builds the object returned by capability resolution.

    Lets deployments substitute their own result type (for example one that
    also answers meta-capability checks) without subclassing the resolver.
    """

    def __call__(
        self,
        *,
        user_id: int,
        network_id: int,
        caps: Dict[str, bool],
        roles: List[str],
        allcaps: Dict[str, bool],
    ) -> ResolvedCapabilities:
        ...
