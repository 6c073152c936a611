"""Feature packages for neo-network-roles."""
