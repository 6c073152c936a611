"""Core building blocks shared by all neo-network-roles features."""
