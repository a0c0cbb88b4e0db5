"""Adapters: concrete I/O (TCP connection, protocol session)."""
