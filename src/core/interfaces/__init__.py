"""Core interfaces/abstractions.

Why:
- Defines structural contracts (Protocol) that adapters and the CLI satisfy.
- Lets the core depend on abstractions instead of sockets or stdout.
"""
