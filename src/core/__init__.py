"""Core: domain, configuration, argument resolution and orchestration."""
