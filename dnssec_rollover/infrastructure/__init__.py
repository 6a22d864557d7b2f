"""
Infrastructure layer - Adapters for the outside world.

- adapters: PowerDNS HTTP API client, SQL persistence, system clock
- observability: structlog configuration and run correlation
- stubs: in-memory port implementations for tests and local runs
"""
