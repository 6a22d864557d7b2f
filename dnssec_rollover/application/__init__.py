"""
Application layer - Rollover use cases.

This layer orchestrates the domain logic against the outside world:
- ports: abstract interfaces the infrastructure adapters implement
- services: the rollover engine, cleanup sweep and run orchestration

Application code imports from the domain layer and ``dnssec_rollover.config``
only; adapters are injected by the bootstrap wiring.
"""
