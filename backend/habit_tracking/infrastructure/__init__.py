"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Infrastructure depends on core/, never the other way round
    - All database failures mapped to DatabaseError

Design Decisions:
    - Adapters implement core Protocols structurally (no base classes)
"""
