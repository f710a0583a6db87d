"""Service Layer — use cases that orchestrate the core and the repositories.

Invariants:
    - Services never construct domain state by hand; they call core factories
    - Services are async because repositories are; the core they call is not
"""
