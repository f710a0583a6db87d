"""Habit Tracking Package — habit domain core plus its HTTP and persistence shell.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "0.1.0"
