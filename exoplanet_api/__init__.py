"""Exoplanet Analysis Package — persistence service for ML exoplanet candidate analyses.

Invariants:
    - Package root holds only the version constant (import side-effects prohibited)

Design Decisions:
    - No star exports: explicit imports only
"""

__version__ = "1.0.0"
