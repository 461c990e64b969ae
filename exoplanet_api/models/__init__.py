"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ExoplanetAnalysis is the sole entity

Design Decisions:
    - Models imported here so Base.metadata is populated before create_all runs
"""

from exoplanet_api.models.exoplanet_analysis import ExoplanetAnalysis  # noqa: F401
