"""ExoplanetAnalysis ORM — persists one ML-derived exoplanet candidate analysis.

Invariants:
    - id is an autoincrement integer primary key (store-assigned, immutable)
    - probability, the five measurements, classification, confidence_level are non-nullable
    - chart_data is nullable TEXT holding the encoded document verbatim
    - created_at is set once on insert, never updated (no update path exists)

Design Decisions:
    - chart_data as TEXT, not JSON column: the store holds an opaque blob, and a
      corrupted payload must still load so the codec can degrade it to None
    - Labels stored as plain strings: vocabulary enforced in core, not by a DB enum
      (ADR: no migration tooling to evolve a DB-level enum)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Float, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from exoplanet_api.db.base import Base


class ExoplanetAnalysis(Base):
    """Analysis record — append/delete only."""
    __tablename__ = "exoplanet_analysis"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    orbital_period: Mapped[float] = mapped_column(Float, nullable=False)  # days
    transit_duration: Mapped[float] = mapped_column(Float, nullable=False)  # hours
    transit_depth: Mapped[float] = mapped_column(Float, nullable=False)  # percent
    snr: Mapped[float] = mapped_column(Float, nullable=False)
    planet_radius: Mapped[float] = mapped_column(Float, nullable=False)  # Earth radii
    probability: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    accuracy: Mapped[float | None] = mapped_column(Float, nullable=True)
    f1_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    precision: Mapped[float | None] = mapped_column(Float, nullable=True)
    recall: Mapped[float | None] = mapped_column(Float, nullable=True)
    false_positive_rate: Mapped[float | None] = mapped_column(
        Float, nullable=True,
    )
    classification: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True,
    )
    confidence_level: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
    )
    chart_data: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
