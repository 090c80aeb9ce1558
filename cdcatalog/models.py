"""Database models."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cdcatalog.database import Base


class CD(Base):
    """CD model; ``version`` is SQLAlchemy's optimistic-locking counter."""

    __tablename__ = "cd"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    catalog_code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    genre: Mapped[str | None] = mapped_column(String(12), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    duration: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    performer: Mapped[str | None] = mapped_column(String(40), nullable=True)
    title: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    tracks: Mapped[list["Track"]] = relationship(
        back_populates="cd", cascade="all, delete-orphan", order_by="Track.id"
    )

    __mapper_args__ = {"version_id_col": version}  # noqa: RUF012

    def __repr__(self) -> str:
        """String representation of CD."""
        return f"<CD(id={self.id}, catalog_code='{self.catalog_code}', title='{self.title}')>"


class Track(Base):
    """Track model, owned by exactly one CD."""

    __tablename__ = "track"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    cd_id: Mapped[int] = mapped_column(
        ForeignKey("cd.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    duration: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)

    cd: Mapped[CD] = relationship(back_populates="tracks")

    def __repr__(self) -> str:
        """String representation of Track."""
        return f"<Track(id={self.id}, title='{self.title}')>"
