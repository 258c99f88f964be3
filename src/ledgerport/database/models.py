"""SQLAlchemy models for the ledgerport database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class ImportFormat(Base):
    """Saved mapping configuration model."""

    __tablename__ = "import_formats"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    signature = Column(String, nullable=False, index=True)
    extension = Column(String, nullable=False)
    header_row = Column(Integer, nullable=True)
    data_row = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    column_mappings = relationship(
        "ImportColumnMapping",
        back_populates="format",
        cascade="all, delete-orphan",
        order_by="ImportColumnMapping.column_index",
    )


class ImportColumnMapping(Base):
    """Column assignment of a saved import format."""

    __tablename__ = "import_column_mappings"

    id = Column(Integer, primary_key=True)
    format_id = Column(Integer, ForeignKey("import_formats.id"), nullable=False)
    column_index = Column(Integer, nullable=False)
    header_text = Column(String, nullable=True)
    field_name = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("format_id", "column_index", name="uq_format_column"),
    )

    # Relationships
    format = relationship("ImportFormat", back_populates="column_mappings")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
