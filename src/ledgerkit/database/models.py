"""SQLAlchemy models for ledgerkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

INVOICE = "invoice"
BILL = "bill"


class Account(Base):
    """Chart of accounts model with hierarchical structure."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    account_number = Column(String, unique=True, nullable=True)
    category = Column(String, nullable=False)
    role = Column(String, default="Other", nullable=False)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    archived = Column(Boolean, default=False, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Single signed posting (debit-positive) against one account."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    description = Column(String, nullable=True)
    entry_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")


class TaxCode(Base):
    """Sales tax / VAT code."""

    __tablename__ = "tax_codes"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    rate = Column(Numeric(9, 6), nullable=False)
    jurisdiction = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Document(Base):
    """Invoice or bill header."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    number = Column(String, nullable=False)
    party_name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("kind", "number", name="uq_document_kind_number"),)

    # Relationships
    lines = relationship(
        "DocumentLine",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentLine.id",
    )


class DocumentLine(Base):
    """Invoice or bill line item."""

    __tablename__ = "document_lines"

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    description = Column(String, nullable=True)
    quantity = Column(Numeric(14, 4), nullable=False)
    unit_price = Column(Numeric(14, 4), nullable=False)
    tax_code_id = Column(Integer, ForeignKey("tax_codes.id"), nullable=True)

    # Relationships
    document = relationship("Document", back_populates="lines")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
