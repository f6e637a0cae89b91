"""SQLAlchemy models for banksync database."""

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
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Item(Base):
    """Linked item model."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    external_id = Column(String, unique=True, nullable=False)
    institution_name = Column(String, nullable=True)
    access_token = Column(String, nullable=False)
    cursor = Column(String, nullable=True)
    status = Column(String, default="ACTIVE", nullable=False)
    last_synced_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="item", cascade="all, delete-orphan")


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    external_id = Column(String, unique=True, nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    name = Column(String, nullable=False)
    official_name = Column(String, nullable=True)
    mask = Column(String, nullable=True)
    type = Column(String, nullable=True)
    subtype = Column(String, nullable=True)
    currency = Column(String, nullable=True)
    current_balance = Column(Numeric(14, 2), nullable=True)
    available_balance = Column(Numeric(14, 2), nullable=True)
    credit_limit = Column(Numeric(14, 2), nullable=True)
    balance_updated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    item = relationship("Item", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account", cascade="all, delete-orphan")


class Category(Base):
    """Category model with hierarchical structure."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")


class Transaction(Base):
    """Transaction model.

    ``external_id`` is the upsert key used by sync; split children carry a
    synthetic one derived from their parent.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    external_id = Column(String, unique=True, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    authorized_date = Column(Date, nullable=True)
    pending = Column(Boolean, default=False, nullable=False)
    name = Column(String, nullable=False)
    merchant_name = Column(String, nullable=True)
    payment_channel = Column(String, nullable=True)
    pending_transaction_id = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    category_icon_url = Column(String, nullable=True)
    feed_category = Column(String, nullable=True)
    feed_subcategory = Column(String, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    subcategory_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    notes = Column(String, nullable=True)
    parent_transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=True)
    is_split = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", foreign_keys=[category_id])
    subcategory = relationship("Category", foreign_keys=[subcategory_id])
    parent = relationship("Transaction", remote_side=[id], backref="children")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
