# freight_ingest/models.py
"""SQLAlchemy ORM models for persisted entities.

`Location` and `Listing` are written by the ingestion pipeline; `Message` and
`Analysis` hold chat-bot captures and their AI extraction summaries.
"""
from sqlalchemy import (
    Column, Integer, BigInteger, Text, Numeric, Float, Date, TIMESTAMP, ForeignKey, JSON, func, Index,
)
from sqlalchemy.dialects.postgresql import JSONB
from .db import Base
from .utils import new_id

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")

class Location(Base):
    __tablename__ = "locations"
    id = Column(Text, primary_key=True, default=new_id)
    address = Column(Text, nullable=False, unique=True, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    formatted_address = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

class Listing(Base):
    __tablename__ = "listings"
    id = Column(Text, primary_key=True, default=new_id)
    owner_id = Column(Text, nullable=False, index=True)
    weight = Column(Numeric, nullable=False)
    origin_location_id = Column(Text, ForeignKey("locations.id"), nullable=False)
    destination_location_id = Column(Text, ForeignKey("locations.id"), nullable=False)
    phone = Column(Text, nullable=False)
    reference_point = Column(Text)
    material_id = Column(Text, nullable=False)
    presentation_id = Column(Text, nullable=False)
    price = Column(Numeric, nullable=False, default=0)
    paid_by = Column(Text)
    other_paid_by = Column(Text)
    load_date = Column(Date, nullable=False)
    unload_date = Column(Date, nullable=False)
    payment_method_id = Column(Text, nullable=False)
    email = Column(Text)
    equipment_type_id = Column(Text, nullable=False)
    observations = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

Index("idx_listings_material", Listing.material_id)
Index("idx_listings_load_date", Listing.load_date)

class Message(Base):
    __tablename__ = "messages"
    id = Column(Integer, primary_key=True, autoincrement=True)
    telegram_message_id = Column(BigInteger, nullable=False)
    user_id = Column(BigInteger, nullable=False, index=True)
    username = Column(Text)
    first_name = Column(Text)
    last_name = Column(Text)
    text = Column(Text, nullable=False)
    chat_id = Column(BigInteger, nullable=False, index=True)
    chat_type = Column(Text, nullable=False)
    timestamp = Column(TIMESTAMP(timezone=True), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

class Analysis(Base):
    __tablename__ = "analyses"
    id = Column(Integer, primary_key=True, autoincrement=True)
    message_id = Column(Integer, ForeignKey("messages.id"), nullable=False)
    telegram_message_id = Column(BigInteger, nullable=False)
    user_id = Column(BigInteger, nullable=False, index=True)
    original_text = Column(Text, nullable=False)
    sentiment = Column(Text, nullable=False)
    confidence = Column(Float, nullable=False, default=0)
    emotions = Column(JSONList, nullable=False, default=list)
    topics = Column(JSONList, nullable=False, default=list)
    keywords = Column(JSONList, nullable=False, default=list)
    summary = Column(Text)
    category = Column(Text)
    language = Column(Text)
    model_used = Column(Text)
    processing_time = Column(Float)
    analysis_timestamp = Column(TIMESTAMP(timezone=True), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

Index("idx_analyses_timestamp", Analysis.analysis_timestamp)
