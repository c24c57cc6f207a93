# freight_ingest/crud.py
"""Store operations for locations, listings, chat messages and analyses.

Inserts commit immediately and return the new row; queries take optional
filter dicts and skip/limit pagination.
"""
from collections import Counter
from sqlalchemy import and_, text
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from .models import Location, Listing, Message, Analysis

def ping(db: Session) -> bool:
    db.execute(text("SELECT 1"))
    return True

def get_location_by_address(db: Session, address: str) -> Optional[Location]:
    return db.query(Location).filter(Location.address == address).first()

def create_location(db: Session, address: str, latitude: float, longitude: float,
                    formatted_address: Optional[str] = None) -> Location:
    obj = Location(address=address, latitude=latitude, longitude=longitude,
                   formatted_address=formatted_address)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def create_listing(db: Session, listing: Listing) -> Listing:
    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing

def get_listing(db: Session, listing_id: str):
    return db.query(Listing).filter(Listing.id == listing_id).first()

def list_listings(db: Session, skip: int = 0, limit: int = 50, filters: Dict = None):
    q = db.query(Listing)
    if filters:
        conds = []
        for key in ("material_id", "presentation_id", "equipment_type_id", "owner_id"):
            if filters.get(key):
                conds.append(getattr(Listing, key) == filters[key])
        if filters.get("min_weight") is not None:
            conds.append(Listing.weight >= filters["min_weight"])
        if filters.get("max_weight") is not None:
            conds.append(Listing.weight <= filters["max_weight"])
        if filters.get("load_date_from") is not None:
            conds.append(Listing.load_date >= filters["load_date_from"])
        if filters.get("load_date_to") is not None:
            conds.append(Listing.load_date <= filters["load_date_to"])
        if conds:
            q = q.filter(and_(*conds))
    total = q.count()
    items = q.order_by(Listing.created_at.desc(), Listing.id).offset(skip).limit(limit).all()
    return {"total": total, "items": items}

def create_message(db: Session, data: Dict[str, Any]) -> Message:
    obj = Message(**data)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def create_analysis(db: Session, data: Dict[str, Any]) -> Analysis:
    obj = Analysis(**data)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def get_messages(db: Session, skip: int = 0, limit: Optional[int] = None, filters: Dict = None):
    q = db.query(Message)
    if filters:
        if filters.get("user_id") is not None:
            q = q.filter(Message.user_id == filters["user_id"])
        if filters.get("chat_id") is not None:
            q = q.filter(Message.chat_id == filters["chat_id"])
        if filters.get("date_from") is not None:
            q = q.filter(Message.timestamp >= filters["date_from"])
        if filters.get("date_to") is not None:
            q = q.filter(Message.timestamp <= filters["date_to"])
    q = q.order_by(Message.timestamp.desc(), Message.id.desc()).offset(skip)
    if limit:
        q = q.limit(limit)
    return q.all()

def get_analyses(db: Session, skip: int = 0, limit: Optional[int] = None, filters: Dict = None):
    q = db.query(Analysis)
    if filters:
        for key in ("user_id", "sentiment", "category"):
            if filters.get(key) is not None:
                q = q.filter(getattr(Analysis, key) == filters[key])
        if filters.get("date_from") is not None:
            q = q.filter(Analysis.analysis_timestamp >= filters["date_from"])
        if filters.get("date_to") is not None:
            q = q.filter(Analysis.analysis_timestamp <= filters["date_to"])
    q = q.order_by(Analysis.analysis_timestamp.desc(), Analysis.id.desc()).offset(skip)
    if limit:
        q = q.limit(limit)
    return q.all()

def get_user_stats(db: Session, user_id: int) -> Optional[Dict[str, Any]]:
    """Aggregate one user's messages and analyses; None if the user never wrote."""
    messages = get_messages(db, filters={"user_id": user_id})
    if not messages:
        return None
    analyses = get_analyses(db, filters={"user_id": user_id})

    sentiments = Counter(a.sentiment for a in analyses)
    categories = Counter(a.category for a in analyses)
    emotions = Counter(e for a in analyses for e in (a.emotions or []))
    avg_confidence = sum(a.confidence for a in analyses) / len(analyses) if analyses else 0.0

    # messages come newest first
    return {
        "user_id": user_id,
        "username": messages[0].username,
        "total_messages": len(messages),
        "sentiment_distribution": {
            "positive": sentiments.get("positive", 0),
            "negative": sentiments.get("negative", 0),
            "neutral": sentiments.get("neutral", 0),
        },
        "top_categories": [{"category": c, "count": n} for c, n in categories.most_common(5)],
        "top_emotions": [{"emotion": e, "count": n} for e, n in emotions.most_common(5)],
        "avg_confidence": avg_confidence,
        "first_message": messages[-1].timestamp,
        "last_message": messages[0].timestamp,
    }
