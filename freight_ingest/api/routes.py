# freight_ingest/api/routes.py
from datetime import date, datetime
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, List
from .. import crud, schemas
from ..chat import process_chat_extraction
from ..db import get_db
from ..errors import PersistenceError
from ..geocoding import GoogleGeocoder
from ..services import ingest_batch
from ..utils import logger

router = APIRouter()

def get_geocoder():
    try:
        return GoogleGeocoder()
    except RuntimeError as e:
        logger.error("Geocoder unavailable: %s", e)
        raise HTTPException(status_code=503, detail="Geocoding is not configured")

@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        crud.ping(db)
        database = "ok"
    except SQLAlchemyError as e:
        logger.error("Database connection test failed: %s", e)
        database = "unavailable"
    return {"status": "ok", "database": database}

@router.post("/listings/ingest")
def ingest_listings(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    geocoder=Depends(get_geocoder),
):
    if not isinstance(payload, list):
        raise HTTPException(status_code=400, detail="Body must be a JSON array of listings")
    if not payload:
        raise HTTPException(status_code=400, detail="Body contains no listings")
    return ingest_batch(db, payload, geocoder)

@router.get("/listings", response_model=schemas.ListingPage)
def listings(
    skip: int = 0,
    limit: int = 20,
    material_id: str | None = Query(None),
    presentation_id: str | None = Query(None),
    equipment_type_id: str | None = Query(None),
    owner_id: str | None = Query(None),
    min_weight: float | None = Query(None),
    max_weight: float | None = Query(None),
    load_date_from: date | None = Query(None),
    load_date_to: date | None = Query(None),
    db: Session = Depends(get_db)
):
    filters = {
        "material_id": material_id,
        "presentation_id": presentation_id,
        "equipment_type_id": equipment_type_id,
        "owner_id": owner_id,
        "min_weight": min_weight,
        "max_weight": max_weight,
        "load_date_from": load_date_from,
        "load_date_to": load_date_to,
    }
    return crud.list_listings(db, skip=skip, limit=limit, filters=filters)


@router.get("/listings/{listing_id}", response_model=schemas.ListingOut)
def get_listing(listing_id: str, db: Session = Depends(get_db)):
    obj = crud.get_listing(db, listing_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    return obj


@router.post("/messages")
def capture_message(
    payload: schemas.ChatCaptureIn,
    db: Session = Depends(get_db),
    geocoder=Depends(get_geocoder),
):
    try:
        return process_chat_extraction(db, payload.message, payload.extraction, geocoder)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/messages", response_model=List[schemas.MessageOut])
def messages(
    skip: int = 0,
    limit: int = 50,
    user_id: int | None = Query(None),
    chat_id: int | None = Query(None),
    date_from: datetime | None = Query(None),
    date_to: datetime | None = Query(None),
    db: Session = Depends(get_db)
):
    filters = {"user_id": user_id, "chat_id": chat_id, "date_from": date_from, "date_to": date_to}
    return crud.get_messages(db, skip=skip, limit=limit, filters=filters)


@router.get("/analyses", response_model=List[schemas.AnalysisOut])
def analyses(
    skip: int = 0,
    limit: int = 50,
    user_id: int | None = Query(None),
    sentiment: str | None = Query(None),
    category: str | None = Query(None),
    date_from: datetime | None = Query(None),
    date_to: datetime | None = Query(None),
    db: Session = Depends(get_db)
):
    filters = {
        "user_id": user_id,
        "sentiment": sentiment,
        "category": category,
        "date_from": date_from,
        "date_to": date_to,
    }
    return crud.get_analyses(db, skip=skip, limit=limit, filters=filters)


@router.get("/users/{user_id}/stats", response_model=schemas.UserStatsOut)
def user_stats(user_id: int, db: Session = Depends(get_db)):
    stats = crud.get_user_stats(db, user_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="User has no messages")
    return stats
