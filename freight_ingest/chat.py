"""Storage of chat captures and their extraction analyses.

A chat capture is one bot message plus the listings an AI extractor found in
it. The message and a summary analysis row are stored first; the extracted
listings then go through the same ingestion path as file input.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud
from .errors import PersistenceError
from .schemas import ChatMessageIn, ExtractionIn
from .services import ingest_batch
from .utils import logger, utcnow
from .validation import packaging_type

ANALYSIS_CATEGORY = "carga_transporte"
ANALYSIS_LANGUAGE = "es"


def build_summary(cargas: List[Dict[str, Any]]) -> str:
    if not cargas:
        return "No se encontraron datos de carga válidos"
    routes = ", ".join(
        f"{c.get('material')} de {c.get('localidadCarga')} a {c.get('localidadDescarga')}" for c in cargas
    )
    return f"Se extrajeron {len(cargas)} carga(s): {routes}"


def _keywords(cargas: List[Dict[str, Any]]) -> List[str]:
    words = []
    for c in cargas:
        for value in (c.get("material"), packaging_type(c), c.get("tipoEquipo"),
                      c.get("localidadCarga"), c.get("localidadDescarga")):
            if value:
                words.append(str(value))
    return words


def save_message(db: Session, message: ChatMessageIn) -> int:
    try:
        obj = crud.create_message(db, message.model_dump())
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error saving message to database: %s", e)
        raise PersistenceError(f"failed to save message: {e}")
    logger.info("Message saved with id %s", obj.id)
    return obj.id


def save_analysis(db: Session, extraction: ExtractionIn, message_id: int, message: ChatMessageIn) -> int:
    cargas = extraction.cargas
    succeeded = extraction.extraction_success
    data = {
        "message_id": message_id,
        "telegram_message_id": message.telegram_message_id,
        "user_id": message.user_id,
        "original_text": message.text,
        "sentiment": "positive" if succeeded else "negative",
        "confidence": extraction.confidence or 0,
        "emotions": ["satisfacción"] if succeeded else ["confusión"],
        "topics": [str(c["material"]) for c in cargas if c.get("material")],
        "keywords": _keywords(cargas),
        "summary": build_summary(cargas),
        "category": ANALYSIS_CATEGORY,
        "language": ANALYSIS_LANGUAGE,
        "model_used": extraction.model_used,
        "processing_time": extraction.processing_time,
        "analysis_timestamp": extraction.timestamp or utcnow(),
    }
    try:
        obj = crud.create_analysis(db, data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error saving analysis to database: %s", e)
        raise PersistenceError(f"failed to save analysis: {e}")
    logger.info("Analysis saved with id %s", obj.id)
    return obj.id


def process_chat_extraction(db: Session, message: ChatMessageIn, extraction: ExtractionIn,
                            geocoder, delay: Optional[float] = None) -> Dict[str, Any]:
    message_id = save_message(db, message)
    analysis_id = save_analysis(db, extraction, message_id, message)

    records = []
    for carga in extraction.cargas:
        record = dict(carga)
        if record.get("confianza") is None and extraction.confidence is not None:
            record["confianza"] = extraction.confidence
        if extraction.errors and not record.get("errores"):
            record["errores"] = list(extraction.errors)
        records.append(record)

    ingestion = ingest_batch(db, records, geocoder, delay=delay)
    return {"message_id": message_id, "analysis_id": analysis_id, "ingestion": ingestion}
