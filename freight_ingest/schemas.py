# freight_ingest/schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import date, datetime

class ListingOut(BaseModel):
    id: str
    owner_id: str
    weight: float
    origin_location_id: str
    destination_location_id: str
    phone: str
    reference_point: Optional[str] = None
    material_id: str
    presentation_id: str
    price: float
    paid_by: Optional[str] = None
    other_paid_by: Optional[str] = None
    load_date: date
    unload_date: date
    payment_method_id: str
    email: Optional[str] = None
    equipment_type_id: str
    observations: Optional[str] = None
    created_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class ListingPage(BaseModel):
    total: int
    items: List[ListingOut]

class ChatMessageIn(BaseModel):
    telegram_message_id: int
    user_id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    text: str
    chat_id: int
    chat_type: str
    timestamp: datetime

class ExtractionIn(BaseModel):
    """Listings an AI extractor pulled out of one chat message."""
    cargas: List[Dict[str, Any]] = Field(default_factory=list)
    confidence: Optional[float] = Field(None, ge=0, le=100)
    extraction_success: bool = True
    errors: List[str] = Field(default_factory=list)
    model_used: str = "unknown"
    processing_time: float = 0
    timestamp: Optional[datetime] = None

class ChatCaptureIn(BaseModel):
    message: ChatMessageIn
    extraction: ExtractionIn

class MessageOut(ChatMessageIn):
    id: int
    created_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class AnalysisOut(BaseModel):
    id: int
    message_id: int
    telegram_message_id: int
    user_id: int
    original_text: str
    sentiment: str
    confidence: float
    emotions: List[str]
    topics: List[str]
    keywords: List[str]
    summary: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    model_used: Optional[str] = None
    processing_time: Optional[float] = None
    analysis_timestamp: datetime
    class Config:
        from_attributes = True

class SentimentDistribution(BaseModel):
    positive: int
    negative: int
    neutral: int

class UserStatsOut(BaseModel):
    user_id: int
    username: Optional[str] = None
    total_messages: int
    sentiment_distribution: SentimentDistribution
    top_categories: List[Dict[str, Any]]
    top_emotions: List[Dict[str, Any]]
    avg_confidence: float
    first_message: datetime
    last_message: datetime
