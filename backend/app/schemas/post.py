from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisStrategy(str, Enum):
    ADVANCED = "advanced"
    BASIC = "basic"


class PostCreate(BaseModel):
    title: str = Field(..., max_length=500)
    body: str
    user_id: int = Field(default=1, ge=1)

    @field_validator("title", "body")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title and body are required")
        return value


class PostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=500)
    body: Optional[str] = None

    @field_validator("title", "body")
    @classmethod
    def _strip_optional(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    username: str
    email: str


class AnalysisOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    word_count: int
    sentiment: float
    sentiment_label: str
    keywords: List[str]
    complexity: float
    reading_time: int
    source: str
    created_at: Optional[datetime] = None


class AnalysisRunResponse(AnalysisOut):
    analysis_time: datetime
    warning: Optional[str] = None


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    external_id: Optional[int] = None
    title: str
    body: str
    user_id: int
    is_local: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    analysis: Optional[AnalysisOut] = None


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_posts: int
    has_next_page: bool
    has_previous_page: bool


class PostListResponse(BaseModel):
    posts: List[PostOut]
    pagination: Pagination


class DeleteResponse(BaseModel):
    message: str


class TextAnalysisRequest(BaseModel):
    text: str
    strategy: AnalysisStrategy = AnalysisStrategy.ADVANCED
    max_keywords: Optional[int] = Field(default=None, ge=0, le=50)


class TextAnalysisResponse(BaseModel):
    word_count: int
    sentiment: float
    sentiment_label: str
    keywords: List[str]
    complexity: float
    reading_time: int
    source: str
