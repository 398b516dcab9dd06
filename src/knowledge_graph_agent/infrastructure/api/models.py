from datetime import datetime

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)
    thread_id: str | None = None


class AskResponse(BaseModel):
    answer: str
    trace: list[str]
    thread_id: str


class ThreadResponse(BaseModel):
    thread_id: str


class MessageView(BaseModel):
    role: str
    content: str
    timestamp: datetime | None = None


class ThreadMessagesResponse(BaseModel):
    thread_id: str
    messages: list[MessageView]
