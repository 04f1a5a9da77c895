"""
Esquemas Pydantic de preguntas. Los campos de texto obligatorios se aceptan
como opcionales aquí para que el servicio responda 400 (y no 422) cuando faltan.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel


class QuestionCreate(BaseModel):
    question: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None


class AnswerIn(BaseModel):
    answer: Optional[str] = None


class VerifyIn(BaseModel):
    password: Optional[str] = None


class QuestionOut(BaseModel):
    id: str
    question: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    status: Literal["pending", "answered"]
    createdAt: str
    answer: Optional[str] = None
    answeredAt: Optional[str] = None


class QuestionCreateResponse(BaseModel):
    id: str
    message: str


class MessageOut(BaseModel):
    message: str


class VerifyOut(BaseModel):
    valid: bool


class ExportOut(BaseModel):
    exportDate: str
    totalQuestions: int
    answeredCount: int
    pendingCount: int
    questions: List[QuestionOut]
