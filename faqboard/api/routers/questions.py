"""
Endpoints públicos del tablero: listar preguntas y enviar una nueva.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from faqboard.api.deps import get_question_service
from faqboard.api.schemas.question import QuestionCreate, QuestionCreateResponse, QuestionOut
from faqboard.core.exceptions import StorageError
from faqboard.services.question_service import QuestionService

router = APIRouter(prefix="/questions", tags=["Questions"])

FETCH_ERROR = "Erreur lors de la récupération des questions"
SUBMIT_ERROR = "Erreur lors de la soumission de la question"


@router.get(
    "",
    response_model=List[QuestionOut],
    summary="Preguntas respondidas",
    description="Sólo preguntas `answered`, la respuesta más reciente primero.",
)
def list_answered(service: QuestionService = Depends(get_question_service)):
    try:
        return service.public_list()
    except StorageError as e:
        raise StorageError(FETCH_ERROR) from e


@router.get(
    "/all",
    response_model=List[QuestionOut],
    summary="Todas las preguntas",
    description="Pendientes y respondidas, la más reciente primero (tablero en vivo).",
)
def list_all(service: QuestionService = Depends(get_question_service)):
    try:
        return service.full_list()
    except StorageError as e:
        raise StorageError(FETCH_ERROR) from e


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=QuestionCreateResponse,
    summary="Enviar pregunta",
)
def submit_question(
    payload: Optional[QuestionCreate] = None,
    service: QuestionService = Depends(get_question_service),
) -> QuestionCreateResponse:
    payload = payload or QuestionCreate()
    try:
        question_id = service.submit(payload.question, email=payload.email, name=payload.name)
    except StorageError as e:
        raise StorageError(SUBMIT_ERROR) from e
    return QuestionCreateResponse(id=question_id, message="Question soumise avec succès")
