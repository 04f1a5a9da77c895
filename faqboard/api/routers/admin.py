"""
Endpoints de moderación (protegidos por la cabecera `X-Admin-Password`) y export.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from faqboard.api.deps import get_admin_gate, get_question_service, require_admin
from faqboard.api.schemas.question import AnswerIn, MessageOut, QuestionOut, VerifyIn, VerifyOut
from faqboard.core.exceptions import StorageError
from faqboard.core.time import now_utc, to_iso
from faqboard.services import export_service
from faqboard.services.question_service import QuestionService

router = APIRouter(prefix="/admin", tags=["Admin"])

FETCH_ERROR = "Erreur lors de la récupération des questions"
ANSWER_ERROR = "Erreur lors de l'enregistrement de la réponse"
DELETE_ERROR = "Erreur lors de la suppression"
EXPORT_ERROR = "Erreur lors de l'export"
EXPORT_CSV_ERROR = "Erreur lors de l'export CSV"


@router.get(
    "/questions",
    response_model=List[QuestionOut],
    dependencies=[Depends(require_admin)],
    summary="Todas las preguntas (admin)",
)
def admin_list(service: QuestionService = Depends(get_question_service)):
    try:
        return service.full_list()
    except StorageError as e:
        raise StorageError(FETCH_ERROR) from e


@router.get(
    "/questions/{question_id}",
    response_model=QuestionOut,
    dependencies=[Depends(require_admin)],
    summary="Detalle de una pregunta (admin)",
)
def admin_get(question_id: str, service: QuestionService = Depends(get_question_service)):
    try:
        return service.get(question_id)
    except StorageError as e:
        raise StorageError(FETCH_ERROR) from e


@router.put(
    "/questions/{question_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_admin)],
    summary="Responder una pregunta",
)
def admin_answer(
    question_id: str,
    payload: Optional[AnswerIn] = None,
    service: QuestionService = Depends(get_question_service),
) -> MessageOut:
    try:
        service.answer(question_id, payload.answer if payload else None)
    except StorageError as e:
        raise StorageError(ANSWER_ERROR) from e
    return MessageOut(message="Réponse enregistrée avec succès")


@router.delete(
    "/questions/{question_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_admin)],
    summary="Eliminar una pregunta",
)
def admin_delete(question_id: str, service: QuestionService = Depends(get_question_service)) -> MessageOut:
    try:
        service.remove(question_id)
    except StorageError as e:
        raise StorageError(DELETE_ERROR) from e
    return MessageOut(message="Question supprimée")


@router.post("/verify", response_model=VerifyOut, summary="Verificar contraseña de admin")
def admin_verify(request: Request, payload: Optional[VerifyIn] = None):
    if payload and get_admin_gate(request).authorize(payload.password):
        return VerifyOut(valid=True)
    return JSONResponse(status_code=401, content={"valid": False})


def _attachment(ext: str) -> dict:
    filename = export_service.export_filename(ext, now_utc().date())
    return {"Content-Disposition": f"attachment; filename={filename}"}


@router.get("/export", dependencies=[Depends(require_admin)], summary="Exportar (JSON)")
def admin_export_json(service: QuestionService = Depends(get_question_service)):
    try:
        questions = service.full_list()
    except StorageError as e:
        raise StorageError(EXPORT_ERROR) from e
    body = export_service.to_json(questions, exported_at=to_iso(now_utc()))
    return JSONResponse(content=jsonable_encoder(body), headers=_attachment("json"))


@router.get("/export/csv", dependencies=[Depends(require_admin)], summary="Exportar (CSV)")
def admin_export_csv(service: QuestionService = Depends(get_question_service)):
    try:
        questions = service.full_list()
    except StorageError as e:
        raise StorageError(EXPORT_CSV_ERROR) from e
    return Response(
        content=export_service.to_csv(questions),
        media_type="text/csv; charset=utf-8",
        headers=_attachment("csv"),
    )
