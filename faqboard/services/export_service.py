"""Exportación del conjunto de preguntas (JSON con metadatos y CSV para hojas de cálculo)."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List

BOM = "\ufeff"
CSV_COLUMNS = ["id", "name", "email", "question", "status", "createdAt", "answer", "answeredAt"]
# Columnas de texto libre: siempre entre comillas
QUOTED_COLUMNS = {"name", "email", "question", "answer"}


def to_json(questions: List[Dict[str, Any]], exported_at: str) -> Dict[str, Any]:
    """Envuelve la lista con fecha de export y conteos (sin volver a consultar)."""
    return {
        "exportDate": exported_at,
        "totalQuestions": len(questions),
        "answeredCount": sum(1 for q in questions if q.get("status") == "answered"),
        "pendingCount": sum(1 for q in questions if q.get("status") == "pending"),
        "questions": questions,
    }


def _quote(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _cell(column: str, value: Any) -> str:
    if column in QUOTED_COLUMNS:
        return _quote(value)
    return "" if value is None else str(value)


def csv_rows(questions: Iterable[Dict[str, Any]]) -> Iterable[str]:
    yield ",".join(CSV_COLUMNS)
    for q in questions:
        yield ",".join(_cell(col, q.get(col)) for col in CSV_COLUMNS)


def to_csv(questions: Iterable[Dict[str, Any]]) -> str:
    """CSV con BOM, una fila por pregunta en el orden recibido."""
    return BOM + "".join(row + "\n" for row in csv_rows(questions))


def export_filename(ext: str, day: date) -> str:
    return f"faq-export-{day.isoformat()}.{ext}"
