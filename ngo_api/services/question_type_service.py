"""Question type catalog."""

from sqlalchemy.orm import Session

from ngo_api.db.enums import QuestionTypeCode
from ngo_api.db.models import QuestionType


DEFAULT_QUESTION_TYPES: list[tuple[QuestionTypeCode, str, str]] = [
    (QuestionTypeCode.TEXT, "Texto corto", "Respuesta de una línea"),
    (QuestionTypeCode.PARAGRAPH_TEXT, "Párrafo", "Respuesta larga"),
    (QuestionTypeCode.NUMBER, "Número", "Valor numérico con mínimo y máximo opcionales"),
    (QuestionTypeCode.EMAIL, "Correo electrónico", "Dirección de correo"),
    (QuestionTypeCode.PHONE, "Teléfono", "Número de teléfono"),
    (QuestionTypeCode.URL, "Enlace", "Dirección web"),
    (QuestionTypeCode.DATE, "Fecha", "Fecha (AAAA-MM-DD)"),
    (QuestionTypeCode.TIME, "Hora", "Hora (HH:MM)"),
    (QuestionTypeCode.MULTIPLE_CHOICE, "Opción múltiple", "Una opción de la lista"),
    (QuestionTypeCode.RADIO, "Botones de opción", "Una opción de la lista"),
    (QuestionTypeCode.CHECKBOX, "Casillas", "Varias opciones de la lista"),
    (QuestionTypeCode.LIST, "Lista", "Una opción de la lista"),
    (QuestionTypeCode.DROPDOWN, "Desplegable", "Una opción de la lista"),
    (QuestionTypeCode.DROPDOWN_MULTIPLE, "Desplegable múltiple", "Varias opciones de la lista"),
    (QuestionTypeCode.YES_NO, "Sí / No", "Respuesta booleana"),
    (QuestionTypeCode.LINEAR_SCALE, "Escala lineal", "Valor entero entre mínimo y máximo"),
    (QuestionTypeCode.RATING, "Calificación", "Valor entero de 1 al máximo"),
    (QuestionTypeCode.GRID, "Cuadrícula", "Una opción por fila"),
    (QuestionTypeCode.FILE_UPLOAD, "Archivo", "Referencia a un archivo subido"),
    (QuestionTypeCode.IMAGE, "Imagen", "Elemento visual sin respuesta"),
    (QuestionTypeCode.VIDEO, "Video", "Elemento visual sin respuesta"),
    (QuestionTypeCode.SECTION_HEADER, "Encabezado", "Título de sección sin respuesta"),
    (QuestionTypeCode.PAGE_BREAK, "Salto de página", "Separador sin respuesta"),
]


def list_question_types(db: Session) -> list[QuestionType]:
    return db.query(QuestionType).order_by(QuestionType.name).all()


def get_by_code(db: Session, code: str) -> QuestionType | None:
    return db.query(QuestionType).filter(QuestionType.code == code).first()


def seed_question_types(db: Session) -> int:
    """Insert missing catalog entries. Returns the number created."""
    existing = {code for (code,) in db.query(QuestionType.code).all()}
    created = 0
    for code, name, description in DEFAULT_QUESTION_TYPES:
        if code.value in existing:
            continue
        db.add(QuestionType(code=code.value, name=name, description=description))
        created += 1
    db.commit()
    return created
