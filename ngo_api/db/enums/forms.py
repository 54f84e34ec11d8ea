"""Form-related enums."""

from enum import Enum


class FormSection(str, Enum):
    """Functional area a form template belongs to."""

    PERFIL_COMUNITARIO = "perfil-comunitario"
    ORGANIZACIONES = "organizaciones"
    AUDITORIAS = "auditorias"
    COMUNIDADES = "comunidades"
    VOLUNTARIADO = "voluntariado"
    ABRAZANDO_LEYENDAS = "abrazando-leyendas"

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_


class FormSubmissionStatus(str, Enum):
    """Status of a submitted form response."""

    COMPLETED = "completed"


class QuestionTypeCode(str, Enum):
    """Question type codes understood by the answer validator and renderer."""

    TEXT = "TEXT"
    PARAGRAPH_TEXT = "PARAGRAPH_TEXT"
    NUMBER = "NUMBER"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    URL = "URL"
    DATE = "DATE"
    TIME = "TIME"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    RADIO = "RADIO"
    CHECKBOX = "CHECKBOX"
    LIST = "LIST"
    DROPDOWN = "DROPDOWN"
    DROPDOWN_MULTIPLE = "DROPDOWN_MULTIPLE"
    YES_NO = "YES_NO"
    LINEAR_SCALE = "LINEAR_SCALE"
    RATING = "RATING"
    GRID = "GRID"
    FILE_UPLOAD = "FILE_UPLOAD"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    SECTION_HEADER = "SECTION_HEADER"
    PAGE_BREAK = "PAGE_BREAK"


SINGLE_CHOICE_TYPES = frozenset(
    {
        QuestionTypeCode.MULTIPLE_CHOICE,
        QuestionTypeCode.RADIO,
        QuestionTypeCode.LIST,
        QuestionTypeCode.DROPDOWN,
    }
)
MULTI_CHOICE_TYPES = frozenset(
    {QuestionTypeCode.CHECKBOX, QuestionTypeCode.DROPDOWN_MULTIPLE}
)
# Layout-only types never carry an answer
DISPLAY_ONLY_TYPES = frozenset(
    {
        QuestionTypeCode.SECTION_HEADER,
        QuestionTypeCode.PAGE_BREAK,
        QuestionTypeCode.IMAGE,
        QuestionTypeCode.VIDEO,
    }
)
