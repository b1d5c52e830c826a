import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError

from core.utils.constants import CPF_MAX_LENGTH, CPF_MIN_LENGTH, NOME_MAX_LENGTH, NOME_MIN_LENGTH
from core.utils.number_utils import to_number

CPF_PATTERN = re.compile(r"^[0-9]+$")
# Alfanumérico pt-BR: letras acentuadas permitidas, espaços e pontuação não
NOME_PATTERN = re.compile(r"^[0-9A-ZÃÁÀÂÄÇÉÊËÍÏÕÓÔÖÚÜ]+$", re.IGNORECASE)

TRIMMED_FIELDS = ("cpf", "nome")


class InvalidPayload(ValueError):
    pass


@dataclass(frozen=True)
class Rule:
    field: str
    error_type: str
    message: str
    check: Callable[[Any], bool]

    def violation(self, data: dict):
        value = data.get(self.field)
        if self.check(value):
            return None
        return {
            "type": PydanticCustomError(self.error_type, self.message),
            "loc": (self.field,),
            "input": value,
        }


def _filled(value) -> bool:
    return value not in (None, "")


def _length_between(minimum, maximum):
    return lambda value: minimum <= len(value or "") <= maximum


LOCATARIO_RULES = [
    Rule("cpf", "cpf_required", "É obrigatório informar o CPF", _filled),
    Rule("cpf", "cpf_numeric", "O CPF só deve conter números",
         lambda value: bool(CPF_PATTERN.match(value or ""))),
    Rule("cpf", "cpf_length", f"O CPF deve conter entre {CPF_MIN_LENGTH} e {CPF_MAX_LENGTH} nºs",
         _length_between(CPF_MIN_LENGTH, CPF_MAX_LENGTH)),
    Rule("nome", "nome_required", "É obrigatório informar o primeiro nome", _filled),
    Rule("nome", "nome_alphanumeric",
         "O nome não deve ter caracteres especiais e/ou deve conter somente o primeiro nome",
         lambda value: bool(NOME_PATTERN.match(value or ""))),
    Rule("nome", "nome_too_short", f"O nome é muito curto. Mínimo {NOME_MIN_LENGTH} caracteres",
         _length_between(NOME_MIN_LENGTH, float("inf"))),
    Rule("nome", "nome_too_long", f"O nome é muito longo. Máximo {NOME_MAX_LENGTH}",
         _length_between(0, NOME_MAX_LENGTH)),
    Rule("idade", "idade_numeric", "A idade deve ser um número", lambda value: to_number(value) is not None),
]


def raise_violations(title: str, violations: list):
    if violations:
        raise ValidationError.from_exception_data(title, violations)


def _json_safe(value):
    # NaN/Infinity não são JSON válido
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def format_errors(error: ValidationError) -> list:
    """Converte um ValidationError do pydantic na lista [{value, msg, param}]"""
    return [
        {
            "value": _json_safe(detail.get("input")),
            "msg": detail["msg"],
            "param": ".".join(str(part) for part in detail["loc"]) or "body",
        }
        for detail in error.errors(include_url=False)
    ]


def _as_text(value):
    if value is None:
        return None
    return str(value).strip()


class LocatarioDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    cpf: str
    nome: str
    idade: Union[int, float, str]
    data_nascimento: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload) -> "LocatarioDTO":
        if not isinstance(payload, dict):
            raise InvalidPayload("O corpo da requisição deve ser um objeto JSON")

        data = dict(payload)
        for field in TRIMMED_FIELDS:
            if field in data:
                data[field] = _as_text(data[field])

        violations = [rule.violation(data) for rule in LOCATARIO_RULES]
        raise_violations(cls.__name__, [violation for violation in violations if violation])
        return cls.model_validate(data)

    def to_document(self) -> dict:
        return self.model_dump(exclude_unset=True)
