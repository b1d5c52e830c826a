import logging
from typing import Optional

from pydantic_core import PydanticCustomError

from core.dao.locatario_repository import LocatarioRepository, parse_identifier
from core.services.dto.locatario_dto import LocatarioDTO, raise_violations
from core.utils.number_utils import to_number

logger = logging.getLogger(__name__)


def _age_parameter(name: str, value):
    number = to_number(value)
    if number is None:
        raise_violations("LocatarioIdade", [{
            "type": PydanticCustomError("idade_numeric", "A idade deve ser um número"),
            "loc": (name,),
            "input": value,
        }])
    return number


class LocatarioService:

    def __init__(self, repository: LocatarioRepository):
        self.repository = repository

    def list_all(self) -> list:
        return self.repository.find_all()

    def find_by_id(self, locatario_id: str) -> list:
        return self.repository.find_by_id(parse_identifier(locatario_id))

    def find_by_nome(self, nome: str) -> list:
        return self.repository.find_by_nome(nome)

    def find_by_idade(self, idade: str, ate: Optional[str] = None) -> list:
        minimo = _age_parameter("idade", idade)
        maximo = _age_parameter("ate", ate) if ate is not None else None
        return self.repository.find_by_idade(minimo, maximo)

    def create(self, payload) -> dict:
        if isinstance(payload, dict):
            payload = {key: value for key, value in payload.items() if key != "_id"}
        dto = LocatarioDTO.from_payload(payload)
        logger.debug(f"[create] {dto.nome} ({dto.cpf})")
        return self.repository.insert_one(dto.to_document())

    def update(self, payload) -> dict:
        locatario_id = None
        if isinstance(payload, dict):
            payload = dict(payload)
            locatario_id = payload.pop("_id", None)
        dto = LocatarioDTO.from_payload(payload)
        key = parse_identifier(locatario_id, "_id")
        logger.debug(f"[update] {key} -> {dto.nome} ({dto.cpf})")
        return self.repository.update_one(key, dto.to_document())

    def delete(self, locatario_id: str) -> dict:
        return self.repository.delete_one(parse_identifier(locatario_id))
