import logging
import re

from core.utils.number_utils import to_number

logger = logging.getLogger(__name__)

# Chaves geradas por Reference.push(): 20 caracteres do alfabeto de push ids
PUSH_ID_PATTERN = re.compile(r"^[-0-9A-Za-z_]{20}$")


class InvalidIdentifier(ValueError):
    def __init__(self, value, param="id"):
        self.value = value
        self.param = param
        super().__init__(f"Identificador inválido: {value!r}")


def parse_identifier(value, param="id") -> str:
    if not isinstance(value, str) or not PUSH_ID_PATTERN.match(value):
        raise InvalidIdentifier(value, param)
    return value


def _with_id(key, document) -> dict:
    if not isinstance(document, dict):
        document = {"valor": document}
    return {"_id": key, **document}


def _sort_key(document):
    return str(document.get("nome", ""))


class LocatarioRepository:
    """
    Acesso à coleção de locatários no Realtime Database.

    Recebe a referência do nó da coleção (db.Reference). Leituras retornam
    listas de documentos com o "_id" anexado; escritas retornam o
    reconhecimento da operação (contadores e id inserido).
    """

    def __init__(self, reference):
        self._reference = reference

    def ping(self):
        self._reference.get(shallow=True)
        return True

    def _documents(self) -> list:
        data = self._reference.get() or {}
        if isinstance(data, list):
            # nós com chaves inteiras sequenciais chegam como lista
            data = {str(index): document for index, document in enumerate(data) if document is not None}
        return [_with_id(key, document) for key, document in data.items()]

    def find_all(self) -> list:
        logger.debug("[find_all]")
        return sorted(self._documents(), key=_sort_key)

    def find_by_id(self, key: str) -> list:
        logger.debug(f"[find_by_id] {key}")
        document = self._reference.child(key).get()
        if document is None:
            return []
        return [_with_id(key, document)]

    def find_by_nome(self, termo: str) -> list:
        logger.debug(f"[find_by_nome] {termo}")
        termo = termo.casefold()
        documents = [doc for doc in self._documents() if termo in str(doc.get("nome", "")).casefold()]
        return sorted(documents, key=_sort_key)

    def find_by_idade(self, minimo, maximo=None) -> list:
        logger.debug(f"[find_by_idade] {minimo} < idade < {maximo}")
        documents = []
        for doc in self._documents():
            idade = to_number(doc.get("idade"))
            if idade is None or idade <= minimo:
                continue
            if maximo is not None and idade >= maximo:
                continue
            documents.append(doc)
        return sorted(documents, key=_sort_key)

    def insert_one(self, document: dict) -> dict:
        new_ref = self._reference.push(document)
        logger.info(f"[insert_one] Locatário inserido: {new_ref.key}")
        return {"acknowledged": True, "insertedId": new_ref.key}

    def update_one(self, key: str, fields: dict) -> dict:
        child = self._reference.child(key)
        current = child.get()
        if current is None:
            logger.info(f"[update_one] Nenhum locatário encontrado para {key}")
            return {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0, "upsertedId": None}

        modified = any(current.get(name) != value for name, value in fields.items())
        if modified:
            child.update(fields)
        logger.info(f"[update_one] Locatário {key} atualizado: {modified}")
        return {"acknowledged": True, "matchedCount": 1, "modifiedCount": int(modified), "upsertedId": None}

    def delete_one(self, key: str) -> dict:
        child = self._reference.child(key)
        if child.get(shallow=True) is None:
            logger.info(f"[delete_one] Nenhum locatário encontrado para {key}")
            return {"acknowledged": True, "deletedCount": 0}

        child.delete()
        logger.info(f"[delete_one] Locatário removido: {key}")
        return {"acknowledged": True, "deletedCount": 1}
