import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from firebase_admin.exceptions import FirebaseError
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from core.dao.locatario_repository import InvalidIdentifier
from core.services.dto.locatario_dto import InvalidPayload, format_errors
from core.services.locatario_service import LocatarioService
from core.utils.auth import verify_access_token
from core.utils.constants import LOCATARIOS_API_PREFIX

locatarios_router = APIRouter(prefix=LOCATARIOS_API_PREFIX, dependencies=[Depends(verify_access_token)])

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "O corpo da requisição deve ser um JSON válido"


def get_locatario_service(request: Request) -> LocatarioService:
    return request.app.state.locatario_service


def _bad_request(msg: str, value=None, param="body") -> JSONResponse:
    return JSONResponse(content={"errors": [{"value": value, "msg": msg, "param": param}]}, status_code=400)


async def _execute(name: str, operation, *args):
    try:
        result = await run_in_threadpool(operation, *args)
        return JSONResponse(content=result, status_code=200)
    except ValidationError as ve:
        logger.warning(f"[{name}] Dados inválidos: {ve.error_count()} erro(s)")
        return JSONResponse(content={"errors": format_errors(ve)}, status_code=400)
    except InvalidIdentifier as ie:
        logger.warning(f"[{name}] {str(ie)}")
        return _bad_request("Identificador inválido", ie.value, ie.param)
    except InvalidPayload as ip:
        logger.warning(f"[{name}] Requisição inválida: {str(ip)}")
        return _bad_request(str(ip))
    except FirebaseError as fe:
        logger.error(f"[{name}] Erro do banco de dados: {fe.code} {str(fe)}")
        return JSONResponse(content={"code": fe.code, "message": str(fe)}, status_code=400)
    except Exception as e:
        logger.exception(f"[{name}]: Erro: {str(e)}")
        return JSONResponse(content={"error": str(e)}, status_code=500)


@locatarios_router.get("/")
async def list_locatarios(service: LocatarioService = Depends(get_locatario_service)):
    logger.debug("[list_locatarios]")
    return await _execute("list_locatarios", service.list_all)


@locatarios_router.get("/idade/{idade}")
async def list_locatarios_by_idade(idade: str, ate: Optional[str] = None,
                                   service: LocatarioService = Depends(get_locatario_service)):
    logger.debug(f"[list_locatarios_by_idade] {idade} -> {ate}")
    return await _execute("list_locatarios_by_idade", service.find_by_idade, idade, ate)


@locatarios_router.get("/id/{locatario_id}")
async def get_locatario(locatario_id: str, service: LocatarioService = Depends(get_locatario_service)):
    logger.debug(f"[get_locatario] {locatario_id}")
    return await _execute("get_locatario", service.find_by_id, locatario_id)


@locatarios_router.get("/nome/{nome}")
async def list_locatarios_by_nome(nome: str, service: LocatarioService = Depends(get_locatario_service)):
    logger.debug(f"[list_locatarios_by_nome] {nome}")
    return await _execute("list_locatarios_by_nome", service.find_by_nome, nome)


@locatarios_router.delete("/{locatario_id}")
async def delete_locatario(locatario_id: str, service: LocatarioService = Depends(get_locatario_service)):
    logger.debug(f"[delete_locatario] {locatario_id}")
    return await _execute("delete_locatario", service.delete, locatario_id)


@locatarios_router.post("/")
async def create_locatario(request: Request, service: LocatarioService = Depends(get_locatario_service)):
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("[create_locatario] Corpo da requisição não é um JSON válido")
        return _bad_request(INVALID_JSON_MESSAGE)
    logger.debug(f"[create_locatario] Payload: {payload}")
    return await _execute("create_locatario", service.create, payload)


@locatarios_router.put("/")
async def update_locatario(request: Request, service: LocatarioService = Depends(get_locatario_service)):
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("[update_locatario] Corpo da requisição não é um JSON válido")
        return _bad_request(INVALID_JSON_MESSAGE)
    logger.debug(f"[update_locatario] Payload: {payload}")
    return await _execute("update_locatario", service.update, payload)
