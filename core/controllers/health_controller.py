# core/controllers/health_controller.py

import datetime
import logging
import os
import socket

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from core.utils.constants import REPLICA_ID, get_environment

health_router = APIRouter()
logger = logging.getLogger(__name__)


@health_router.get("/health")
async def health_check(request: Request):
    try:
        database_ok = await run_in_threadpool(_check_database_connection, request)
        timestamp = datetime.datetime.now().isoformat()

        response = {
            "status": "ok" if database_ok else "degraded",
            "timestamp": timestamp,
            "environment": get_environment(),
            "version": os.environ.get('APP_VERSION'),
            "hostname": socket.gethostname(),
            "replica_id": REPLICA_ID,
            "dependencies": {
                "firebase": "ok" if database_ok else "error"
            }
        }

        return JSONResponse(content=response, status_code=200 if database_ok else 503)

    except Exception as e:
        logger.exception(f"[health_check] Erro: {str(e)}")
        return JSONResponse(content={
            "status": "error",
            "message": str(e),
            "timestamp": datetime.datetime.now().isoformat()
        }, status_code=503)


def _check_database_connection(request: Request):
    try:
        return request.app.state.locatario_service.repository.ping()
    except Exception as e:
        logger.error(f"Erro ao verificar conexão com Firebase: {str(e)}")
        return False
