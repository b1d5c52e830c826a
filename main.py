import logging
import os
import sys
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from core.controllers.health_controller import health_router
from core.controllers.locatarios_controller import locatarios_router
from core.dao.firebase_client import FirebaseClient, close_firebase, init_firebase
from core.dao.locatario_repository import LocatarioRepository
from core.services.locatario_service import LocatarioService
from core.utils.constants import (DEFAULT_PORT, LOCATARIOS_COLLECTION, REPLICA_ID, REQUIRED_ENV_VARS,
                                  get_environment)
from core.utils.logger_config import setup_logger
from core.utils.trace import trace_id_middleware

load_dotenv(override=True)
setup_logger()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.debug(f"Iniciando instância com REPLICA_ID = {REPLICA_ID}")
    init_firebase()
    repository = LocatarioRepository(FirebaseClient.get_reference(LOCATARIOS_COLLECTION))
    app.state.locatario_service = LocatarioService(repository)
    logger.debug("Firebase inicializado com sucesso.")
    try:
        yield
    finally:
        close_firebase()
        logger.debug("Firebase encerrado.")


app = FastAPI(lifespan=lifespan)

app.middleware("http")(trace_id_middleware)
app.include_router(health_router)
app.include_router(locatarios_router)

if __name__ == "__main__":
    for var in REQUIRED_ENV_VARS:
        if var not in os.environ:
            print(f"[ERRO] Variável de ambiente {var} não encontrada.")
            sys.exit(1)

    port = int(os.environ.get("PORT", DEFAULT_PORT))

    logger.debug(f"Iniciando aplicação em ambiente: {get_environment()}")
    logger.debug(f"Iniciando FastAPI na porta {port}")

    uvicorn.run(
        app=app,
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=True,
        log_config=None
    )
