import hmac
import logging
import os
from typing import Optional

from fastapi import Header, HTTPException

from core.utils.constants import ACCESS_TOKEN_HEADER

logger = logging.getLogger(__name__)


def verify_access_token(access_token: Optional[str] = Header(default=None, alias=ACCESS_TOKEN_HEADER)):
    expected = os.environ.get("API_ACCESS_TOKEN")
    if not expected:
        return

    if not access_token:
        logger.warning("[verify_access_token] Requisição sem token de acesso")
        raise HTTPException(status_code=401, detail="Token de acesso não informado.")

    if not hmac.compare_digest(access_token.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("[verify_access_token] Token de acesso inválido")
        raise HTTPException(status_code=401, detail="Token de acesso inválido.")
