# firebase_client.py
import base64
import json
import logging
import os

import firebase_admin
from firebase_admin import credentials, db

from core.utils.constants import get_environment

logger = logging.getLogger(__name__)
_firebase_instances = {}


def init_firebase():
    """Inicializa a conexão com o Firebase para o ambiente corrente"""
    environment_name = get_environment()

    if environment_name in _firebase_instances:
        return _firebase_instances[environment_name]

    logger.info(f"Inicializando Firebase para ambiente: {environment_name}")

    try:
        if environment_name == 'production':
            firebase_creds_b64 = os.environ.get('FIREBASE_CREDENTIALS')
            db_url = os.environ.get('FIREBASE_URL')
        else:
            firebase_creds_b64 = os.environ.get('FIREBASE_CREDENTIALS_HOMOLOG')
            db_url = os.environ.get('FIREBASE_URL_HOMOLOG')

        if not firebase_creds_b64 or not db_url:
            raise ValueError("Credenciais ou URL do Firebase não encontradas nas variáveis de ambiente")

        cred_json = decode_base64_credentials(firebase_creds_b64)
        cred = credentials.Certificate(cred_json)
        firebase_app = firebase_admin.initialize_app(cred, {'databaseURL': db_url}, name=environment_name)
        _firebase_instances[environment_name] = firebase_app
        return firebase_app
    except Exception as e:
        logger.error(f"Erro ao inicializar Firebase: {str(e)}")
        raise


def close_firebase():
    """Encerra as conexões abertas por init_firebase"""
    for environment_name, firebase_app in list(_firebase_instances.items()):
        logger.info(f"Encerrando Firebase do ambiente: {environment_name}")
        firebase_admin.delete_app(firebase_app)
        del _firebase_instances[environment_name]


def decode_base64_credentials(base64_str):
    try:
        decoded_str = base64.b64decode(base64_str.encode('utf-8')).decode('utf-8')
        return json.loads(decoded_str)
    except Exception as e:
        logger.error(f"Erro ao decodificar credenciais Base64: {str(e)}")
        raise ValueError(f"Erro ao decodificar credenciais em Base64: {str(e)}")


class FirebaseClient:
    @staticmethod
    def _get_app():
        environment = get_environment()
        if environment not in _firebase_instances:
            return init_firebase()
        return _firebase_instances[environment]

    @staticmethod
    def get_reference(path):
        app = FirebaseClient._get_app()
        return db.reference(path, app=app)
