import os
import uuid


def get_environment():
    return os.environ.get("RAILWAY_ENVIRONMENT_NAME", "development")


REPLICA_ID = str(uuid.uuid4())[:8]

LOCATARIOS_COLLECTION = "locatarios"
LOCATARIOS_API_PREFIX = "/api/locatarios"

ACCESS_TOKEN_HEADER = "access-token"
TRACE_ID_HEADER = "X-Trace-Id"

DEFAULT_PORT = 5000

REQUIRED_ENV_VARS = [
    'RAILWAY_ENVIRONMENT_NAME',
]

CPF_MIN_LENGTH = 9
CPF_MAX_LENGTH = 12
NOME_MIN_LENGTH = 3
NOME_MAX_LENGTH = 200

RESET = "\033[0m"
COLORS = {
    "DEBUG": "\033[96m",
    "INFO": "\033[97m",
    "WARNING": "\033[93m",
    "ERROR": "\033[91m",
    "CRITICAL": "\033[91m"
}
