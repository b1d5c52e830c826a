import uuid

from core.utils.constants import TRACE_ID_HEADER
from core.utils.logger_config import trace_id_var


def set_trace_id(trace_id=None):
    trace_id = trace_id or str(uuid.uuid4())[:8]
    token = trace_id_var.set(trace_id)
    return token


def reset_trace_id(token=None):
    trace_id_var.reset(token)


async def trace_id_middleware(request, call_next):
    token = set_trace_id(request.headers.get(TRACE_ID_HEADER))
    try:
        response = await call_next(request)
        response.headers[TRACE_ID_HEADER] = trace_id_var.get()
        return response
    finally:
        reset_trace_id(token)
