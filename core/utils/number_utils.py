import math
import re

NUMERIC_PATTERN = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+\Z")
INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+\Z")


def to_number(value):
    """
    Converte um valor numérico (número ou texto) para int/float

    Args:
        value: Valor recebido no corpo ou na rota

    Returns:
        O número correspondente ou None quando o valor não é numérico
        ou não é finito
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str) or not NUMERIC_PATTERN.match(value):
        return None

    if INTEGER_PATTERN.match(value):
        try:
            return int(value)
        except ValueError:
            # acima do limite de dígitos da conversão int/str
            pass
    number = float(value)
    return number if math.isfinite(number) else None
