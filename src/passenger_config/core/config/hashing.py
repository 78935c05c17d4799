# src/passenger_config/core/config/hashing.py
"""
Hashing canônico de configuração efetiva.

Gera a identidade estrutural de uma configuração resolvida, usada para
registrar nos eventos da carga qual configuração foi produzida e para
verificar que recargas com a mesma entrada produzem o mesmo resultado.

Política de hashing (v1):
    - JSON canônico: chaves ordenadas, separadores compactos, UTF-8
    - conjuntos viram listas ordenadas (a ordem de inserção não conta)
    - enums viram seu valor textual
    - SHA-256, hexdigest de 64 caracteres
"""

import hashlib
import json
from enum import Enum
from typing import Any, Dict


def _canonical(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(_canonical(item) for item in value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Valor não serializável para hashing: {type(value).__name__}")


def canonical_json(config: Dict[str, Any]) -> str:
    """Serializa `config` no formato canônico usado pelo hash."""
    return json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_canonical,
    )


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash determinístico de uma configuração serializada.

    Args:
        config (Dict[str, Any]): Configuração efetiva em forma de dict; pode
            conter conjuntos de URIs e enums sem conversão prévia.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se `config` não for um dicionário ou contiver valores
            sem forma canônica.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()
