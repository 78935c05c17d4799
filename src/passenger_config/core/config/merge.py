# src/passenger_config/core/config/merge.py
"""
Deep-merge de documentos de host.

Este módulo combina um documento de host base (defaults) com um documento
local de overrides antes que suas diretivas sejam aplicadas.

Política de merge (v1):
    - dict → merge recursivo por chave (ex.: `locations` por caminho)
    - `virtual_hosts` → merge por nome do bloco; blocos novos vão ao final
    - demais listas → sobrescrita total (uma lista de diretivas substitui a
      anterior, pois a ordem e a multiplicidade das diretivas importam)
    - escalar → sobrescrita direta, inclusive entre tipos escalares distintos
      (YAML entrega `3` e `"3"` para o mesmo argumento)
    - `None` no override não apaga o valor da base
    - conflito entre escalar e coleção → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado
    - Chaves ausentes no override são preservadas da base

Limites explícitos:
    - Não aplica diretivas nem conhece seus nomes
    - Não substitui o merge de registros de escopo (ver core.cascade)
"""

from copy import deepcopy
from typing import Any, Dict, List

from .errors import ConfigTypeConflictError

VIRTUAL_HOSTS_KEY = "virtual_hosts"


def _vhost_name(block: Any) -> Any:
    if isinstance(block, dict) and isinstance(block.get("name"), str):
        return block["name"]
    return None


def merge_virtual_hosts(base: List[Any], override: List[Any]) -> List[Any]:
    """
    Combina as listas de virtual hosts pelo nome de cada bloco.

    Um bloco do override com o mesmo nome de um bloco da base é combinado
    com ele (na posição da base); blocos novos ou sem nome são acrescentados
    ao final, na ordem do override.
    """
    merged = [deepcopy(block) for block in base]
    positions = {}
    for index, block in enumerate(merged):
        name = _vhost_name(block)
        if name is not None and name not in positions:
            positions[name] = index

    for block in override:
        name = _vhost_name(block)
        if name in positions:
            merged[positions[name]] = deep_merge(merged[positions[name]], block)
            continue
        if name is not None:
            positions[name] = len(merged)
        merged.append(deepcopy(block))

    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina dois documentos de host, produzindo um novo dicionário.

    Args:
        base (Dict[str, Any]): Documento base (defaults).
        override (Dict[str, Any]): Overrides locais.

    Returns:
        Dict[str, Any]: Novo documento resultante.

    Raises:
        ConfigTypeConflictError: Se a mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = {key: deepcopy(value) for key, value in base.items()}

    for key, value in override.items():
        current = result.get(key)
        if current is None:
            result[key] = deepcopy(value)
        elif value is None:
            # chave nula no override não apaga a base
            continue
        elif isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif key == VIRTUAL_HOSTS_KEY and isinstance(current, list) and isinstance(value, list):
            result[key] = merge_virtual_hosts(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = deepcopy(value)
        elif isinstance(current, (dict, list)) or isinstance(value, (dict, list)):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )
        else:
            # escalares (nome do servidor, argumentos) sobrescrevem livremente
            result[key] = deepcopy(value)

    return result
