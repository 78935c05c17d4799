# src/passenger_config/core/engine/planner.py
"""
Planejador de cascata de locations.

Este módulo decide quais seções de location se aplicam a um caminho de
requisição e em que ordem seus registros devem ser combinados sobre o
registro padrão do servidor.

Regras (v1):
    - Uma location se aplica quando seu caminho é prefixo do caminho da
      requisição em fronteira de segmento ("/app" cobre "/app" e "/app/x",
      mas não "/apple"); "/" cobre todos os caminhos
    - A ordem de merge vai do escopo mais amplo ao mais específico
      (menos segmentos primeiro); empates são resolvidos lexicograficamente

Decisões arquiteturais:
    - Caminhos de location são normalizados (barra final removida, exceto "/")
    - Caminhos inválidos ou duplicados após normalização são erro estrutural

Invariantes:
    - A mesma entrada sempre produz a mesma ordem
    - Cada location aplicável aparece exatamente uma vez

Limites explícitos:
    - Não executa merges
    - Não interpreta expressões regulares de location
"""

from __future__ import annotations

from typing import Dict, Iterable, List


class InvalidLocationError(ValueError):
    """
    Caminho de location inválido (vazio ou sem barra inicial).

    Decisões arquiteturais:
        - Locations são sempre caminhos absolutos do espaço de URLs
        - Nenhuma correção automática do caminho é tentada
    """


class DuplicateLocationError(ValueError):
    """Duas locations normalizam para o mesmo caminho."""


def normalize_location(path: str) -> str:
    if not isinstance(path, str) or not path.startswith("/"):
        raise InvalidLocationError(f"Location must be an absolute path: {path!r}")
    stripped = path.rstrip("/")
    return stripped or "/"


def _depth(path: str) -> int:
    return 0 if path == "/" else path.count("/")


def _covers(location: str, request_path: str) -> bool:
    if location == "/":
        return True
    return request_path == location or request_path.startswith(location + "/")


def index_locations(paths: Iterable[str]) -> Dict[str, str]:
    """
    Mapeia caminho normalizado → caminho declarado, validando duplicidade.

    Raises:
        InvalidLocationError: Se algum caminho não for absoluto.
        DuplicateLocationError: Se dois caminhos normalizarem igual.
    """
    by_norm: Dict[str, str] = {}
    for declared in paths:
        norm = normalize_location(declared)
        if norm in by_norm:
            raise DuplicateLocationError(
                f"Locations '{by_norm[norm]}' and '{declared}' refer to the same path"
            )
        by_norm[norm] = declared
    return by_norm


def plan_location_chain(locations: Iterable[str], request_path: str) -> List[str]:
    """
    Produz, na ordem de merge, as locations declaradas que cobrem `request_path`.

    Args:
        locations (Iterable[str]): Caminhos de location declarados.
        request_path (str): Caminho da requisição.

    Returns:
        List[str]: Caminhos declarados, do mais amplo ao mais específico.
    """
    target = normalize_location(request_path)
    by_norm = index_locations(locations)

    applicable = [norm for norm in by_norm if _covers(norm, target)]
    applicable.sort(key=lambda norm: (_depth(norm), norm))
    return [by_norm[norm] for norm in applicable]
