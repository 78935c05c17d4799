# src/passenger_config/core/engine/__init__.py
"""
Engine do Passenger Config.

Este pacote contém a orquestração de uma carga de configuração completa,
do documento de host até a configuração efetiva normalizada.

Componentes principais:
    - planner → quais locations cobrem um caminho e em que ordem combiná-las
    - engine  → aplicação de diretivas, merges de servidor/diretório e normalização

Princípios fundamentais:
    - A ordem de aplicação é a ordem de declaração do documento
    - Uma falha de diretiva interrompe a carga inteira
    - A normalização entre servidores executa exatamente uma vez por carga

Limites explícitos:
    - Não interpreta sintaxe nativa do servidor
    - Não atende requisições
"""

from .engine import HostConfiguration, HostEngine, VirtualHost
from .planner import (
    DuplicateLocationError,
    InvalidLocationError,
    normalize_location,
    plan_location_chain,
)

__all__ = [
    "DuplicateLocationError",
    "HostConfiguration",
    "HostEngine",
    "InvalidLocationError",
    "VirtualHost",
    "normalize_location",
    "plan_location_chain",
]
