# src/passenger_config/core/scope/__init__.py
"""
# Escopos — Passenger Config

Este pacote define os **registros de escopo** e as estruturas que os
cercam durante uma carga de configuração.

## Componentes

- **types**
  - `TriState`: UNSET / ENABLED / DISABLED
  - `SpawnMethod`: estratégia de spawn com estado UNSET explícito

- **records**
  - `DirConfig`: configuração de diretório / location
  - `ServerConfig`: configuração de servidor / virtual host
  - `create_dir_config`, `create_server_config`: criação adotada por pool

- **pool**
  - `ConfigPool`: dono dos registros, com liberação garantida na saída do escopo

- **context**
  - `ConfigContext`: eventos estruturados e warnings da carga

## Invariantes

- Todo registro é criado contra um pool
- "Não definido" é sempre um valor explícito (`None` ou `UNSET`)
"""

from .context import ConfigContext
from .pool import ConfigPool, PoolDestroyedError
from .records import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_INSTANCES_PER_APP,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_POOL_IDLE_TIME,
    DirConfig,
    ServerConfig,
    create_dir_config,
    create_server_config,
    record_to_dict,
)
from .types import SpawnMethod, TriState

__all__ = [
    "ConfigContext",
    "ConfigPool",
    "PoolDestroyedError",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MAX_INSTANCES_PER_APP",
    "DEFAULT_MAX_POOL_SIZE",
    "DEFAULT_POOL_IDLE_TIME",
    "DirConfig",
    "ServerConfig",
    "create_dir_config",
    "create_server_config",
    "record_to_dict",
    "SpawnMethod",
    "TriState",
]
