# src/passenger_config/core/cascade/__init__.py
"""
# Cascata — Passenger Config

Este pacote resolve a configuração efetiva ao longo dos três eixos de
cascata do módulo:

- **merge**
  - `merge_dir_config`: herança de diretório (location filha sobre a pai)
  - `merge_server_config`: herança de servidor (virtual host sobre o global)
  - `ServerMergePolicy`: decisão explícita sobre a ordem de operandos do log level

- **normalize**
  - `merge_all_servers`: fold de todos os servidores + broadcast do resultado

- **resolve**
  - `resolve_dir_config`, `resolve_server_config`: registros efetivos sem "não definido"

## Invariantes

- Merges nunca mutam seus inputs
- A normalização é idempotente
"""

from .merge import (
    DEFAULT_SERVER_MERGE_POLICY,
    ServerMergePolicy,
    merge_dir_config,
    merge_server_config,
)
from .normalize import fold_servers, merge_all_servers
from .resolve import (
    EffectiveDirConfig,
    EffectiveServerConfig,
    resolve_dir_config,
    resolve_server_config,
)

__all__ = [
    "DEFAULT_SERVER_MERGE_POLICY",
    "EffectiveDirConfig",
    "EffectiveServerConfig",
    "ServerMergePolicy",
    "fold_servers",
    "merge_all_servers",
    "merge_dir_config",
    "merge_server_config",
    "resolve_dir_config",
    "resolve_server_config",
]
