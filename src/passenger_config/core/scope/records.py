# src/passenger_config/core/scope/records.py
"""
Registros de escopo do Passenger Config.

Este módulo define as duas variantes de registro de escopo manipuladas pelo
motor de configuração:

    - DirConfig    → configuração de uma subárvore do espaço de URLs
                     (diretório / location)
    - ServerConfig → configuração de um bloco de servidor (virtual host)

Os registros são populados pelos setters de diretivas durante a carga,
combinados pelo motor de merge quando um escopo aninhado precisa das
definições do escopo ancestral, e nunca são mutados após o merge.

Decisões arquiteturais:
    - "Herdar" é representado por `None` ou `TriState.UNSET`, nunca por -1 ou 0
    - Campos com rastreio de definição explícita mantêm o par (valor, *_specified)
    - Conjuntos de URIs reservadas usam `set` (ordem irrelevante, duplicatas colapsam)
    - Registros são criados contra um `ConfigPool`, que garante sua liberação

Invariantes:
    - Todo campo é um valor definido ou um marcador explícito de "não definido"
    - Flags `*_specified` começam em False e só um setter as torna True

Limites explícitos:
    - Não aplica regras de merge (ver core.cascade)
    - Não valida argumentos de diretivas (ver core.directives)
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Set

from .pool import ConfigPool
from .types import SpawnMethod, TriState


DEFAULT_LOG_LEVEL = 0
DEFAULT_MAX_POOL_SIZE = 6
DEFAULT_POOL_IDLE_TIME = 300
DEFAULT_MAX_INSTANCES_PER_APP = 0


@dataclass
class DirConfig:
    """
    Configuração aplicável a uma subárvore do espaço de URLs.

    Campos tri-state (enabled, auto-detect, allow_mod_rewrite,
    high_performance, use_global_queue) começam em UNSET. Strings e
    timeouts começam em `None` ("herdar"). `max_requests` e `memory_limit`
    carregam flags de definição explícita.
    """

    enabled: TriState = TriState.UNSET
    auto_detect_rails: TriState = TriState.UNSET
    auto_detect_rack: TriState = TriState.UNSET
    auto_detect_wsgi: TriState = TriState.UNSET
    allow_mod_rewrite: TriState = TriState.UNSET

    rails_env: Optional[str] = None
    rack_env: Optional[str] = None
    rails_app_root: Optional[str] = None
    spawn_method: SpawnMethod = SpawnMethod.UNSET

    framework_spawner_timeout: Optional[int] = None
    app_spawner_timeout: Optional[int] = None

    max_requests: int = 0
    max_requests_specified: bool = False
    memory_limit: int = 0
    memory_limit_specified: bool = False

    high_performance: TriState = TriState.UNSET
    use_global_queue: TriState = TriState.UNSET

    rails_base_uris: Set[str] = field(default_factory=set)
    rack_base_uris: Set[str] = field(default_factory=set)

    def copy(self) -> "DirConfig":
        return copy.deepcopy(self)


@dataclass
class ServerConfig:
    """
    Configuração aplicável a um bloco de servidor (virtual host).

    `log_level` é `None` enquanto nenhuma diretiva o definir; o valor
    efetivo padrão é 0. Os limites do pool começam nos defaults do
    módulo e só são considerados explícitos via flags `*_specified`.
    """

    ruby: Optional[str] = None
    root: Optional[str] = None
    log_level: Optional[int] = None

    max_pool_size: int = DEFAULT_MAX_POOL_SIZE
    max_pool_size_specified: bool = False
    max_instances_per_app: int = DEFAULT_MAX_INSTANCES_PER_APP
    max_instances_per_app_specified: bool = False
    pool_idle_time: int = DEFAULT_POOL_IDLE_TIME
    pool_idle_time_specified: bool = False

    user_switching: bool = True
    user_switching_specified: bool = False
    default_user: Optional[str] = None

    def copy(self) -> "ServerConfig":
        return copy.deepcopy(self)

    def assign_from(self, other: "ServerConfig") -> None:
        """Sobrescreve todos os campos deste registro com os de `other` (in-place)."""
        for f in fields(self):
            setattr(self, f.name, copy.deepcopy(getattr(other, f.name)))


def record_to_dict(record: Any) -> Dict[str, Any]:
    """
    Serializa um registro de escopo para um dict puro.

    Enums viram seus valores textuais e conjuntos viram listas ordenadas,
    produzindo uma estrutura adequada para JSON canônico.
    """
    out: Dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        elif isinstance(value, (TriState, SpawnMethod)):
            value = value.value
        out[f.name] = value
    return out


def create_dir_config(pool: ConfigPool) -> DirConfig:
    """
    Cria um registro de diretório com todos os campos em "não definido".

    Args:
        pool (ConfigPool): Pool dono do registro.

    Returns:
        DirConfig: Novo registro adotado pelo pool.
    """
    return pool.adopt(DirConfig())


def create_server_config(pool: ConfigPool) -> ServerConfig:
    """Cria um registro de servidor com os defaults do módulo, adotado pelo pool."""
    return pool.adopt(ServerConfig())
