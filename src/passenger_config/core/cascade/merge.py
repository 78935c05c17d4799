# src/passenger_config/core/cascade/merge.py
"""
Merge em cascata de registros de escopo.

Este módulo implementa as duas operações de merge par-a-par do
Passenger Config:

    - merge_dir_config(base, override)    → escopo de diretório (pai → filho)
    - merge_server_config(base, override) → escopo de servidor (global → virtual host)

Política de merge de diretório (v1):
    - tri-state        → override se definido, senão base
    - string / enum    → override se não nulo / não UNSET, senão base
    - timeout opcional → override se não `None`, senão base
    - valor + flag     → valor do override se flag do override, senão base;
                         flag = base OR override (monotônica)
    - conjuntos        → união (reservas de todos os ancestrais permanecem ativas)

Política de merge de servidor (v1):
    - strings anuláveis  → override se não nulo, senão base
    - valor + flag       → mesmo padrão do diretório (pool, instâncias, idle time)
    - user_switching     → padrão de flag explícita, não de nulidade
    - log_level          → override se definido, senão base; ou, com
                           `legacy_log_level_merge`, a ordem literal de operandos
                           legada ("override definido → base")

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado; o resultado é sempre um novo registro
    - Quando um pool é fornecido, o novo registro é adotado por ele

Invariantes:
    - Flags `*_specified` nunca voltam a False após um merge
    - merge(X, X) preserva os conjuntos de X

Limites explícitos:
    - Não valida argumentos de diretivas
    - Não executa a normalização entre servidores (ver normalize)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from ..scope.context import ConfigContext
from ..scope.pool import ConfigPool
from ..scope.records import DirConfig, ServerConfig
from ..scope.types import SpawnMethod, TriState

T = TypeVar("T")


@dataclass(frozen=True)
class ServerMergePolicy:
    """
    Política explícita para os pontos de divergência do merge de servidor.

    Campos:
        - legacy_log_level_merge: reproduz a ordem de operandos invertida do
          comportamento legado para `log_level` (override definido → mantém base).
          Desligado por padrão: o log level segue "override vence".
    """
    legacy_log_level_merge: bool = False


DEFAULT_SERVER_MERGE_POLICY = ServerMergePolicy()


def _pick(base: Optional[T], override: Optional[T]) -> Optional[T]:
    return base if override is None else override


def merge_dir_config(
    base: DirConfig,
    override: DirConfig,
    pool: Optional[ConfigPool] = None,
) -> DirConfig:
    """
    Combina o registro de um escopo de diretório com o de seu ancestral.

    Args:
        base (DirConfig): Registro do escopo pai (mais amplo).
        override (DirConfig): Registro do escopo filho (mais específico).
        pool (Optional[ConfigPool]): Pool dono do registro resultante.

    Returns:
        DirConfig: Novo registro resolvido; `base` e `override` não são mutados.
    """
    merged = DirConfig(
        enabled=TriState.merge(base.enabled, override.enabled),
        auto_detect_rails=TriState.merge(base.auto_detect_rails, override.auto_detect_rails),
        auto_detect_rack=TriState.merge(base.auto_detect_rack, override.auto_detect_rack),
        auto_detect_wsgi=TriState.merge(base.auto_detect_wsgi, override.auto_detect_wsgi),
        allow_mod_rewrite=TriState.merge(base.allow_mod_rewrite, override.allow_mod_rewrite),
        rails_env=_pick(base.rails_env, override.rails_env),
        rack_env=_pick(base.rack_env, override.rack_env),
        rails_app_root=_pick(base.rails_app_root, override.rails_app_root),
        spawn_method=(
            base.spawn_method if override.spawn_method is SpawnMethod.UNSET else override.spawn_method
        ),
        framework_spawner_timeout=_pick(
            base.framework_spawner_timeout, override.framework_spawner_timeout
        ),
        app_spawner_timeout=_pick(base.app_spawner_timeout, override.app_spawner_timeout),
        max_requests=override.max_requests if override.max_requests_specified else base.max_requests,
        max_requests_specified=base.max_requests_specified or override.max_requests_specified,
        memory_limit=override.memory_limit if override.memory_limit_specified else base.memory_limit,
        memory_limit_specified=base.memory_limit_specified or override.memory_limit_specified,
        high_performance=TriState.merge(base.high_performance, override.high_performance),
        use_global_queue=TriState.merge(base.use_global_queue, override.use_global_queue),
        rails_base_uris=set(base.rails_base_uris) | set(override.rails_base_uris),
        rack_base_uris=set(base.rack_base_uris) | set(override.rack_base_uris),
    )
    if pool is not None:
        pool.adopt(merged)
    return merged


def merge_server_config(
    base: ServerConfig,
    override: ServerConfig,
    pool: Optional[ConfigPool] = None,
    *,
    policy: ServerMergePolicy = DEFAULT_SERVER_MERGE_POLICY,
    context: Optional[ConfigContext] = None,
) -> ServerConfig:
    """
    Combina o registro do servidor global com o de um virtual host.

    Args:
        base (ServerConfig): Registro do servidor principal.
        override (ServerConfig): Registro do virtual host.
        pool (Optional[ConfigPool]): Pool dono do registro resultante.
        policy (ServerMergePolicy): Política para o merge de `log_level`.
        context (Optional[ConfigContext]): Recebe um warning quando a política
            legada muda o resultado em relação a "override vence".

    Returns:
        ServerConfig: Novo registro resolvido; os inputs não são mutados.
    """
    if policy.legacy_log_level_merge:
        # ordem legada: override definido mantém a base
        log_level = base.log_level if override.log_level else override.log_level
        if context is not None and log_level != _pick(base.log_level, override.log_level):
            if override.log_level:
                message = (
                    "legacy log level merge dropped the virtual host's "
                    f"{override.log_level!r} in favor of main server's {base.log_level!r}"
                )
            else:
                message = f"legacy log level merge dropped main server's {base.log_level!r}"
            context.add_warning(scope="PassengerLogLevel", message=message)
    else:
        log_level = _pick(base.log_level, override.log_level)

    merged = ServerConfig(
        ruby=_pick(base.ruby, override.ruby),
        root=_pick(base.root, override.root),
        log_level=log_level,
        max_pool_size=(
            override.max_pool_size if override.max_pool_size_specified else base.max_pool_size
        ),
        max_pool_size_specified=base.max_pool_size_specified or override.max_pool_size_specified,
        max_instances_per_app=(
            override.max_instances_per_app
            if override.max_instances_per_app_specified
            else base.max_instances_per_app
        ),
        max_instances_per_app_specified=(
            base.max_instances_per_app_specified or override.max_instances_per_app_specified
        ),
        pool_idle_time=(
            override.pool_idle_time if override.pool_idle_time_specified else base.pool_idle_time
        ),
        pool_idle_time_specified=base.pool_idle_time_specified or override.pool_idle_time_specified,
        user_switching=(
            override.user_switching if override.user_switching_specified else base.user_switching
        ),
        user_switching_specified=base.user_switching_specified or override.user_switching_specified,
        default_user=_pick(base.default_user, override.default_user),
    )
    if pool is not None:
        pool.adopt(merged)
    return merged
