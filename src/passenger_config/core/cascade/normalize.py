# src/passenger_config/core/cascade/normalize.py
"""
Normalização entre servidores (fold + broadcast).

Executada exatamente uma vez, após todos os blocos de servidor terem suas
diretivas aplicadas e seus merges par-a-par concluídos.

1. Fold: um acumulador parte de um registro padrão novo e percorre a lista
   de servidores em ordem de declaração:
     - ruby, root, default_user, log_level → o primeiro valor definido vence
     - campos com flag explícita → o primeiro servidor com a flag definida
       fornece o valor; as flags são combinadas por OR
     - user_switching → o ÚLTIMO servidor que o definiu explicitamente vence
       (assimetria mantida por compatibilidade com o comportamento legado)
2. Broadcast: cada registro de servidor é sobrescrito in-place com uma
   cópia do acumulador, de modo que todo detentor de referência observa
   a mesma configuração efetiva.

Consequência: configurações de escopo de servidor são efetivamente
globais ao processo; overrides por virtual host só importam durante o fold.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..scope.context import ConfigContext
from ..scope.pool import ConfigPool
from ..scope.records import ServerConfig, create_server_config


def _first(current, candidate):
    return current if current is not None else candidate


def fold_servers(servers: Sequence[ServerConfig], pool: Optional[ConfigPool] = None) -> ServerConfig:
    """Produz o registro sintetizado a partir da lista de servidores, sem mutá-la."""
    final = create_server_config(pool) if pool is not None else ServerConfig()

    for config in servers:
        final.ruby = _first(final.ruby, config.ruby)
        final.root = _first(final.root, config.root)
        final.log_level = _first(final.log_level, config.log_level)

        if not final.max_pool_size_specified:
            final.max_pool_size = config.max_pool_size
        final.max_pool_size_specified = final.max_pool_size_specified or config.max_pool_size_specified

        if not final.max_instances_per_app_specified:
            final.max_instances_per_app = config.max_instances_per_app
        final.max_instances_per_app_specified = (
            final.max_instances_per_app_specified or config.max_instances_per_app_specified
        )

        if not final.pool_idle_time_specified:
            final.pool_idle_time = config.pool_idle_time
        final.pool_idle_time_specified = final.pool_idle_time_specified or config.pool_idle_time_specified

        if config.user_switching_specified:
            final.user_switching = config.user_switching
        final.user_switching_specified = final.user_switching_specified or config.user_switching_specified

        final.default_user = _first(final.default_user, config.default_user)

    return final


def merge_all_servers(
    servers: Sequence[ServerConfig],
    pool: Optional[ConfigPool] = None,
    context: Optional[ConfigContext] = None,
) -> ServerConfig:
    """
    Unifica todos os registros de servidor em uma configuração efetiva única.

    Args:
        servers (Sequence[ServerConfig]): Registros em ordem de declaração
            (servidor principal primeiro).
        pool (Optional[ConfigPool]): Pool dono do registro sintetizado.
        context (Optional[ConfigContext]): Recebe um evento informativo.

    Returns:
        ServerConfig: O registro sintetizado (os registros da lista passam a
        conter cópias idênticas dele).
    """
    final = fold_servers(servers, pool)
    for config in servers:
        config.assign_from(final)

    if context is not None:
        context.log(
            scope="server",
            level="INFO",
            message="server configurations normalized",
            servers=len(servers),
        )
    return final
