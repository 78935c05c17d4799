# src/passenger_config/core/cascade/resolve.py
"""
Resolução de valores efetivos.

Este módulo converte registros de escopo (que podem conter "não definido")
em registros efetivos imutáveis, nos quais todo campo possui um valor
definido ou um default documentado. São estes os registros consumidos
pelos componentes downstream (pool de processos, handlers de requisição).

Defaults documentados (v1):
    - enabled, auto_detect_rails, auto_detect_rack, auto_detect_wsgi → True
    - allow_mod_rewrite, high_performance, use_global_queue        → False
    - rails_env, rack_env                                          → "production"
    - rails_app_root                                               → None (derivado do document root)
    - spawn_method                                                 → smart-lv2
    - framework_spawner_timeout                                    → 1800 s
    - app_spawner_timeout                                          → 600 s
    - max_requests, memory_limit                                   → 0 (ilimitado)
    - ruby                                                         → "ruby"
    - log_level                                                    → 0

Invariantes:
    - Nenhum TriState.UNSET ou SpawnMethod.UNSET sobrevive à resolução
    - Registros efetivos são frozen e seus conjuntos são frozenset
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, FrozenSet, Optional

from ..scope.records import DEFAULT_LOG_LEVEL, DirConfig, ServerConfig
from ..scope.types import SpawnMethod

DEFAULT_ENVIRONMENT = "production"
DEFAULT_SPAWN_METHOD = SpawnMethod.SMART_LV2
DEFAULT_FRAMEWORK_SPAWNER_TIMEOUT = 1800
DEFAULT_APP_SPAWNER_TIMEOUT = 600
DEFAULT_RUBY = "ruby"


def _to_plain(data: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        elif isinstance(value, SpawnMethod):
            value = value.value
        out[key] = value
    return out


@dataclass(frozen=True)
class EffectiveDirConfig:
    """Configuração de diretório totalmente resolvida."""

    enabled: bool
    auto_detect_rails: bool
    auto_detect_rack: bool
    auto_detect_wsgi: bool
    allow_mod_rewrite: bool
    rails_env: str
    rack_env: str
    rails_app_root: Optional[str]
    spawn_method: SpawnMethod
    framework_spawner_timeout: int
    app_spawner_timeout: int
    max_requests: int
    memory_limit: int
    high_performance: bool
    use_global_queue: bool
    rails_base_uris: FrozenSet[str]
    rack_base_uris: FrozenSet[str]

    def to_dict(self) -> Dict[str, Any]:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class EffectiveServerConfig:
    """Configuração de servidor totalmente resolvida."""

    ruby: str
    root: Optional[str]
    log_level: int
    max_pool_size: int
    max_instances_per_app: int
    pool_idle_time: int
    user_switching: bool
    default_user: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return _to_plain(asdict(self))


def resolve_dir_config(config: DirConfig) -> EffectiveDirConfig:
    spawn_method = config.spawn_method
    if spawn_method is SpawnMethod.UNSET:
        spawn_method = DEFAULT_SPAWN_METHOD

    return EffectiveDirConfig(
        enabled=config.enabled.resolve(True),
        auto_detect_rails=config.auto_detect_rails.resolve(True),
        auto_detect_rack=config.auto_detect_rack.resolve(True),
        auto_detect_wsgi=config.auto_detect_wsgi.resolve(True),
        allow_mod_rewrite=config.allow_mod_rewrite.resolve(False),
        rails_env=config.rails_env if config.rails_env is not None else DEFAULT_ENVIRONMENT,
        rack_env=config.rack_env if config.rack_env is not None else DEFAULT_ENVIRONMENT,
        rails_app_root=config.rails_app_root,
        spawn_method=spawn_method,
        framework_spawner_timeout=(
            config.framework_spawner_timeout
            if config.framework_spawner_timeout is not None
            else DEFAULT_FRAMEWORK_SPAWNER_TIMEOUT
        ),
        app_spawner_timeout=(
            config.app_spawner_timeout
            if config.app_spawner_timeout is not None
            else DEFAULT_APP_SPAWNER_TIMEOUT
        ),
        max_requests=config.max_requests,
        memory_limit=config.memory_limit,
        high_performance=config.high_performance.resolve(False),
        use_global_queue=config.use_global_queue.resolve(False),
        rails_base_uris=frozenset(config.rails_base_uris),
        rack_base_uris=frozenset(config.rack_base_uris),
    )


def resolve_server_config(config: ServerConfig) -> EffectiveServerConfig:
    return EffectiveServerConfig(
        ruby=config.ruby if config.ruby is not None else DEFAULT_RUBY,
        root=config.root,
        log_level=config.log_level if config.log_level is not None else DEFAULT_LOG_LEVEL,
        max_pool_size=config.max_pool_size,
        max_instances_per_app=config.max_instances_per_app,
        pool_idle_time=config.pool_idle_time,
        user_switching=config.user_switching,
        default_user=config.default_user,
    )
