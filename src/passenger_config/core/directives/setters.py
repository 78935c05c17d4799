# src/passenger_config/core/directives/setters.py
"""
Setters de diretivas do Passenger Config.

Cada setter recebe o `DirectiveCall` (com o registro de servidor corrente),
o registro de diretório local e o argumento bruto, e:
    - muta exatamente um campo (e a flag `*_specified` correspondente, quando
      existir) e devolve `None`; ou
    - devolve uma mensagem fixa e legível, sem tocar no registro.

Setters de escopo de servidor escrevem em `call.server` e ignoram o
registro de diretório recebido. Setters FLAG recebem um `bool` já
convertido pelo registry.

Contrato de retorno (v1):
    - `None`  → sucesso
    - `str`   → falha de validação, fatal para a carga corrente
"""

from __future__ import annotations

from typing import Optional

from ..scope.records import DirConfig
from ..scope.types import SpawnMethod, TriState
from .parsing import parse_integer
from .types import DirectiveCall


OBSOLETE_SPAWN_SERVER_WARNING = (
    "WARNING: The 'RailsSpawnServer' option is obsolete. "
    "Please specify 'PassengerRoot' instead. The correct value was "
    "given to you by 'passenger-install-apache2-module'."
)

SPAWN_METHOD_ERROR = "RailsSpawnMethod may only be 'smart', 'smart-lv2' or 'conservative'."


def _invalid_number(name: str) -> str:
    return f"Invalid number specified for {name}."


# ---------------------------------------------------------------------------
# Passenger settings
# ---------------------------------------------------------------------------

def cmd_passenger_root(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    call.server.root = arg
    return None


def cmd_passenger_log_level(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("PassengerLogLevel")
    if result < 0 or result > 9:
        return "Value for PassengerLogLevel must be between 0 and 9."
    call.server.log_level = result
    return None


def cmd_passenger_ruby(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    call.server.ruby = arg
    return None


def cmd_passenger_max_pool_size(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("PassengerMaxPoolSize")
    if result <= 0:
        return "Value for PassengerMaxPoolSize must be greater than 0."
    call.server.max_pool_size = result
    call.server.max_pool_size_specified = True
    return None


def cmd_passenger_max_instances_per_app(
    call: DirectiveCall, config: DirConfig, arg: str
) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("PassengerMaxInstancesPerApp")
    if result < 0:
        return "Value for PassengerMaxInstancesPerApp must be greater than or equal to 0."
    call.server.max_instances_per_app = result
    call.server.max_instances_per_app_specified = True
    return None


def cmd_passenger_pool_idle_time(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("PassengerPoolIdleTime")
    if result <= 0:
        return "Value for PassengerPoolIdleTime must be greater than 0."
    call.server.pool_idle_time = result
    call.server.pool_idle_time_specified = True
    return None


def cmd_passenger_use_global_queue(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.use_global_queue = TriState.from_flag(arg)
    return None


def cmd_passenger_user_switching(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    call.server.user_switching = bool(arg)
    call.server.user_switching_specified = True
    return None


def cmd_passenger_default_user(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    call.server.default_user = arg
    return None


def cmd_passenger_max_requests(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("PassengerMaxRequests")
    if result < 0:
        return "Value for PassengerMaxRequests must be greater than or equal to 0."
    config.max_requests = result
    config.max_requests_specified = True
    return None


def cmd_passenger_high_performance(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.high_performance = TriState.from_flag(arg)
    return None


def cmd_passenger_enabled(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.enabled = TriState.from_flag(arg)
    return None


# ---------------------------------------------------------------------------
# Rails-specific settings
# ---------------------------------------------------------------------------

def cmd_rails_base_uri(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    config.rails_base_uris.add(arg)
    return None


def cmd_rails_auto_detect(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.auto_detect_rails = TriState.from_flag(arg)
    return None


def cmd_rails_allow_mod_rewrite(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.allow_mod_rewrite = TriState.from_flag(arg)
    return None


def cmd_rails_env(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    config.rails_env = arg
    return None


def cmd_rails_app_root(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    config.rails_app_root = arg
    return None


def cmd_rails_spawn_method(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    try:
        method = SpawnMethod.from_literal(arg)
    except ValueError:
        return SPAWN_METHOD_ERROR
    config.spawn_method = method
    return None


def cmd_rails_framework_spawner_idle_time(
    call: DirectiveCall, config: DirConfig, arg: str
) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("RailsFrameworkSpawnerIdleTime")
    if result < 0:
        return "Value for RailsFrameworkSpawnerIdleTime must be at least 0."
    config.framework_spawner_timeout = result
    return None


def cmd_rails_app_spawner_idle_time(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    result = parse_integer(arg)
    if result is None:
        return _invalid_number("RailsAppSpawnerIdleTime")
    if result < 0:
        return "Value for RailsAppSpawnerIdleTime must be at least 0."
    config.app_spawner_timeout = result
    return None


# ---------------------------------------------------------------------------
# Rack-specific settings
# ---------------------------------------------------------------------------

def cmd_rack_base_uri(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    config.rack_base_uris.add(arg)
    return None


def cmd_rack_auto_detect(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.auto_detect_rack = TriState.from_flag(arg)
    return None


def cmd_rack_env(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    config.rack_env = arg
    return None


# ---------------------------------------------------------------------------
# WSGI-specific settings
# ---------------------------------------------------------------------------

def cmd_wsgi_auto_detect(call: DirectiveCall, config: DirConfig, arg: bool) -> Optional[str]:
    config.auto_detect_wsgi = TriState.from_flag(arg)
    return None


# ---------------------------------------------------------------------------
# Obsolete settings
# ---------------------------------------------------------------------------

def cmd_rails_spawn_server(call: DirectiveCall, config: DirConfig, arg: str) -> Optional[str]:
    call.context.add_warning(scope=call.directive.name, message=OBSOLETE_SPAWN_SERVER_WARNING)
    call.context.log(
        scope=call.directive.name,
        level="WARNING",
        message="obsolete directive ignored",
        argument=arg,
    )
    return None
