# tests/core/directives/test_setters_server.py
"""
Testes dos setters de escopo de servidor.

Este módulo valida que setters de escopo de servidor:
- escrevem no registro de servidor entregue explicitamente (`DirectiveCall.server`)
- rejeitam argumentos inválidos com a mensagem fixa, sem tocar no registro
- marcam a flag `*_specified` correspondente apenas em sucesso

Decisões arquiteturais:
    - Setters devolvem `None` em sucesso e a mensagem em falha
    - O registro de diretório recebido é ignorado por setters de servidor

Limites explícitos:
    - Não valida merges
    - Não valida checagem de contexto (ver test_directive_registry.py)
"""

import pytest

try:
    from passenger_config.core.directives import setters as s
    from passenger_config.core.directives.types import DirectiveCall
    from passenger_config.core.scope.records import (
        DEFAULT_MAX_POOL_SIZE,
        DEFAULT_POOL_IDLE_TIME,
        DirConfig,
        ServerConfig,
    )
except Exception as e:  # noqa: BLE001
    s = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os setters e os tipos de chamada estejam disponíveis.

    Falha imediatamente quando `setters.py` ou `types.py` não podem ser
    importados, com mensagem apontando os módulos esperados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing directive setters. Implement:\n"
            "- src/passenger_config/core/directives/setters.py (cmd_*)\n"
            "- src/passenger_config/core/directives/types.py (DirectiveCall)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def call(registry, ctx):
    """DirectiveCall apontando para um ServerConfig novo."""
    _require_imports()

    def _make(name: str) -> DirectiveCall:
        return DirectiveCall(directive=registry.get(name), server=ServerConfig(), context=ctx)

    return _make


def test_passenger_root_and_ruby_write_server(call):
    _require_imports()
    root_call = call("PassengerRoot")
    local = DirConfig()

    assert s.cmd_passenger_root(root_call, local, "/opt/passenger") is None
    assert root_call.server.root == "/opt/passenger"
    assert local == DirConfig()

    ruby_call = call("PassengerRuby")
    assert s.cmd_passenger_ruby(ruby_call, local, "/usr/bin/ruby1.9") is None
    assert ruby_call.server.ruby == "/usr/bin/ruby1.9"


@pytest.mark.parametrize("arg, expected", [("0", 0), ("9", 9), ("3", 3)])
def test_log_level_accepts_range(call, arg, expected):
    _require_imports()
    c = call("PassengerLogLevel")
    assert s.cmd_passenger_log_level(c, DirConfig(), arg) is None
    assert c.server.log_level == expected


@pytest.mark.parametrize(
    "arg, message",
    [
        ("-1", "Value for PassengerLogLevel must be between 0 and 9."),
        ("10", "Value for PassengerLogLevel must be between 0 and 9."),
        ("5x", "Invalid number specified for PassengerLogLevel."),
    ],
)
def test_log_level_rejects(call, arg, message):
    _require_imports()
    c = call("PassengerLogLevel")
    assert s.cmd_passenger_log_level(c, DirConfig(), arg) == message
    assert c.server.log_level is None


def test_max_pool_size_boundary(call):
    """
    Verifica a fronteira de PassengerMaxPoolSize.

    "0" é rejeitado e o registro permanece com o default sem flag; "1" é
    aceito e marca a flag de definição explícita.
    """
    _require_imports()
    c = call("PassengerMaxPoolSize")

    assert (
        s.cmd_passenger_max_pool_size(c, DirConfig(), "0")
        == "Value for PassengerMaxPoolSize must be greater than 0."
    )
    assert c.server.max_pool_size == DEFAULT_MAX_POOL_SIZE
    assert c.server.max_pool_size_specified is False

    assert s.cmd_passenger_max_pool_size(c, DirConfig(), "1") is None
    assert c.server.max_pool_size == 1
    assert c.server.max_pool_size_specified is True


def test_max_pool_size_invalid_number(call):
    _require_imports()
    c = call("PassengerMaxPoolSize")
    assert (
        s.cmd_passenger_max_pool_size(c, DirConfig(), "lots")
        == "Invalid number specified for PassengerMaxPoolSize."
    )
    assert c.server.max_pool_size_specified is False


def test_pool_idle_time_boundary(call):
    _require_imports()
    c = call("PassengerPoolIdleTime")

    assert (
        s.cmd_passenger_pool_idle_time(c, DirConfig(), "0")
        == "Value for PassengerPoolIdleTime must be greater than 0."
    )
    assert c.server.pool_idle_time == DEFAULT_POOL_IDLE_TIME
    assert c.server.pool_idle_time_specified is False

    assert s.cmd_passenger_pool_idle_time(c, DirConfig(), "1") is None
    assert (c.server.pool_idle_time, c.server.pool_idle_time_specified) == (1, True)


def test_max_instances_per_app(call):
    _require_imports()
    c = call("PassengerMaxInstancesPerApp")

    assert (
        s.cmd_passenger_max_instances_per_app(c, DirConfig(), "-1")
        == "Value for PassengerMaxInstancesPerApp must be greater than or equal to 0."
    )
    assert c.server.max_instances_per_app_specified is False

    # 0 significa "sem limite por aplicação" e é um valor explícito válido
    assert s.cmd_passenger_max_instances_per_app(c, DirConfig(), "0") is None
    assert (c.server.max_instances_per_app, c.server.max_instances_per_app_specified) == (0, True)


def test_user_switching_sets_flag(call):
    _require_imports()
    c = call("PassengerUserSwitching")
    assert s.cmd_passenger_user_switching(c, DirConfig(), False) is None
    assert c.server.user_switching is False
    assert c.server.user_switching_specified is True


def test_default_user(call):
    _require_imports()
    c = call("PassengerDefaultUser")
    assert s.cmd_passenger_default_user(c, DirConfig(), "nobody") is None
    assert c.server.default_user == "nobody"
