# tests/conftest.py
"""
Fixtures compartilhados para testes do Passenger Config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de host mínimos e determinísticos (YAML como string)
- contexto de carga controlado (ConfigContext)
- pool de configuração com liberação garantida ao final do teste
- a tabela padrão de diretivas
- um aplicador de diretivas no contrato do engine

O objetivo destas fixtures é permitir testes do core
(scope, directives, cascade, config e engine) sem depender de:
- filesystem (exceto via `tmp_path`, nos testes do loader)
- variáveis de ambiente
- um servidor hospedeiro real

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - `load_id` e `created_at` são fixos para garantir determinismo

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture contém lógica de domínio
    - Todo pool criado aqui é destruído ao final do teste

Limites explícitos:
    - Não substituir testes de integração
    - Não validar semântica de merge
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Documentos de host
# =====================================================

@pytest.fixture
def host_defaults_yaml() -> str:
    """
    YAML de documento de host padrão (defaults) semelhante ao uso real.

    Representa o conteúdo típico de um `host.defaults.yaml`: servidor
    principal com diretivas globais, uma location raiz e um virtual host
    com sua própria location.

    Usado por:
        - Testes do loader de documentos
        - Testes de ponta a ponta do engine

    Returns:
        str: Conteúdo YAML do documento base.
    """
    return """\
server:
  directives:
    - [PassengerRoot, /opt/passenger]
    - [PassengerRuby, /usr/bin/ruby1.8]
    - [PassengerMaxPoolSize, "3"]
    - [PassengerLogLevel, "1"]
  locations:
    /:
      - [PassengerEnabled, "on"]
virtual_hosts:
  - name: app.test
    directives:
      - [RailsEnv, staging]
      - [PassengerMaxPoolSize, "10"]
    locations:
      /app:
        - [RailsBaseURI, /app]
        - [PassengerMaxRequests, "500"]
"""


@pytest.fixture
def host_local_yaml() -> str:
    """
    YAML de overrides locais.

    Substitui integralmente a lista de diretivas do servidor principal
    (listas não são combinadas) e acrescenta uma location.

    Returns:
        str: Conteúdo YAML do documento local.
    """
    return """\
server:
  directives:
    - [PassengerRoot, /usr/local/passenger]
  locations:
    /admin:
      - [PassengerEnabled, "off"]
"""


@pytest.fixture
def host_document() -> dict:
    """Documento de host já resolvido, usado diretamente pelo engine."""
    return {
        "server": {
            "directives": [
                ["PassengerRoot", "/opt/passenger"],
                ["PassengerMaxPoolSize", "3"],
                ["RailsAutoDetect", "off"],
            ],
            "locations": {
                "/": [["PassengerEnabled", "on"]],
                "/legacy": [["PassengerEnabled", "off"]],
            },
        },
        "virtual_hosts": [
            {
                "name": "app.test",
                "directives": [
                    ["RailsEnv", "development"],
                    ["PassengerMaxPoolSize", "10"],
                    ["PassengerUserSwitching", "off"],
                ],
                "locations": {
                    "/app": [["RailsBaseURI", "/app"]],
                    "/app/admin": [["RailsBaseURI", "/app/admin"], ["PassengerMaxRequests", 100]],
                },
            },
            {
                "name": "other.test",
                "directives": [["PassengerDefaultUser", "nobody"]],
            },
        ],
    }


# =====================================================
# Contexto, pool e diretivas
# =====================================================

@pytest.fixture
def ctx():
    """
    ConfigContext determinístico para testes.

    Decisões arquiteturais:
        - `load_id` e `created_at` são fixos
        - Nenhum stream de diagnóstico é configurado

    Returns:
        ConfigContext: Contexto isolado e previsível.
    """
    from passenger_config.core.scope.context import ConfigContext

    return ConfigContext(
        load_id="load-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )


@pytest.fixture
def pool():
    """ConfigPool destruído automaticamente ao final do teste."""
    from passenger_config.core.scope.pool import ConfigPool

    with ConfigPool("test") as p:
        yield p


@pytest.fixture
def registry():
    from passenger_config.core.directives.registry import build_default_registry

    return build_default_registry()


@pytest.fixture
def apply_directive(registry, ctx):
    """
    Fixture factory que aplica uma diretiva no contrato do engine.

    Retorna uma função `(name, arg, config, server, placement=SERVER)` que
    levanta a exceção tipada em caso de falha.

    Returns:
        Callable: aplicador de diretivas ligado à tabela padrão e ao `ctx`.
    """
    from passenger_config.core.directives.types import Placement

    def _apply(name, arg, config, server, placement=Placement.SERVER, section=None):
        return registry.apply(
            name,
            arg,
            config=config,
            server=server,
            context=ctx,
            placement=placement,
            section=section,
        )

    return _apply
