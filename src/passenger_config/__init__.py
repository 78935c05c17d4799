# src/passenger_config/__init__.py
"""
Passenger Config — motor de resolução hierárquica de configuração.

Este pacote raiz define o namespace público do núcleo de configuração do
módulo Phusion Passenger para servidores web. O núcleo recebe diretivas
declaradas em escopos aninhados (servidor/virtual host e diretório/location),
valida e armazena seus valores, e resolve a configuração efetiva através de
regras determinísticas de merge em cascata.

Princípios centrais:
    - Cada campo é um valor definido ou um marcador explícito de "não definido"
    - Merges nunca mutam seus inputs; sempre produzem um novo registro
    - Erros de validação são reportados no ponto da diretiva que os causou
    - Nenhum estado global: o contexto de configuração é sempre explícito

Arquitetura em alto nível:
    - core.scope      → tri-state, registros de escopo, pool e contexto
    - core.directives → tabela de diretivas, parsing e setters
    - core.cascade    → merge de diretório, merge de servidor, normalização
    - core.config     → carregamento de documentos de host (YAML/JSON)
    - core.engine     → planejamento de locations e engine de host

Limites explícitos:
    - Não interpreta a sintaxe de arquivos de configuração do servidor
    - Não gerencia ciclo de vida de requisições ou processos
    - Não valida consistência semântica entre campos
"""
# src/passenger_config/__init__.py
from .core.cascade import (
    merge_all_servers,
    merge_dir_config,
    merge_server_config,
    resolve_dir_config,
    resolve_server_config,
)
from .core.directives import DirectiveRegistry, build_default_registry
from .core.scope import ConfigContext, ConfigPool, create_dir_config, create_server_config

__all__ = [
    "ConfigContext",
    "ConfigPool",
    "DirectiveRegistry",
    "build_default_registry",
    "create_dir_config",
    "create_server_config",
    "merge_all_servers",
    "merge_dir_config",
    "merge_server_config",
    "resolve_dir_config",
    "resolve_server_config",
]
