# src/passenger_config/core/config/errors.py
"""
Exceções da camada de documentos de host.

Estas exceções representam falhas ao localizar, ler ou combinar os
documentos declarativos que descrevem servidores, virtual hosts e
locations. Falhas de diretivas individuais não pertencem a esta
hierarquia (ver core.exceptions).

Invariantes:
    - Todas as exceções desta camada herdam de `ConfigError`
    - Nenhuma exceção aqui implica aplicação parcial de diretivas
"""


class ConfigError(Exception):
    """
    Exceção base para erros de documentos de host.

    Permite capturar de forma genérica qualquer falha de leitura ou
    combinação de documentos, distinguindo-as de falhas de diretivas.
    """


class DefaultsNotFoundError(ConfigError):
    """
    O documento de host base (defaults) não existe no caminho indicado.

    Decisões arquiteturais:
        - O documento base é obrigatório; o local é opcional
        - Nenhum documento é inferido ou criado automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do documento não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge de documentos.

    Exemplo de conflito:
        - base:     {"server": {"directives": [...]}}
        - override: {"server": "app.test"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class HostDocumentSyntaxError(ConfigError):
    """O conteúdo do documento não é YAML/JSON válido."""
