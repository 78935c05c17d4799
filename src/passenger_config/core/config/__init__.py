# src/passenger_config/core/config/__init__.py
"""
Camada de documentos de host do Passenger Config.

Este pacote carrega, combina e identifica os documentos declarativos que
descrevem quais diretivas são declaradas em quais escopos.

Responsabilidades do pacote:
    - Carregamento de documentos YAML/JSON (defaults + overrides locais)
    - Deep-merge determinístico de documentos
    - Hash canônico de configurações efetivas

Limites explícitos:
    - Não aplica diretivas
    - Não interpreta a sintaxe nativa do servidor
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    HostDocumentSyntaxError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import canonical_json, compute_config_hash
from .loader import load_host_document, read_host_document
from .merge import deep_merge, merge_virtual_hosts

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "HostDocumentSyntaxError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "canonical_json",
    "compute_config_hash",
    "deep_merge",
    "load_host_document",
    "merge_virtual_hosts",
    "read_host_document",
]
