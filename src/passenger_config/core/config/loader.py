# src/passenger_config/core/config/loader.py
"""
Loader de documentos de host.

Um documento de host descreve, de forma declarativa, o servidor principal,
seus virtual hosts e as locations de cada um, com as diretivas declaradas
em cada escopo, na ordem em que o host as encontraria:

    server:
      directives:
        - [PassengerRoot, /opt/passenger]
        - [PassengerMaxPoolSize, "3"]
      locations:
        /:
          - [PassengerEnabled, "on"]
    virtual_hosts:
      - name: app.test
        directives:
          - [RailsEnv, development]
        locations:
          /app:
            - [RailsBaseURI, /app]

O documento efetivo é resolvido a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional), combinado via `deep_merge`

Invariantes:
    - O resultado é sempre um dicionário puro
    - Overrides locais nunca mutam os defaults

Limites explícitos:
    - Não interpreta a sintaxe nativa de configuração do servidor
    - Não aplica diretivas (ver core.engine)
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    HostDocumentSyntaxError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

PathLike = Union[str, Path]


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


def _parse_json(text: str) -> Any:
    # JSON vazio é tratado como documento vazio, como no YAML
    return json.loads(text) if text.strip() else None


_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}

_SYNTAX_ERRORS = (yaml.YAMLError, json.JSONDecodeError)


def read_host_document(path: PathLike) -> Dict[str, Any]:
    """
    Lê um único documento de host do disco.

    Arquivos vazios são interpretados como documentos vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for YAML/JSON.
        HostDocumentSyntaxError: Se o conteúdo não puder ser interpretado.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    path = Path(path)
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or path.name}")
    if not path.is_file():
        raise DefaultsNotFoundError(f"Documento de host não encontrado: {path}")

    try:
        data = parser(path.read_text(encoding="utf-8"))
    except _SYNTAX_ERRORS as exc:
        raise HostDocumentSyntaxError(f"Documento de host ilegível ({path}): {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Documento de host deve ser dict, recebido: {type(data).__name__} ({path})"
        )
    return data


def load_host_document(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve o documento de host efetivo.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional e, quando existe, tem prioridade
        - Listas de diretivas do local substituem integralmente as dos defaults
        - Virtual hosts do local são combinados por nome com os dos defaults

    Args:
        defaults_path (PathLike): Caminho do documento base.
        local_path (Optional[PathLike]): Caminho opcional de overrides locais.

    Returns:
        Dict[str, Any]: Documento de host resolvido.

    Raises:
        DefaultsNotFoundError: Se o documento base não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        HostDocumentSyntaxError: Se algum documento for ilegível.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
        ConfigTypeConflictError: Se houver conflito estrutural durante o merge.
    """
    document = read_host_document(defaults_path)

    if local_path is not None and Path(local_path).exists():
        document = deep_merge(document, read_host_document(local_path))

    return document
