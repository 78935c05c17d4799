# src/passenger_config/core/directives/types.py
"""
Tipos canônicos da tabela de diretivas.

Este módulo define as estruturas que descrevem uma diretiva registrada e
a chamada concreta de um setter durante a carga da configuração.

Componentes principais:
    - ArgKind         → aridade da diretiva (TAKE1: uma string; FLAG: On/Off)
    - OverrideContext → flags de contexto que controlam onde a diretiva é aceita
    - Placement       → onde a diretiva está sendo declarada (servidor, diretório, .htaccess)
    - Directive       → entrada imutável da tabela (nome, setter, aridade, flags, ajuda)
    - DirectiveCall   → parâmetros explícitos entregues a cada setter

Decisões arquiteturais:
    - O registro de servidor corrente é entregue explicitamente no `DirectiveCall`;
      setters de escopo de servidor escrevem nele e ignoram o registro local
    - Não existe lookup global de configuração por identidade de módulo

Invariantes:
    - `Directive` é imutável
    - Um `DirectiveCall` referencia exatamente um registro de servidor

Limites explícitos:
    - Não valida argumentos (ver parsing/setters)
    - Não decide ordem de aplicação das diretivas
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Any, Callable, Optional

from ..scope.context import ConfigContext
from ..scope.records import DirConfig, ServerConfig


class ArgKind(str, Enum):
    """Aridade de uma diretiva."""
    TAKE1 = "take1"
    FLAG = "flag"


class OverrideContext(IntFlag):
    """
    Flags de contexto de override de uma diretiva.

    - RSRC_CONF: aceita no escopo de servidor / virtual host (fora de seções)
    - ACCESS_CONF: aceita dentro de seções de diretório / location
    - OR_OPTIONS, OR_LIMIT: aceitas também em arquivos de override por
      diretório quando o override correspondente é concedido
    - OR_ALL: todos os overrides por diretório
    """
    NONE = 0
    OR_LIMIT = 1
    OR_OPTIONS = 2
    OR_FILEINFO = 4
    OR_AUTHCFG = 8
    OR_INDEXES = 16
    ACCESS_CONF = 64
    RSRC_CONF = 128

    OR_ALL = OR_LIMIT | OR_OPTIONS | OR_FILEINFO | OR_AUTHCFG | OR_INDEXES


class Placement(str, Enum):
    """Local onde uma diretiva está sendo declarada."""
    SERVER = "server"
    DIRECTORY = "directory"
    HTACCESS = "htaccess"


# Setter: (call, dir_config, arg) -> None em sucesso, mensagem fixa em falha
Setter = Callable[["DirectiveCall", DirConfig, Any], Optional[str]]


@dataclass(frozen=True)
class Directive:
    """
    Entrada imutável da tabela de diretivas.

    Campos:
        - name: nome da diretiva (case-sensitive na tabela, case-insensitive no lookup)
        - setter: operação de validação + atribuição
        - arg_kind: TAKE1 ou FLAG
        - req_override: flags de contexto em que a diretiva é aceita
        - help: texto de ajuda exibido pelo host
        - deprecated_alias_of: nome da diretiva atual quando esta é um alias obsoleto
    """
    name: str
    setter: Setter
    arg_kind: ArgKind
    req_override: OverrideContext
    help: str
    deprecated_alias_of: Optional[str] = None

    @property
    def server_scoped(self) -> bool:
        return self.req_override == OverrideContext.RSRC_CONF

    def allowed_in(
        self,
        placement: Placement,
        allow_override: OverrideContext = OverrideContext.NONE,
    ) -> bool:
        or_bits = self.req_override & OverrideContext.OR_ALL
        if placement is Placement.SERVER:
            return bool(self.req_override & OverrideContext.RSRC_CONF) or bool(or_bits)
        if placement is Placement.DIRECTORY:
            return bool(self.req_override & OverrideContext.ACCESS_CONF) or bool(or_bits)
        return bool(or_bits & allow_override)


@dataclass
class DirectiveCall:
    """
    Parâmetros explícitos de uma invocação de setter.

    Substitui o lookup do "config do módulo corrente": o registro de servidor
    ao qual diretivas de escopo de servidor se aplicam vem neste objeto.
    """
    directive: Directive
    server: ServerConfig
    context: ConfigContext
    placement: Placement = Placement.SERVER
    section: Optional[str] = None
