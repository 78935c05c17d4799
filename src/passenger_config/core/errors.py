"""
Passenger Config — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Passenger Config.
Erros de configuração são exibidos pelo host durante a inicialização e
tratados como fatais para aquela carga, devendo ser:

- explícitos
- serializáveis
- localizados na diretiva que os causou
- acionáveis

Nenhuma correção silenciosa é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigErrorPayload:
    """
    Payload canônico de erro do Passenger Config.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem fixa e humana (a mesma devolvida pelo setter ao host)
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Diretivas
DIRECTIVE_INVALID_VALUE = "DIRECTIVE_INVALID_VALUE"
DIRECTIVE_NOT_ALLOWED = "DIRECTIVE_NOT_ALLOWED"
DIRECTIVE_UNKNOWN = "DIRECTIVE_UNKNOWN"

# Documento de host
HOST_DOCUMENT_INVALID = "HOST_DOCUMENT_INVALID"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def directive_invalid_value(
    *,
    directive: str,
    message: str,
    argument: Any = None,
    section: Optional[str] = None,
    hint: str = "Corrija o valor da diretiva indicada; a carga da configuração foi interrompida.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=DIRECTIVE_INVALID_VALUE,
        message=message,
        details={
            "directive": directive,
            "argument": argument,
            "section": section,
        },
        hint=hint,
    )


def directive_not_allowed(
    *,
    directive: str,
    placement: str,
    section: Optional[str] = None,
    hint: str = "Mova a diretiva para um contexto onde ela é permitida (ex.: escopo de servidor).",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=DIRECTIVE_NOT_ALLOWED,
        message=f"{directive} not allowed here",
        details={
            "directive": directive,
            "placement": placement,
            "section": section,
        },
        hint=hint,
    )


def directive_unknown(
    *,
    directive: str,
    known: Optional[List[str]] = None,
    hint: str = "Verifique a grafia da diretiva ou se o módulo correto está carregado.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=DIRECTIVE_UNKNOWN,
        message=(
            f"Invalid command '{directive}', perhaps misspelled or defined by a module "
            "not included in the server configuration"
        ),
        details={
            "directive": directive,
            "known": list(known or []),
        },
        hint=hint,
    )


def host_document_invalid(
    *,
    message: str = "Documento de host inválido",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a estrutura do documento (server, virtual_hosts, locations, directives).",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=HOST_DOCUMENT_INVALID,
        message=message,
        details=details or {},
        hint=hint,
    )
