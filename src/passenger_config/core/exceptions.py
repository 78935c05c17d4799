"""
Passenger Config — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Passenger Config.

Objetivo:
- Permitir que o engine interrompa a carga com exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ConfigErrorPayload
- Evitar ValueError/RuntimeError genéricos em falhas de diretiva

Regras:
- Setters não levantam estas exceções: devolvem a mensagem fixa ao chamador.
- O registry constrói as exceções a partir dos helpers de `errors` (`from_payload`).
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import (
    ConfigErrorPayload,
    DIRECTIVE_INVALID_VALUE,
    DIRECTIVE_NOT_ALLOWED,
    DIRECTIVE_UNKNOWN,
    HOST_DOCUMENT_INVALID,
)


@dataclass(frozen=True)
class PassengerConfigException(Exception):
    """Base class para exceções internas do Passenger Config.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser a mensagem fixa exibida pelo host
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    error_type = "PASSENGER_CONFIG_ERROR"

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: ConfigErrorPayload) -> "PassengerConfigException":
        return cls(message=payload.message, details=dict(payload.details), hint=payload.hint)

    def to_payload(self) -> ConfigErrorPayload:
        return ConfigErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Diretivas
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectiveValidationError(PassengerConfigException):
    """Setter rejeitou o argumento da diretiva (número inválido, fora de faixa, escolha inválida)."""

    error_type = DIRECTIVE_INVALID_VALUE


@dataclass(frozen=True)
class DirectiveNotAllowedError(PassengerConfigException):
    """Diretiva declarada em um contexto não permitido pelas suas flags de override."""

    error_type = DIRECTIVE_NOT_ALLOWED


@dataclass(frozen=True)
class UnknownDirectiveError(PassengerConfigException):
    """Nome de diretiva não registrado."""

    error_type = DIRECTIVE_UNKNOWN


# ---------------------------------------------------------------------------
# Documento de host
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HostDocumentError(PassengerConfigException):
    """Estrutura do documento de host inválida."""

    error_type = HOST_DOCUMENT_INVALID
