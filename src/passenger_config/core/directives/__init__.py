# src/passenger_config/core/directives/__init__.py
"""
# Diretivas — Passenger Config

Este pacote define a **tabela declarativa de diretivas** e os **setters**
que validam e atribuem valores aos registros de escopo.

## Componentes

- **types**: `ArgKind`, `OverrideContext`, `Placement`, `Directive`, `DirectiveCall`
- **parsing**: `parse_integer` (semântica strtol base 10), `parse_flag` (On/Off)
- **setters**: uma operação de validação + atribuição por diretiva
- **registry**: `DirectiveRegistry` e `build_default_registry`

## Contrato dos setters

- `None` em sucesso
- mensagem fixa e legível em falha; o campo permanece intocado
"""

from .parsing import parse_flag, parse_integer
from .registry import DirectiveRegistry, DuplicateDirectiveError, build_default_registry
from .setters import OBSOLETE_SPAWN_SERVER_WARNING, SPAWN_METHOD_ERROR
from .types import ArgKind, Directive, DirectiveCall, OverrideContext, Placement

__all__ = [
    "ArgKind",
    "Directive",
    "DirectiveCall",
    "DirectiveRegistry",
    "DuplicateDirectiveError",
    "OBSOLETE_SPAWN_SERVER_WARNING",
    "OverrideContext",
    "Placement",
    "SPAWN_METHOD_ERROR",
    "build_default_registry",
    "parse_flag",
    "parse_integer",
]
