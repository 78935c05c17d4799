# src/passenger_config/core/scope/context.py
"""
Contexto explícito de uma carga de configuração.

Este módulo define o `ConfigContext`, a estrutura canônica passada por
referência através de toda a cadeia de carga (setters, merges,
normalização), substituindo qualquer lookup global de configuração por
identidade de módulo.

O ConfigContext atua como o único meio permitido de:
    - registro de eventos de log estruturados da carga
    - coleta de warnings não fatais associados a diretivas
    - emissão de avisos no stream de diagnóstico do processo

Princípios fundamentais:
    - Isolamento por carga (cada carga possui seu próprio contexto)
    - Ausência de estado global compartilhado
    - Estrutura simples e testável

Invariantes:
    - Eventos sempre incluem `load_id` e `scope`
    - Warnings são agrupados pelo nome da diretiva (ou escopo) que os gerou

Limites explícitos:
    - Não aplica diretivas
    - Não decide se uma carga deve ser abortada
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TextIO


@dataclass
class ConfigContext:
    """
    Contexto de diagnóstico compartilhado de uma carga de configuração.

    Decisões arquiteturais:
        - Logs são eventos estruturados, não strings livres
        - Warnings não interrompem a carga
        - O stream de diagnóstico é opcional; quando presente, recebe
          uma linha de texto por warning (o host passa `sys.stderr`)
    """
    load_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    diagnostic_stream: Optional[TextIO] = field(default=None, repr=False)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "load_id": self.load_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, scope: str, message: str) -> None:
        if scope not in self.warnings:
            self.warnings[scope] = []
        self.warnings[scope].append(message)

        if self.diagnostic_stream is not None:
            self.diagnostic_stream.write(message + "\n")
            self.diagnostic_stream.flush()

    def events_at(self, level: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("level") == level]
