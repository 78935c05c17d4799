# src/passenger_config/core/scope/types.py
"""
Tipos canônicos dos registros de escopo do Passenger Config.

Este módulo define os enums que representam valores "possivelmente não
definidos" nos registros de escopo, eliminando o uso de inteiros sentinela
(-1, 0) e ponteiros nulos como marcadores de herança.

Componentes principais:
    - TriState    → UNSET / ENABLED / DISABLED para campos booleanos herdáveis
    - SpawnMethod → estratégia de spawn (UNSET / smart / smart-lv2 / conservative)

Princípios fundamentais:
    - "Não definido" é um valor explícito do domínio, nunca um valor válido reaproveitado
    - Os valores textuais dos enums são estáveis e serializáveis
    - A regra de merge de tri-state é uma função pura e total

Invariantes:
    - Um setter nunca atribui UNSET; UNSET existe apenas na criação do registro
    - `TriState.merge(base, override)` retorna `override` se definido, senão `base`

Limites explícitos:
    - Não contém regras de merge de registros completos
    - Não valida argumentos de diretivas
"""

from __future__ import annotations

from enum import Enum


class TriState(str, Enum):
    """
    Valor booleano com estado explícito de "não definido".

    Usado por todos os campos de diretório que precisam distinguir
    "desligado explicitamente" de "herdar do escopo pai".

    Estados definidos:
        - UNSET: nenhuma diretiva atribuiu valor neste escopo
        - ENABLED: diretiva atribuiu valor verdadeiro
        - DISABLED: diretiva atribuiu valor falso

    Invariantes:
        - `from_flag` nunca produz UNSET
        - `merge` é total e não possui modo de falha
    """
    UNSET = "unset"
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_flag(cls, value: bool) -> "TriState":
        return cls.ENABLED if value else cls.DISABLED

    @staticmethod
    def merge(base: "TriState", override: "TriState") -> "TriState":
        return base if override is TriState.UNSET else override

    @property
    def is_set(self) -> bool:
        return self is not TriState.UNSET

    def resolve(self, default: bool) -> bool:
        """Converte para bool, usando `default` quando UNSET."""
        if self is TriState.UNSET:
            return default
        return self is TriState.ENABLED


class SpawnMethod(str, Enum):
    """
    Estratégia de spawn de instâncias de aplicação.

    Os valores textuais (exceto UNSET) são exatamente os literais aceitos
    pela diretiva `RailsSpawnMethod`.
    """
    UNSET = "unset"
    SMART = "smart"
    SMART_LV2 = "smart-lv2"
    CONSERVATIVE = "conservative"

    @classmethod
    def choices(cls) -> tuple:
        return (cls.SMART.value, cls.SMART_LV2.value, cls.CONSERVATIVE.value)

    @classmethod
    def from_literal(cls, literal: str) -> "SpawnMethod":
        if literal not in cls.choices():
            raise ValueError(literal)
        return cls(literal)
