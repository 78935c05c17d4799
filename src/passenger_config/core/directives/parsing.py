# src/passenger_config/core/directives/parsing.py
"""
Parsing de argumentos brutos de diretivas.

Inteiros seguem a semântica de `strtol(arg, &end, 10)` exigindo
`*end == '\\0'`: espaços à esquerda e sinal opcional são aceitos, nada pode
sobrar após os dígitos, e a string vazia vale 0 (nenhuma conversão, mas
também nenhum caractere sobrando).

Flags seguem a semântica de diretivas On/Off do host: "on"/"off" sem
distinção de maiúsculas, ou um `bool` já convertido.
"""

from __future__ import annotations

import re
from typing import Any, Optional

_INTEGER_RE = re.compile(r"[ \t\n\r\f\v]*[+-]?[0-9]+")


def parse_integer(arg: str) -> Optional[int]:
    """
    Converte `arg` para int em base 10, ou `None` se houver lixo após o número.

    Exemplos:
        "42"   -> 42
        " -3"  -> -3
        ""     -> 0
        "5x"   -> None
        "+"    -> None
    """
    if not isinstance(arg, str):
        return None
    if arg == "":
        return 0
    if _INTEGER_RE.fullmatch(arg) is None:
        return None
    return int(arg)


def parse_flag(arg: Any) -> Optional[bool]:
    """Converte um argumento On/Off para bool, ou `None` se não reconhecido."""
    if isinstance(arg, bool):
        return arg
    if isinstance(arg, str):
        lowered = arg.strip().lower()
        if lowered == "on":
            return True
        if lowered == "off":
            return False
    return None
