# src/passenger_config/core/scope/pool.py
"""
Pool de configuração com vida útil delimitada por escopo.

Este módulo define o `ConfigPool`, o dono dos registros de escopo criados
durante uma carga de configuração. Todo registro criado via
`create_dir_config` / `create_server_config` é adotado por um pool, e sua
liberação é registrada no momento da criação.

Decisões arquiteturais:
    - O pool é um context manager: sair do bloco `with` destrói o pool,
      tanto em saída normal quanto por exceção
    - Callbacks de liberação executam em ordem inversa de registro
    - Sub-pools são destruídos antes do pool pai
    - Um pool destruído recusa novos registros

Invariantes:
    - Cada callback de liberação executa exatamente uma vez
    - Após `destroy()`, o pool não mantém referência a nenhum registro

Limites explícitos:
    - Não gerencia memória de fato (o coletor do Python é o responsável)
    - Não é thread-safe: a fase de carga é estritamente serial
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


class PoolDestroyedError(RuntimeError):
    """Registro solicitado em um pool que já foi destruído."""


@dataclass(eq=False)
class ConfigPool:
    """
    Dono de registros de configuração com liberação garantida.

    Exemplo:
        with ConfigPool("config") as pool:
            dir_cfg = create_dir_config(pool)
            ...
        # aqui todos os registros foram liberados
    """

    name: str = "config"
    parent: Optional["ConfigPool"] = field(default=None, repr=False)

    _cleanups: List[Callable[[], None]] = field(default_factory=list, init=False, repr=False)
    _owned: List[Any] = field(default_factory=list, init=False, repr=False)
    _children: List["ConfigPool"] = field(default_factory=list, init=False, repr=False)
    destroyed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.parent is not None:
            self.parent._adopt_child(self)

    def _adopt_child(self, child: "ConfigPool") -> None:
        self.ensure_alive()
        self._children.append(child)

    def ensure_alive(self) -> None:
        if self.destroyed:
            raise PoolDestroyedError(f"Pool '{self.name}' já foi destruído")

    def subpool(self, name: str) -> "ConfigPool":
        return ConfigPool(name=name, parent=self)

    def register_cleanup(self, callback: Callable[[], None]) -> None:
        self.ensure_alive()
        self._cleanups.append(callback)

    def adopt(self, record: Any, on_release: Optional[Callable[[Any], None]] = None) -> Any:
        """
        Adota um registro e agenda sua liberação para a destruição do pool.

        Args:
            record: Registro de escopo recém-criado.
            on_release: Callback opcional invocado com o registro na liberação.

        Returns:
            O próprio registro, para encadeamento.
        """
        self.ensure_alive()
        self._owned.append(record)

        def _release() -> None:
            if on_release is not None:
                on_release(record)
            # por identidade: registros distintos podem ser iguais por valor
            for index, owned in enumerate(self._owned):
                if owned is record:
                    del self._owned[index]
                    break

        self._cleanups.append(_release)
        return record

    @property
    def owned(self) -> List[Any]:
        return list(self._owned)

    def destroy(self) -> None:
        if self.destroyed:
            return
        for child in reversed(self._children):
            child.destroy()
        self._children.clear()

        # marca antes de rodar os callbacks: nenhum callback pode registrar outro
        self.destroyed = True
        errors: List[BaseException] = []
        while self._cleanups:
            callback = self._cleanups.pop()
            try:
                callback()
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)
        self._owned.clear()

        if errors:
            raise errors[0]

    def __enter__(self) -> "ConfigPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()
