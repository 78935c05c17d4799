# tests/core/scope/test_config_pool.py
"""
Testes do ConfigPool (vida útil delimitada por escopo).

Os testes asseguram que:
- registros criados contra um pool são liberados na destruição
- callbacks de liberação executam em ordem inversa de registro
- sub-pools são destruídos antes do pool pai
- um pool destruído recusa novos registros
- a saída do bloco `with` destrói o pool mesmo em caso de exceção

Limites explícitos:
    - Não valida merges nem diretivas
"""

import pytest

try:
    from passenger_config.core.scope.pool import ConfigPool, PoolDestroyedError
    from passenger_config.core.scope.records import (
        DirConfig,
        ServerConfig,
        create_dir_config,
        create_server_config,
    )
except Exception as e:  # noqa: BLE001
    ConfigPool = None
    PoolDestroyedError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing ConfigPool. Implement:\n"
            "- src/passenger_config/core/scope/pool.py (ConfigPool, PoolDestroyedError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_records_are_owned_until_destroy():
    _require_imports()
    pool = ConfigPool("load")
    dir_cfg = create_dir_config(pool)
    server = create_server_config(pool)

    assert isinstance(dir_cfg, DirConfig)
    assert isinstance(server, ServerConfig)
    assert len(pool.owned) == 2

    pool.destroy()
    assert pool.owned == []
    assert pool.destroyed is True


def test_cleanups_run_in_reverse_order():
    """
    Verifica que os callbacks de liberação executam em ordem LIFO,
    exatamente uma vez cada, mesmo com `destroy()` chamado duas vezes.
    """
    _require_imports()
    calls = []
    pool = ConfigPool("load")
    pool.register_cleanup(lambda: calls.append("first"))
    pool.adopt("record", on_release=lambda r: calls.append(f"release:{r}"))
    pool.register_cleanup(lambda: calls.append("last"))

    pool.destroy()
    pool.destroy()
    assert calls == ["last", "release:record", "first"]


def test_subpools_destroyed_before_parent():
    _require_imports()
    calls = []
    parent = ConfigPool("process")
    child = parent.subpool("config")
    parent.register_cleanup(lambda: calls.append("parent"))
    child.register_cleanup(lambda: calls.append("child"))

    parent.destroy()
    assert calls == ["child", "parent"]
    assert child.destroyed is True


def test_destroyed_pool_rejects_registrations():
    _require_imports()
    pool = ConfigPool("load")
    pool.destroy()

    with pytest.raises(PoolDestroyedError):
        create_dir_config(pool)
    with pytest.raises(PoolDestroyedError):
        pool.register_cleanup(lambda: None)
    with pytest.raises(PoolDestroyedError):
        pool.subpool("late")


def test_context_manager_releases_on_error():
    """
    Verifica que sair do bloco `with` por exceção ainda libera os registros.
    A exceção original é propagada sem alteração.
    """
    _require_imports()
    released = []

    with pytest.raises(RuntimeError, match="boom"):
        with ConfigPool("load") as pool:
            pool.adopt("record", on_release=released.append)
            raise RuntimeError("boom")

    assert released == ["record"]
    assert pool.destroyed is True


def test_release_removes_record_by_identity():
    """
    Dois registros iguais por valor continuam distintos para o pool:
    liberar um deles não pode remover o outro.
    """
    _require_imports()
    first, second = DirConfig(), DirConfig()
    assert first == second
    seen = []
    pool = ConfigPool("load")
    pool.adopt(first, on_release=lambda r: seen.append([o is r for o in pool.owned]))
    pool.adopt(second)

    pool.destroy()
    assert seen == [[True]]
