# tests/core/scope/test_records.py
"""
Testes dos registros de escopo (DirConfig / ServerConfig).

Os testes asseguram que:
- registros recém-criados têm todos os campos em "não definido"
- os limites do pool começam nos defaults do módulo, sem flag explícita
- `assign_from` sobrescreve o registro in-place, sem compartilhar estado
- `record_to_dict` produz estrutura serializável e ordenada
"""

from passenger_config.core.scope.records import (
    DEFAULT_MAX_INSTANCES_PER_APP,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_POOL_IDLE_TIME,
    ServerConfig,
    create_dir_config,
    create_server_config,
    record_to_dict,
)
from passenger_config.core.scope.types import SpawnMethod, TriState


def test_new_dir_config_is_fully_unset(pool):
    cfg = create_dir_config(pool)

    for name in (
        "enabled",
        "auto_detect_rails",
        "auto_detect_rack",
        "auto_detect_wsgi",
        "allow_mod_rewrite",
        "high_performance",
        "use_global_queue",
    ):
        assert getattr(cfg, name) is TriState.UNSET, name
    assert cfg.rails_env is None
    assert cfg.rack_env is None
    assert cfg.rails_app_root is None
    assert cfg.spawn_method is SpawnMethod.UNSET
    assert cfg.framework_spawner_timeout is None
    assert cfg.app_spawner_timeout is None
    assert (cfg.max_requests, cfg.max_requests_specified) == (0, False)
    assert (cfg.memory_limit, cfg.memory_limit_specified) == (0, False)
    assert cfg.rails_base_uris == set()
    assert cfg.rack_base_uris == set()


def test_new_server_config_defaults(pool):
    server = create_server_config(pool)

    assert server.ruby is None
    assert server.root is None
    assert server.log_level is None
    assert server.default_user is None
    assert (server.max_pool_size, server.max_pool_size_specified) == (DEFAULT_MAX_POOL_SIZE, False)
    assert (server.max_instances_per_app, server.max_instances_per_app_specified) == (
        DEFAULT_MAX_INSTANCES_PER_APP,
        False,
    )
    assert (server.pool_idle_time, server.pool_idle_time_specified) == (DEFAULT_POOL_IDLE_TIME, False)
    assert (server.user_switching, server.user_switching_specified) == (True, False)


def test_assign_from_overwrites_in_place():
    target = ServerConfig()
    source = ServerConfig(ruby="/usr/bin/ruby", max_pool_size=9, max_pool_size_specified=True)
    alias = target

    target.assign_from(source)

    assert alias.ruby == "/usr/bin/ruby"
    assert alias.max_pool_size == 9
    assert alias.max_pool_size_specified is True
    assert alias is not source


def test_record_to_dict_is_plain(pool):
    cfg = create_dir_config(pool)
    cfg.rails_base_uris.update({"/b", "/a"})
    cfg.enabled = TriState.ENABLED

    out = record_to_dict(cfg)
    assert out["rails_base_uris"] == ["/a", "/b"]
    assert out["enabled"] == "enabled"
    assert out["spawn_method"] == "unset"
