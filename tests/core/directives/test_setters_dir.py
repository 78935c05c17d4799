# tests/core/directives/test_setters_dir.py
"""
Testes dos setters de escopo de diretório e da diretiva obsoleta.

Os testes asseguram que:
- setters FLAG produzem ENABLED/DISABLED, nunca UNSET
- diretivas de URI base acumulam no conjunto (duplicatas colapsam)
- RailsSpawnMethod aceita apenas os três literais e, em falha, mantém UNSET
- timeouts de spawner aceitam 0 e rejeitam negativos
- RailsSpawnServer é aceita, não altera nada e emite o warning fixo
"""

from passenger_config.core.directives import setters as s
from passenger_config.core.directives.types import DirectiveCall
from passenger_config.core.scope.records import DirConfig, ServerConfig
from passenger_config.core.scope.types import SpawnMethod, TriState


def _call(registry, ctx, name):
    return DirectiveCall(directive=registry.get(name), server=ServerConfig(), context=ctx)


def test_flag_setters_produce_tristate(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "PassengerEnabled")

    assert s.cmd_passenger_enabled(c, cfg, False) is None
    assert cfg.enabled is TriState.DISABLED

    for setter, field_name in (
        (s.cmd_rails_auto_detect, "auto_detect_rails"),
        (s.cmd_rack_auto_detect, "auto_detect_rack"),
        (s.cmd_wsgi_auto_detect, "auto_detect_wsgi"),
        (s.cmd_rails_allow_mod_rewrite, "allow_mod_rewrite"),
        (s.cmd_passenger_high_performance, "high_performance"),
        (s.cmd_passenger_use_global_queue, "use_global_queue"),
    ):
        assert setter(c, cfg, True) is None
        assert getattr(cfg, field_name) is TriState.ENABLED, field_name


def test_base_uris_accumulate(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "RailsBaseURI")

    s.cmd_rails_base_uri(c, cfg, "/blog")
    s.cmd_rails_base_uri(c, cfg, "/shop")
    s.cmd_rails_base_uri(c, cfg, "/blog")
    s.cmd_rack_base_uri(c, cfg, "/api")

    assert cfg.rails_base_uris == {"/blog", "/shop"}
    assert cfg.rack_base_uris == {"/api"}


def test_environment_and_app_root(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "RailsEnv")

    s.cmd_rails_env(c, cfg, "staging")
    s.cmd_rack_env(c, cfg, "test")
    s.cmd_rails_app_root(c, cfg, "/srv/app")

    assert (cfg.rails_env, cfg.rack_env, cfg.rails_app_root) == ("staging", "test", "/srv/app")


def test_spawn_method_literals(registry, ctx):
    c = _call(registry, ctx, "RailsSpawnMethod")

    for literal, expected in (
        ("smart", SpawnMethod.SMART),
        ("smart-lv2", SpawnMethod.SMART_LV2),
        ("conservative", SpawnMethod.CONSERVATIVE),
    ):
        cfg = DirConfig()
        assert s.cmd_rails_spawn_method(c, cfg, literal) is None
        assert cfg.spawn_method is expected


def test_spawn_method_rejects_unknown_and_stays_unset(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "RailsSpawnMethod")

    assert s.cmd_rails_spawn_method(c, cfg, "turbo") == (
        "RailsSpawnMethod may only be 'smart', 'smart-lv2' or 'conservative'."
    )
    assert cfg.spawn_method is SpawnMethod.UNSET


def test_spawner_idle_times(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "RailsFrameworkSpawnerIdleTime")

    assert s.cmd_rails_framework_spawner_idle_time(c, cfg, "0") is None
    assert cfg.framework_spawner_timeout == 0
    assert (
        s.cmd_rails_framework_spawner_idle_time(c, cfg, "-5")
        == "Value for RailsFrameworkSpawnerIdleTime must be at least 0."
    )
    assert cfg.framework_spawner_timeout == 0

    assert s.cmd_rails_app_spawner_idle_time(c, cfg, "120") is None
    assert cfg.app_spawner_timeout == 120
    assert (
        s.cmd_rails_app_spawner_idle_time(c, cfg, "2m")
        == "Invalid number specified for RailsAppSpawnerIdleTime."
    )


def test_max_requests(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "PassengerMaxRequests")

    assert (
        s.cmd_passenger_max_requests(c, cfg, "-1")
        == "Value for PassengerMaxRequests must be greater than or equal to 0."
    )
    assert cfg.max_requests_specified is False

    assert s.cmd_passenger_max_requests(c, cfg, "0") is None
    assert (cfg.max_requests, cfg.max_requests_specified) == (0, True)


def test_obsolete_spawn_server_warns_and_changes_nothing(registry, ctx):
    cfg = DirConfig()
    c = _call(registry, ctx, "RailsSpawnServer")
    server_before = ServerConfig()

    assert s.cmd_rails_spawn_server(c, cfg, "/usr/bin/passenger-spawn-server") is None

    assert cfg == DirConfig()
    assert c.server == server_before
    assert ctx.warnings["RailsSpawnServer"] == [s.OBSOLETE_SPAWN_SERVER_WARNING]
    assert ctx.events_at("WARNING")[0]["argument"] == "/usr/bin/passenger-spawn-server"
