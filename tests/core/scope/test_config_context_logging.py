# tests/core/scope/test_config_context_logging.py
"""
Testes de logging estruturado e warnings do ConfigContext.

Este módulo valida que o ConfigContext:
- registra eventos estruturados com `load_id` e `scope`
- agrupa warnings pelo escopo que os gerou
- escreve warnings no stream de diagnóstico quando configurado

Decisões arquiteturais:
    - Logs são eventos estruturados, não strings livres
    - Warnings não interrompem a carga

Limites explícitos:
    - Não valida persistência de eventos
    - Não valida setters ou merges
"""

import io


def test_log_records_structured_event(ctx):
    """
    Verifica que `log` produz um evento com os campos canônicos mais os extras.
    """
    ctx.log(scope="PassengerRoot", level="INFO", message="applied", section="/app")

    assert len(ctx.events) == 1
    event = ctx.events[0]
    assert event["load_id"] == "load-test-001"
    assert event["scope"] == "PassengerRoot"
    assert event["level"] == "INFO"
    assert event["message"] == "applied"
    assert event["section"] == "/app"
    assert "timestamp" in event


def test_events_at_filters_by_level(ctx):
    ctx.log(scope="a", level="DEBUG", message="x")
    ctx.log(scope="b", level="WARNING", message="y")
    ctx.log(scope="c", level="DEBUG", message="z")

    assert [e["scope"] for e in ctx.events_at("DEBUG")] == ["a", "c"]
    assert [e["scope"] for e in ctx.events_at("WARNING")] == ["b"]


def test_warnings_grouped_by_scope(ctx):
    ctx.add_warning(scope="RailsSpawnServer", message="w1")
    ctx.add_warning(scope="RailsSpawnServer", message="w2")
    ctx.add_warning(scope="PassengerLogLevel", message="w3")

    assert ctx.warnings == {
        "RailsSpawnServer": ["w1", "w2"],
        "PassengerLogLevel": ["w3"],
    }


def test_warning_written_to_diagnostic_stream():
    from passenger_config.core.scope.context import ConfigContext

    stream = io.StringIO()
    ctx = ConfigContext(load_id="load-stream", diagnostic_stream=stream)
    ctx.add_warning(scope="RailsSpawnServer", message="obsolete")

    assert stream.getvalue() == "obsolete\n"
