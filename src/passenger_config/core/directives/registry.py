# src/passenger_config/core/directives/registry.py
"""
Registro declarativo de diretivas do Passenger Config.

Este módulo define o `DirectiveRegistry`, responsável por mapear nomes de
diretivas para seus setters, aridade e flags de contexto, e por despachar
a aplicação de uma diretiva sobre um registro de escopo.

O registry atua como a camada entre o host (que descobre diretivas ao
interpretar seu arquivo de configuração) e os setters, garantindo que:
    - cada diretiva possua um nome único (sem distinção de maiúsculas)
    - a ordem de declaração da tabela seja preservada
    - a diretiva só seja aplicada em contextos permitidos por suas flags
    - argumentos FLAG sejam convertidos para `bool` antes do setter

Responsabilidades do módulo:
    - Validar unicidade de nomes de diretivas
    - Expor a tabela padrão do módulo (`build_default_registry`)
    - Despachar diretivas no contrato do host (`dispatch` → None | mensagem)
    - Despachar diretivas no contrato do engine (`apply` → exceção tipada)

Invariantes:
    - Cada nome registrado é único
    - Um setter só é invocado após a checagem de contexto e de aridade
    - Uma falha nunca deixa o registro parcialmente alterado

Limites explícitos:
    - Não interpreta sintaxe de arquivos de configuração
    - Não decide ordem de merge de escopos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import directive_invalid_value, directive_not_allowed, directive_unknown
from ..exceptions import (
    DirectiveNotAllowedError,
    DirectiveValidationError,
    PassengerConfigException,
    UnknownDirectiveError,
)
from ..scope.context import ConfigContext
from ..scope.records import DirConfig, ServerConfig
from . import setters as s
from .parsing import parse_flag
from .types import ArgKind, Directive, DirectiveCall, OverrideContext, Placement, Setter


class DuplicateDirectiveError(ValueError):
    """
    Exceção levantada quando dois registros usam o mesmo nome de diretiva.

    Decisões arquiteturais:
        - Nomes de diretivas são únicos sem distinção de maiúsculas
        - A duplicidade é tratada como erro fatal na montagem da tabela
    """


@dataclass
class DirectiveRegistry:
    """
    Tabela canônica de diretivas com despacho validado.

    Decisões arquiteturais:
        - O lookup é case-insensitive, como no host
        - A ordem de inserção é preservada separadamente
        - O despacho recebe o registro de servidor explicitamente

    Este registro existe para garantir que toda diretiva aplicada
    passe pelas mesmas checagens, na mesma ordem.
    """

    _directives: Dict[str, Directive] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, directive: Directive) -> None:
        name = getattr(directive, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("directive.name must be a non-empty string")

        key = name.lower()
        if key in self._directives:
            raise DuplicateDirectiveError(f"Duplicate directive: {name}")

        self._directives[key] = directive
        self._order.append(key)

    def register(
        self,
        name: str,
        setter: Setter,
        arg_kind: ArgKind,
        req_override: OverrideContext,
        help: str,
        deprecated_alias_of: Optional[str] = None,
    ) -> Directive:
        directive = Directive(
            name=name,
            setter=setter,
            arg_kind=arg_kind,
            req_override=req_override,
            help=help,
            deprecated_alias_of=deprecated_alias_of,
        )
        self.add(directive)
        return directive

    def get(self, name: str) -> Directive:
        return self._directives[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._directives

    def list(self) -> List[Directive]:
        return [self._directives[key] for key in self._order]

    def names(self) -> List[str]:
        return [d.name for d in self.list()]

    # -----------------------------
    # Despacho
    # -----------------------------
    def apply(
        self,
        name: str,
        arg: Any,
        *,
        config: DirConfig,
        server: ServerConfig,
        context: ConfigContext,
        placement: Placement = Placement.SERVER,
        section: Optional[str] = None,
        allow_override: OverrideContext = OverrideContext.NONE,
    ) -> Directive:
        """
        Aplica uma diretiva, levantando exceção tipada em qualquer falha.

        Args:
            name (str): Nome da diretiva.
            arg (Any): Argumento bruto (string para TAKE1, On/Off ou bool para FLAG).
            config (DirConfig): Registro de diretório do escopo corrente.
            server (ServerConfig): Registro do servidor corrente.
            context (ConfigContext): Contexto de diagnóstico da carga.
            placement (Placement): Onde a diretiva foi declarada.
            section (Optional[str]): Caminho da seção (location), se houver.
            allow_override (OverrideContext): Overrides concedidos em `.htaccess`.

        Returns:
            Directive: A entrada da tabela aplicada.

        Raises:
            UnknownDirectiveError: Se o nome não estiver registrado.
            DirectiveNotAllowedError: Se o contexto não for permitido pelas flags.
            DirectiveValidationError: Se o setter rejeitar o argumento.
        """
        if name not in self:
            raise UnknownDirectiveError.from_payload(directive_unknown(directive=name))
        directive = self.get(name)

        if not directive.allowed_in(placement, allow_override):
            raise DirectiveNotAllowedError.from_payload(
                directive_not_allowed(
                    directive=directive.name, placement=placement.value, section=section
                )
            )

        value: Any = arg
        message: Optional[str] = None
        if directive.arg_kind is ArgKind.FLAG:
            value = parse_flag(arg)
            if value is None:
                message = f"{directive.name} must be On or Off"
        elif not isinstance(arg, str):
            message = f"{directive.name} takes one argument, {directive.help}"

        if message is None:
            call = DirectiveCall(
                directive=directive,
                server=server,
                context=context,
                placement=placement,
                section=section,
            )
            message = directive.setter(call, config, value)

        if message is not None:
            raise DirectiveValidationError.from_payload(
                directive_invalid_value(
                    directive=directive.name, message=message, argument=arg, section=section
                )
            )

        if directive.deprecated_alias_of is not None:
            context.log(
                scope=directive.name,
                level="INFO",
                message=f"deprecated alias of {directive.deprecated_alias_of}",
            )
        return directive

    def dispatch(
        self,
        name: str,
        arg: Any,
        *,
        config: DirConfig,
        server: ServerConfig,
        context: ConfigContext,
        placement: Placement = Placement.SERVER,
        section: Optional[str] = None,
        allow_override: OverrideContext = OverrideContext.NONE,
    ) -> Optional[str]:
        """
        Aplica uma diretiva no contrato do host: `None` em sucesso,
        mensagem fixa em falha (exibida pelo host e fatal para a carga).
        """
        try:
            self.apply(
                name,
                arg,
                config=config,
                server=server,
                context=context,
                placement=placement,
                section=section,
                allow_override=allow_override,
            )
        except PassengerConfigException as exc:
            return exc.message
        return None


_DIR_OPTIONS = OverrideContext.OR_OPTIONS | OverrideContext.ACCESS_CONF | OverrideContext.RSRC_CONF
_DIR_LIMIT = OverrideContext.OR_LIMIT | OverrideContext.ACCESS_CONF | OverrideContext.RSRC_CONF
_SERVER = OverrideContext.RSRC_CONF


def build_default_registry() -> DirectiveRegistry:
    """
    Monta a tabela padrão de diretivas do módulo, na ordem canônica.

    Inclui as diretivas atuais, os aliases obsoletos (que reutilizam os
    setters atuais sem alteração) e a diretiva obsoleta `RailsSpawnServer`.
    """
    reg = DirectiveRegistry()
    take1, flag = ArgKind.TAKE1, ArgKind.FLAG

    # Passenger settings.
    reg.register("PassengerRoot", s.cmd_passenger_root, take1, _SERVER,
                 "The Passenger root folder.")
    reg.register("PassengerLogLevel", s.cmd_passenger_log_level, take1, _SERVER,
                 "Passenger log verbosity.")
    reg.register("PassengerRuby", s.cmd_passenger_ruby, take1, _SERVER,
                 "The Ruby interpreter to use.")
    reg.register("PassengerMaxPoolSize", s.cmd_passenger_max_pool_size, take1, _SERVER,
                 "The maximum number of simultaneously alive application instances.")
    reg.register("PassengerMaxInstancesPerApp", s.cmd_passenger_max_instances_per_app, take1, _SERVER,
                 "The maximum number of simultaneously alive application instances a single "
                 "application may occupy.")
    reg.register("PassengerPoolIdleTime", s.cmd_passenger_pool_idle_time, take1, _SERVER,
                 "The maximum number of seconds that an application may be idle before it gets "
                 "terminated.")
    reg.register("PassengerUseGlobalQueue", s.cmd_passenger_use_global_queue, flag, _DIR_OPTIONS,
                 "Enable or disable Passenger's global queuing mode.")
    reg.register("PassengerUserSwitching", s.cmd_passenger_user_switching, flag, _SERVER,
                 "Whether to enable user switching support.")
    reg.register("PassengerDefaultUser", s.cmd_passenger_default_user, take1, _SERVER,
                 "The user that Rails/Rack applications must run as when user switching fails "
                 "or is disabled.")
    reg.register("PassengerMaxRequests", s.cmd_passenger_max_requests, take1, _DIR_LIMIT,
                 "The maximum number of requests that an application instance may process.")
    reg.register("PassengerHighPerformance", s.cmd_passenger_high_performance, flag,
                 OverrideContext.ACCESS_CONF | OverrideContext.RSRC_CONF,
                 "Enable or disable Passenger's high performance mode.")
    reg.register("PassengerEnabled", s.cmd_passenger_enabled, flag, OverrideContext.OR_ALL,
                 "Enable or disable Phusion Passenger.")

    # Rails-specific settings.
    reg.register("RailsBaseURI", s.cmd_rails_base_uri, take1, _DIR_OPTIONS,
                 "Reserve the given URI to a Rails application.")
    reg.register("RailsAutoDetect", s.cmd_rails_auto_detect, flag, _SERVER,
                 "Whether auto-detection of Ruby on Rails applications should be enabled.")
    reg.register("RailsAllowModRewrite", s.cmd_rails_allow_mod_rewrite, flag, _SERVER,
                 "Whether custom mod_rewrite rules should be allowed.")
    reg.register("RailsEnv", s.cmd_rails_env, take1, _DIR_OPTIONS,
                 "The environment under which a Rails app must run.")
    reg.register("RailsAppRoot", s.cmd_rails_app_root, take1, _DIR_OPTIONS,
                 "Overrides the Rails application root")
    reg.register("RailsSpawnMethod", s.cmd_rails_spawn_method, take1, _SERVER,
                 "The spawn method to use.")
    reg.register("RailsFrameworkSpawnerIdleTime", s.cmd_rails_framework_spawner_idle_time, take1,
                 _SERVER,
                 "The maximum number of seconds that a framework spawner may be idle before it "
                 "is shutdown.")
    reg.register("RailsAppSpawnerIdleTime", s.cmd_rails_app_spawner_idle_time, take1, _SERVER,
                 "The maximum number of seconds that an application spawner may be idle before "
                 "it is shutdown.")

    # Rack-specific settings.
    reg.register("RackBaseURI", s.cmd_rack_base_uri, take1, _DIR_OPTIONS,
                 "Reserve the given URI to a Rack application.")
    reg.register("RackAutoDetect", s.cmd_rack_auto_detect, flag, _SERVER,
                 "Whether auto-detection of Rack applications should be enabled.")
    reg.register("RackEnv", s.cmd_rack_env, take1, _DIR_OPTIONS,
                 "The environment under which a Rack app must run.")

    # WSGI-specific settings.
    reg.register("PassengerWSGIAutoDetect", s.cmd_wsgi_auto_detect, flag, _SERVER,
                 "Whether auto-detection of WSGI applications should be enabled.")

    # Backwards compatibility options.
    reg.register("RailsRuby", s.cmd_passenger_ruby, take1, _SERVER,
                 "Deprecated option.", deprecated_alias_of="PassengerRuby")
    reg.register("RailsMaxPoolSize", s.cmd_passenger_max_pool_size, take1, _SERVER,
                 "Deprecated option.", deprecated_alias_of="PassengerMaxPoolSize")
    reg.register("RailsMaxInstancesPerApp", s.cmd_passenger_max_instances_per_app, take1, _SERVER,
                 "Deprecated option", deprecated_alias_of="PassengerMaxInstancesPerApp")
    reg.register("RailsPoolIdleTime", s.cmd_passenger_pool_idle_time, take1, _SERVER,
                 "Deprecated option.", deprecated_alias_of="PassengerPoolIdleTime")
    reg.register("RailsUserSwitching", s.cmd_passenger_user_switching, flag, _SERVER,
                 "Deprecated option.", deprecated_alias_of="PassengerUserSwitching")
    reg.register("RailsDefaultUser", s.cmd_passenger_default_user, take1, _SERVER,
                 "Deprecated option.", deprecated_alias_of="PassengerDefaultUser")

    # Obsolete options.
    reg.register("RailsSpawnServer", s.cmd_rails_spawn_server, take1, _SERVER,
                 "Obsolete option.")

    return reg
