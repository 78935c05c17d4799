# src/passenger_config/core/engine/engine.py
"""
Engine de carga de configuração do Passenger Config.

Orquestra, na mesma ordem em que o servidor hospedeiro o faria, o ciclo
completo de uma carga a partir de um documento de host:

    1. cria o `ServerConfig` e o `DirConfig` padrão do servidor principal
       e aplica suas diretivas
    2. para cada virtual host: cria ambos os registros, aplica as diretivas
       e combina servidor principal → virtual host (merge de servidor e de
       diretório)
    3. para cada location: cria o registro e aplica as diretivas com
       `Placement.DIRECTORY`
    4. executa a normalização entre servidores exatamente uma vez

Qualquer falha de diretiva interrompe a carga: o erro é registrado como
evento estruturado (com o payload canônico) e a exceção tipada é propagada.
"""

from __future__ import annotations

import sys
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from passenger_config.core.cascade.merge import (
    DEFAULT_SERVER_MERGE_POLICY,
    ServerMergePolicy,
    merge_dir_config,
    merge_server_config,
)
from passenger_config.core.cascade.normalize import merge_all_servers
from passenger_config.core.cascade.resolve import (
    EffectiveDirConfig,
    EffectiveServerConfig,
    resolve_dir_config,
    resolve_server_config,
)
from passenger_config.core.config.hashing import compute_config_hash
from passenger_config.core.directives.registry import DirectiveRegistry, build_default_registry
from passenger_config.core.directives.types import Placement
from passenger_config.core.errors import host_document_invalid
from passenger_config.core.exceptions import HostDocumentError, PassengerConfigException
from passenger_config.core.scope.context import ConfigContext
from passenger_config.core.scope.pool import ConfigPool
from passenger_config.core.scope.records import (
    DirConfig,
    ServerConfig,
    create_dir_config,
    create_server_config,
)

from .planner import index_locations, normalize_location, plan_location_chain

MAIN_SERVER_NAME = "main"


@dataclass
class VirtualHost:
    """Registros de um bloco de servidor após a carga."""

    name: str
    server: ServerConfig
    dir_config: DirConfig
    locations: Dict[str, DirConfig] = field(default_factory=dict)


@dataclass
class HostConfiguration:
    """
    Resultado de uma carga: servidores em ordem de declaração (principal
    primeiro) e o registro de servidor sintetizado pela normalização.
    """

    hosts: List[VirtualHost]
    server: ServerConfig
    pool: ConfigPool = field(repr=False)
    context: ConfigContext = field(repr=False)

    def host(self, name: Optional[str] = None) -> VirtualHost:
        if name is None:
            return self.hosts[0]
        for vhost in self.hosts:
            if vhost.name == name:
                return vhost
        raise KeyError(name)

    def _sections(self, vhost: VirtualHost) -> Dict[str, List[DirConfig]]:
        # locations do servidor principal valem também para os virtual hosts
        sources = [vhost] if vhost is self.hosts[0] else [self.hosts[0], vhost]
        sections: Dict[str, List[DirConfig]] = {}
        for source in sources:
            for path, config in source.locations.items():
                sections.setdefault(normalize_location(path), []).append(config)
        return sections

    def dir_config_for(self, path: str, server_name: Optional[str] = None) -> DirConfig:
        """
        Combina o registro padrão do servidor com as locations que cobrem `path`.

        Os registros intermediários são temporários: não pertencem ao pool
        da carga, que só é consultado para recusar configurações já fechadas.
        """
        self.pool.ensure_alive()
        vhost = self.host(server_name)
        sections = self._sections(vhost)
        merged = vhost.dir_config
        for location in plan_location_chain(sections.keys(), path):
            for section in sections[location]:
                merged = merge_dir_config(merged, section)
        return merged

    def resolve(self, path: str, server_name: Optional[str] = None) -> EffectiveDirConfig:
        return resolve_dir_config(self.dir_config_for(path, server_name))

    def effective_server(self) -> EffectiveServerConfig:
        return resolve_server_config(self.server)

    def fingerprint(self) -> str:
        return compute_config_hash(
            {
                "server": self.effective_server().to_dict(),
                "hosts": {
                    vhost.name: resolve_dir_config(vhost.dir_config).to_dict()
                    for vhost in self.hosts
                },
            }
        )

    def close(self) -> None:
        self.pool.destroy()


def _document_error(
    *, message: str, details: Dict[str, Any], hint: Optional[str] = None
) -> HostDocumentError:
    extra = {} if hint is None else {"hint": hint}
    return HostDocumentError.from_payload(host_document_invalid(message=message, details=details, **extra))


def _coerce_argument(arg: Any) -> Any:
    # YAML entrega números como int/float; diretivas TAKE1 esperam texto
    if isinstance(arg, bool) or isinstance(arg, str):
        return arg
    if isinstance(arg, (int, float)):
        return str(arg)
    return arg


def _directive_pairs(raw: Any, where: str) -> List[Tuple[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise _document_error(
            message=f"Directives of {where} must be a list",
            details={"scope": where, "received": type(raw).__name__},
        )
    pairs: List[Tuple[str, Any]] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2 or not isinstance(item[0], str):
            raise _document_error(
                message=f"Invalid directive entry in {where}: {item!r}",
                details={"scope": where, "entry": repr(item)},
                hint="Use pares [NomeDaDiretiva, argumento].",
            )
        pairs.append((item[0], _coerce_argument(item[1])))
    return pairs


class HostEngine:
    """Engine canônico de carga (create → set → merge → normalize)."""

    def __init__(
        self,
        *,
        registry: Optional[DirectiveRegistry] = None,
        policy: ServerMergePolicy = DEFAULT_SERVER_MERGE_POLICY,
        context: Optional[ConfigContext] = None,
        pool: Optional[ConfigPool] = None,
    ):
        self.registry: DirectiveRegistry = registry or build_default_registry()
        self.policy = policy
        self.ctx: ConfigContext = context or ConfigContext(
            load_id=uuid.uuid4().hex, diagnostic_stream=sys.stderr
        )
        self.pool: ConfigPool = pool or ConfigPool("config")

    # ------------------------------------------------------------------
    # Aplicação de diretivas
    # ------------------------------------------------------------------
    def _apply(
        self,
        name: str,
        arg: Any,
        *,
        config: DirConfig,
        server: ServerConfig,
        placement: Placement,
        scope: str,
        section: Optional[str] = None,
    ) -> None:
        try:
            self.registry.apply(
                name,
                arg,
                config=config,
                server=server,
                context=self.ctx,
                placement=placement,
                section=section,
            )
        except PassengerConfigException as exc:
            self.ctx.log(
                scope=scope,
                level="ERROR",
                message=exc.message,
                error=exc.to_payload().to_dict(),
            )
            raise

        self.ctx.log(scope=scope, level="DEBUG", message=f"{name} applied", section=section)

    def _load_block(self, block: Dict[str, Any], name: str) -> VirtualHost:
        server = create_server_config(self.pool)
        dir_config = create_dir_config(self.pool)

        for directive, arg in _directive_pairs(block.get("directives"), name):
            self._apply(
                directive,
                arg,
                config=dir_config,
                server=server,
                placement=Placement.SERVER,
                scope=name,
            )

        raw_locations = block.get("locations") or {}
        if not isinstance(raw_locations, dict):
            raise _document_error(
                message=f"Locations of {name} must be a mapping",
                details={"scope": name, "received": type(raw_locations).__name__},
            )
        try:
            index_locations(raw_locations.keys())
        except ValueError as exc:
            raise _document_error(message=str(exc), details={"scope": name}) from exc

        locations: Dict[str, DirConfig] = {}
        for path, raw in raw_locations.items():
            location_config = create_dir_config(self.pool)
            for directive, arg in _directive_pairs(raw, f"{name} {path}"):
                self._apply(
                    directive,
                    arg,
                    config=location_config,
                    server=server,
                    placement=Placement.DIRECTORY,
                    scope=name,
                    section=path,
                )
            locations[path] = location_config

        return VirtualHost(name=name, server=server, dir_config=dir_config, locations=locations)

    # ------------------------------------------------------------------
    # Carga completa
    # ------------------------------------------------------------------
    def load(self, document: Dict[str, Any]) -> HostConfiguration:
        """
        Executa a carga completa de um documento de host.

        Args:
            document (Dict[str, Any]): Documento resolvido pelo loader.

        Returns:
            HostConfiguration: Servidores carregados e normalizados.

        Raises:
            HostDocumentError: Se a estrutura do documento for inválida.
            UnknownDirectiveError: Se uma diretiva não estiver registrada.
            DirectiveNotAllowedError: Se uma diretiva estiver fora de contexto.
            DirectiveValidationError: Se um setter rejeitar um argumento.
        """
        if not isinstance(document, dict):
            raise _document_error(
                message="Host document must be a mapping",
                details={"received": type(document).__name__},
            )

        main_block = document.get("server") or {}
        if not isinstance(main_block, dict):
            raise _document_error(
                message="'server' must be a mapping",
                details={"received": type(main_block).__name__},
            )
        main = self._load_block(main_block, str(main_block.get("name", MAIN_SERVER_NAME)))
        hosts: List[VirtualHost] = [main]

        raw_vhosts = document.get("virtual_hosts") or []
        if not isinstance(raw_vhosts, list):
            raise _document_error(
                message="'virtual_hosts' must be a list",
                details={"received": type(raw_vhosts).__name__},
            )

        for index, block in enumerate(raw_vhosts):
            if not isinstance(block, dict) or not isinstance(block.get("name"), str):
                raise _document_error(
                    message="Every virtual host needs a 'name'",
                    details={"index": index},
                )
            if any(h.name == block["name"] for h in hosts):
                raise _document_error(
                    message=f"Duplicate virtual host name: {block['name']}",
                    details={"index": index, "name": block["name"]},
                    hint="Cada servidor deve ter um nome único no documento.",
                )
            vhost = self._load_block(block, block["name"])

            vhost.server = merge_server_config(
                main.server, vhost.server, self.pool, policy=self.policy, context=self.ctx
            )
            vhost.dir_config = merge_dir_config(main.dir_config, vhost.dir_config, self.pool)
            self.ctx.log(scope=vhost.name, level="DEBUG", message="merged with main server")
            hosts.append(vhost)

        final = merge_all_servers([h.server for h in hosts], self.pool, self.ctx)

        configuration = HostConfiguration(hosts=hosts, server=final, pool=self.pool, context=self.ctx)
        self.ctx.log(
            scope="server",
            level="INFO",
            message="configuration loaded",
            config_hash=configuration.fingerprint(),
        )
        return configuration
