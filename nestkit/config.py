"""Server configuration loaded from a JSON file."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from . import logger as _log
from .filelog import RotateType
from .logger import LogLevel

_LEVELS = {
    "TRACE": LogLevel.TRACE,
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARN": LogLevel.WARN,
    "ERROR": LogLevel.ERROR,
}

_ROTATIONS = {
    "DAY": RotateType.DAY,
    "HOUR": RotateType.HOUR,
}


class ConfigError(Exception):
    """The configuration file is missing, malformed or incomplete."""


@dataclass
class LogInfo:
    """Where and how the server writes its log."""

    level: LogLevel = LogLevel.TRACE
    path: str = ""
    name: str = ""
    rotate_type: RotateType = RotateType.NONE


@dataclass
class ServiceInfo:
    """One listening service."""

    addr: str = "0.0.0.0"
    port: int = 0
    protocol: str = "rtmp"
    transport: str = "tcp"


def _as_str(value: Any, key: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ConfigError(f"{key}: expected a string, got {type(value).__name__}")


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    raise ConfigError(f"{key}: expected an integer, got {type(value).__name__}")


@dataclass
class Config:
    """Parsed configuration."""

    name: str = ""
    cpu_start: int = 0
    thread_nums: int = 1
    cpus: int = 1
    log_info: Optional[LogInfo] = None
    services: list[ServiceInfo] = field(default_factory=list)

    def load(self, file: str) -> Config:
        """Read ``file`` into this configuration; raises ConfigError."""
        _log.debug(f"load config file: {file}")
        try:
            with open(file, encoding="utf-8") as fh:
                root = json.load(fh)
        except (OSError, ValueError) as exc:
            raise ConfigError(f"config file:{file} parse error,err:{exc}") from exc
        if not isinstance(root, dict):
            raise ConfigError(f"config file:{file} is not a JSON object")

        if root.get("name") is not None:
            self.name = _as_str(root["name"], "name")
        if root.get("cpu_start") is not None:
            self.cpu_start = _as_int(root["cpu_start"], "cpu_start")
        if root.get("cpus") is not None:
            self.cpus = _as_int(root["cpus"], "cpus")
        if root.get("threads") is not None:
            self.thread_nums = _as_int(root["threads"], "threads")
        if root.get("log") is not None:
            self._parse_log_info(root["log"])
        self.parse_service_info(root.get("services"))
        return self

    def _parse_log_info(self, section: Any) -> None:
        if not isinstance(section, dict):
            raise ConfigError("log section is not an object")
        info = LogInfo()
        if section.get("level") is not None:
            level = _as_str(section["level"], "log.level")
            info.level = _LEVELS.get(level, info.level)
        if section.get("path") is not None:
            info.path = _as_str(section["path"], "log.path")
        if section.get("name") is not None:
            info.name = _as_str(section["name"], "log.name")
        if section.get("rotate") is not None:
            rotate = _as_str(section["rotate"], "log.rotate")
            info.rotate_type = _ROTATIONS.get(rotate, info.rotate_type)
        self.log_info = info

    def get_service_info(self, protocol: str, transport: str) -> Optional[ServiceInfo]:
        """First service with this protocol and transport, or None."""
        return next(
            (s for s in self.services if s.protocol == protocol and s.transport == transport),
            None,
        )

    def parse_service_info(self, services: Any) -> None:
        """Append the services described by the ``services`` array."""
        if services is None:
            raise ConfigError("config no service section!")
        if not isinstance(services, list):
            raise ConfigError("service section type is not array!")
        for entry in services:
            if not isinstance(entry, dict):
                raise ConfigError("service entry is not an object")
            info = ServiceInfo()
            if "addr" in entry:
                info.addr = _as_str(entry["addr"], "addr")
            if "port" in entry:
                port = _as_int(entry["port"], "port")
                if not 0 <= port <= 0xFFFF:
                    raise ConfigError(f"port out of range: {port}")
                info.port = port
            if "protocol" in entry:
                info.protocol = _as_str(entry["protocol"], "protocol")
            if "transport" in entry:
                info.transport = _as_str(entry["transport"], "transport")
            _log.info(
                f"service info addr:{info.addr} port:{info.port}"
                f" protocol:{info.protocol} transport:{info.transport}"
            )
            self.services.append(info)


class ConfigMgr:
    """Holds the current configuration and swaps it atomically on reload."""

    def __init__(self) -> None:
        self._config: Optional[Config] = None
        self._lock = threading.Lock()

    def load_config(self, file: str) -> Config:
        """Load ``file`` and make it current; the old one stays on failure."""
        config = Config().load(file)
        with self._lock:
            self._config = config
        return config

    @property
    def config(self) -> Optional[Config]:
        with self._lock:
            return self._config