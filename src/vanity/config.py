"""Vanity configuration.

``VanityConfig`` and ``PathEntry`` are frozen dataclasses built once from
the YAML document at startup. ``ServerConfig`` carries the listen settings
and reads its port from the environment. Nothing here changes after the
app freezes.
"""

import logging
import os
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from vanity.errors import ConfigParseError, ConfigReadError, ConfigurationError

logger = logging.getLogger("vanity.config")

DEFAULT_CONFIG_PATH = "vanity.yml"
DEFAULT_MAX_AGE = 86400  # 1 day
DEFAULT_PORT = 3000

_ENTRY_FIELDS = ("repo", "display", "vcs")


@dataclass(frozen=True, slots=True)
class PathEntry:
    """One configured import prefix.

    ``display`` and ``vcs`` may be empty as loaded; ``vanity.resolve``
    fills them in before the prefix is routed.
    """

    prefix: str
    repo: str
    display: str = ""
    vcs: str = ""

    @property
    def key(self) -> str:
        """The prefix with a single trailing slash removed (``/`` becomes ``""``)."""
        return self.prefix.removesuffix("/")


@dataclass(frozen=True, slots=True)
class VanityConfig:
    """The parsed vanity document. Immutable after creation.

    Usage::

        config = VanityConfig(
            host="go.example.com",
            paths=(PathEntry("/tool", "https://github.com/example/tool"),),
        )
    """

    host: str
    max_age: int = DEFAULT_MAX_AGE
    paths: tuple[PathEntry, ...] = ()

    @property
    def cache_control(self) -> str:
        """The ``Cache-Control`` value sent with every response."""
        return f"public, max-age={self.max_age}"

    @property
    def prefixes(self) -> tuple[str, ...]:
        return tuple(entry.prefix for entry in self.paths)

    @property
    def has_root(self) -> bool:
        """True when ``/`` is configured, which suppresses the generated index."""
        return any(entry.prefix == "/" for entry in self.paths)


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Listen settings for the pounce server.

    The port defaults to 3000 and is overridden by ``PORT`` when built
    through ``from_env()``.
    """

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    workers: int = 1
    debug: bool = False
    log_level: str = "info"
    access_log: bool = True
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "ServerConfig":
        """Build a ServerConfig, taking the port from ``PORT`` when set.

        Explicit *overrides* win over the environment.

        Raises:
            ConfigurationError: If ``PORT`` is not an integer, or the port
                or worker count is out of range.
        """
        env = os.environ if environ is None else environ
        raw_port = env.get("PORT", "")
        if raw_port and "port" not in overrides:
            try:
                overrides["port"] = int(raw_port)
            except ValueError as exc:
                msg = f"PORT must be an integer, got {raw_port!r}"
                raise ConfigurationError(msg) from exc

        port = overrides.get("port", DEFAULT_PORT)
        if not 0 <= port <= 65535:
            msg = f"port must be 0-65535, got {port}"
            raise ConfigurationError(msg)
        workers = overrides.get("workers", 1)
        if workers < 0:
            msg = f"workers must be >= 0, got {workers}"
            raise ConfigurationError(msg)
        return cls(**overrides)


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys instead of keeping the last."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def config_path(explicit: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Path:
    """Pick the config file: explicit path, then ``VANITY_CONFIG``, then ``vanity.yml``."""
    if explicit:
        return Path(explicit)
    env = os.environ if environ is None else environ
    return Path(env.get("VANITY_CONFIG") or DEFAULT_CONFIG_PATH)


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> VanityConfig:
    """Read and parse a vanity YAML file.

    Raises:
        ConfigReadError: If the file cannot be read.
        ConfigParseError: If the document is malformed or not valid UTF-8.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        msg = f"cannot read config {str(path)!r}: {exc.strerror or exc}"
        raise ConfigReadError(msg) from exc
    config = parse_config(data)
    logger.info("Loaded %d path(s) for %s from %s", len(config.paths), config.host, path)
    return config


def parse_config(data: str | bytes) -> VanityConfig:
    """Parse a vanity YAML document into a ``VanityConfig``.

    Only the document shape is checked here; VCS and display metadata
    are resolved later by ``vanity.resolve``.
    """
    try:
        raw = yaml.load(data, Loader=_UniqueKeyLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        msg = f"invalid YAML: {exc}"
        raise ConfigParseError(msg) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        msg = f"config must be a mapping, got {type(raw).__name__}"
        raise ConfigParseError(msg)

    host = raw.get("host")
    if not isinstance(host, str) or not host:
        msg = "config is missing 'host'"
        raise ConfigParseError(msg)

    return VanityConfig(
        host=host,
        max_age=_parse_max_age(raw.get("max_age")),
        paths=_parse_paths(raw.get("paths")),
    )


def _parse_max_age(value: object) -> int:
    if value is None:
        return DEFAULT_MAX_AGE
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"max_age must be an integer, got {value!r}"
        raise ConfigParseError(msg)
    if value < 0:
        logger.warning("Ignoring negative max_age %d, using %d", value, DEFAULT_MAX_AGE)
        return DEFAULT_MAX_AGE
    return value


def _parse_paths(value: object) -> tuple[PathEntry, ...]:
    if value is None:
        return ()
    if not isinstance(value, dict):
        msg = f"'paths' must be a mapping, got {type(value).__name__}"
        raise ConfigParseError(msg)

    entries: list[PathEntry] = []
    keys: dict[str, str] = {}
    for prefix, fields in value.items():
        entry = _parse_entry(prefix, fields)
        # "/a" and "/a/" would register the same routes
        if entry.key in keys:
            msg = f"paths {keys[entry.key]!r} and {prefix!r} overlap"
            raise ConfigParseError(msg)
        keys[entry.key] = prefix
        entries.append(entry)
    return tuple(entries)


def _parse_entry(prefix: object, fields: object) -> PathEntry:
    if not isinstance(prefix, str) or not prefix.startswith("/"):
        msg = f"path {prefix!r} must be a string starting with '/'"
        raise ConfigParseError(msg)
    if not isinstance(fields, dict):
        msg = f"path {prefix!r} must map to a mapping with a 'repo' key"
        raise ConfigParseError(msg)

    values: dict[str, str] = {}
    for name in _ENTRY_FIELDS:
        item = fields.get(name)
        if item is None:
            continue
        if not isinstance(item, str):
            msg = f"path {prefix!r}: {name!r} must be a string, got {item!r}"
            raise ConfigParseError(msg)
        values[name] = item

    if not values.get("repo"):
        msg = f"path {prefix!r} is missing 'repo'"
        raise ConfigParseError(msg)

    return PathEntry(prefix=prefix, **values)
