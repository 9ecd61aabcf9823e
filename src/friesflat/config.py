"""Run settings loaded from YAML, the environment and command line overrides.

A settings file is a flat YAML mapping, for example::

    es_hosts:
      - http://search-1:9200
      - http://search-2:9200
    index_name: results
    bulk_load: true
    bulk_concurrency: 2
    map_filenames: true
    filename_map_path: /data/PMC-files_list.tsv.gz

Values are applied in order: defaults, settings file, ``FRIESFLAT_ES_HOSTS``
(comma separated) and ``FRIESFLAT_INDEX`` environment variables, and finally
explicit overrides (normally from the CLI).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError

ENV_HOSTS = "FRIESFLAT_ES_HOSTS"
ENV_INDEX = "FRIESFLAT_INDEX"


@dataclass(frozen=True)
class Settings:
    es_hosts: Tuple[str, ...] = ("http://localhost:9200",)
    index_name: str = "results"
    bulk_load: bool = False
    bulk_concurrency: int = 0
    bulk_chunk_size: int = 500
    request_timeout: float = 30.0
    max_retries: int = 3
    map_filenames: bool = False
    filename_map_path: Optional[Path] = None
    verbose: bool = False
    debug: bool = False


_FIELD_NAMES = frozenset(f.name for f in fields(Settings))


def load_settings(path: Optional[Path] = None, **overrides: Any) -> Settings:
    """Build :class:`Settings` from ``path`` and ``overrides``.

    ``None`` overrides are ignored so that unset CLI options keep the file's
    values.  Unknown keys raise :class:`ConfigError`.
    """

    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_read_settings_file(Path(path)))
    values.update(_environment_values())
    values.update({key: value for key, value in overrides.items() if value is not None})

    unknown = sorted(set(values) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"unknown setting(s): {', '.join(unknown)}")
    return _coerce(replace(Settings(), **values))


def _read_settings_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"settings file {path} must contain a mapping")
    return dict(payload)


def _environment_values() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    hosts = os.environ.get(ENV_HOSTS)
    if hosts:
        values["es_hosts"] = [host.strip() for host in hosts.split(",") if host.strip()]
    index = os.environ.get(ENV_INDEX)
    if index:
        values["index_name"] = index
    return values


def _coerce(settings: Settings) -> Settings:
    hosts = settings.es_hosts
    if isinstance(hosts, str):
        hosts = (hosts,)
    map_path = settings.filename_map_path
    try:
        return replace(
            settings,
            es_hosts=tuple(str(host) for host in hosts),
            bulk_concurrency=int(settings.bulk_concurrency),
            bulk_chunk_size=int(settings.bulk_chunk_size),
            request_timeout=float(settings.request_timeout),
            max_retries=int(settings.max_retries),
            filename_map_path=Path(map_path) if map_path is not None else None,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid setting value: {exc}") from exc


__all__ = ["ENV_HOSTS", "ENV_INDEX", "Settings", "load_settings"]
