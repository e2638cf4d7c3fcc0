from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any


class ConfigError(RuntimeError):
    pass


_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid int for {key}: {value!r}")
    try:
        return int(value)
    except Exception as e:
        raise ConfigError(f"Invalid int for {key}: {value!r}") from e


def _as_str(value: Any, *, key: str) -> str:
    if value is None:
        raise ConfigError(f"Missing required config key: {key}")
    return str(value)


def _as_port(value: Any, *, key: str) -> int:
    port = _as_int(value, key=key)
    if port < 1 or port > 65535:
        raise ConfigError(f"Invalid {key}: must be in [1..65535], got {port}")
    return port


def _as_log_level(value: Any, *, key: str) -> str:
    s = _as_str(value, key=key).strip().lower()
    if s not in _LOG_LEVELS:
        raise ConfigError(f"Invalid {key}: expected one of {sorted(_LOG_LEVELS)}, got {s!r}")
    return s


def _as_positive_int(value: Any, *, key: str, allow_zero: bool = False) -> int:
    n = _as_int(value, key=key)
    if n < 0 or (n == 0 and not allow_zero):
        raise ConfigError(f"Invalid {key}: must be {'>= 0' if allow_zero else '>= 1'}, got {n}")
    return n


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"


@dataclass(frozen=True)
class BenchConfig:
    """Defaults for the local comparison CLI."""

    batch_size: int = 8
    array_length: int = 10_000
    value_min: int = -1_000_000
    value_max: int = 1_000_000
    seed: int = 0
    repeat: int = 5


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig
    bench: BenchConfig


def default_config_path() -> Path:
    return Path(os.getenv("SORTBENCH_CONFIG_PATH", "config/default.toml")).expanduser().resolve()


def load_app_config(path: Path | None = None) -> AppConfig:
    """Load `AppConfig` from TOML, falling back to built-in defaults.

    A missing file is not an error (the service has sensible defaults), but a
    present file with a bad value is. Env vars override the `[server]` table.
    """
    cfg_path = path or default_config_path()
    raw: dict[str, Any] = {}
    if cfg_path.exists():
        try:
            raw = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {cfg_path}: {e}") from e

    server = dict(raw.get("server", {}))
    bench = raw.get("bench", {})

    for env_key, key in (
        ("SORTBENCH_HOST", "host"),
        ("SORTBENCH_PORT", "port"),
        ("SORTBENCH_LOG_LEVEL", "log_level"),
    ):
        v = os.getenv(env_key)
        if v is not None and v.strip():
            server[key] = v.strip()

    server_defaults = ServerConfig()
    bench_defaults = BenchConfig()

    bench_cfg = BenchConfig(
        batch_size=_as_positive_int(
            bench.get("batch_size", bench_defaults.batch_size), key="bench.batch_size", allow_zero=True
        ),
        array_length=_as_positive_int(
            bench.get("array_length", bench_defaults.array_length), key="bench.array_length", allow_zero=True
        ),
        value_min=_as_int(bench.get("value_min", bench_defaults.value_min), key="bench.value_min"),
        value_max=_as_int(bench.get("value_max", bench_defaults.value_max), key="bench.value_max"),
        seed=_as_int(bench.get("seed", bench_defaults.seed), key="bench.seed"),
        repeat=_as_positive_int(bench.get("repeat", bench_defaults.repeat), key="bench.repeat"),
    )
    if bench_cfg.value_min > bench_cfg.value_max:
        raise ConfigError(
            f"Invalid bench range: value_min ({bench_cfg.value_min}) > value_max ({bench_cfg.value_max})"
        )

    return AppConfig(
        server=ServerConfig(
            host=_as_str(server.get("host", server_defaults.host), key="server.host"),
            port=_as_port(server.get("port", server_defaults.port), key="server.port"),
            log_level=_as_log_level(server.get("log_level", server_defaults.log_level), key="server.log_level"),
        ),
        bench=bench_cfg,
    )
