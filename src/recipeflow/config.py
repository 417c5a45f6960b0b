from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any, Optional

from .errors import ConfigError

DEFAULT_TICK_SECONDS = 1.0
DEFAULT_WARNING_SECONDS = 30
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class TimerConfig:
    tick_seconds: float = DEFAULT_TICK_SECONDS
    warning_seconds: int = DEFAULT_WARNING_SECONDS


@dataclass(frozen=True)
class TuiConfig:
    header_icon: str = "🍳"
    layout: str = "auto"
    density: str = "cozy"


@dataclass(frozen=True)
class EffectiveConfig:
    catalog_path: str
    project_dir: str
    log_level: str
    timers: TimerConfig
    tui: TuiConfig


def default_catalog_path() -> Path:
    return Path(__file__).resolve().parent / "data" / "recipes.yaml"


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/recipeflow"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_profile(profile: str) -> Optional[str]:
    path = _config_root() / "profiles.d" / f"{profile}.toml"
    if not path.exists():
        return None
    data = _load_toml(path)
    catalog = data.get("catalog")
    if not catalog:
        raise ConfigError(f"Profile {profile!r} missing 'catalog' key")
    return str(catalog)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / "recipeflow.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, project)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    project_dir = cli_args.get("project") or os.getcwd()
    project_cfg = load_project_config(str(project_dir))

    cli_cfg = _cli_to_dict(cli_args)
    profile = cli_args.get("profile")
    if profile and "catalog" not in cli_cfg:
        profile_catalog = load_profile(str(profile))
        if profile_catalog:
            cli_cfg["catalog"] = profile_catalog
    merged = merge_config(cli_cfg, project_cfg, global_cfg)

    catalog = merged.get("catalog")
    if catalog:
        catalog_path = Path(os.path.expanduser(str(catalog)))
        if not catalog_path.is_absolute():
            catalog_path = Path(project_dir) / catalog_path
    else:
        catalog_path = default_catalog_path()

    timers_cfg = merged.get("timers", {})
    tui_cfg = merged.get("tui", {})

    return EffectiveConfig(
        catalog_path=str(catalog_path),
        project_dir=str(project_dir),
        log_level=_normalize_log_level(merged.get("log_level", "WARNING")),
        timers=TimerConfig(
            tick_seconds=_positive_float(timers_cfg.get("tick_seconds"), DEFAULT_TICK_SECONDS),
            warning_seconds=_positive_int(timers_cfg.get("warning_seconds"), DEFAULT_WARNING_SECONDS),
        ),
        tui=TuiConfig(
            header_icon=str(tui_cfg.get("header_icon", "🍳")),
            layout=_normalize_tui_layout(tui_cfg.get("layout", "auto")),
            density=_normalize_tui_density(tui_cfg.get("density", "cozy")),
        ),
    )


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("catalog", "log_level"):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]

    timers: dict[str, Any] = {}
    for key in ("tick_seconds", "warning_seconds"):
        if cli_args.get(key) is not None:
            timers[key] = cli_args[key]
    if timers:
        out["timers"] = timers

    tui: dict[str, Any] = {}
    for key in ("header_icon", "layout", "density"):
        value = cli_args.get(f"tui_{key}")
        if value is not None:
            tui[key] = value
    if tui:
        out["tui"] = tui

    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"catalog = {cfg.catalog_path!r}",
        f"log_level = {cfg.log_level!r}",
        "",
        "[timers]",
        f"tick_seconds = {cfg.timers.tick_seconds!r}",
        f"warning_seconds = {cfg.timers.warning_seconds!r}",
        "",
        "[tui]",
        f"header_icon = {cfg.tui.header_icon!r}",
        f"layout = {cfg.tui.layout!r}",
        f"density = {cfg.tui.density!r}",
    ]
    return "\n".join(lines) + "\n"


def _normalize_log_level(value: Any) -> str:
    text = str(value or "").strip().upper()
    if text in VALID_LOG_LEVELS:
        return text
    return "WARNING"


def _normalize_tui_layout(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text in {"auto", "compact", "normal", "wide"}:
        return text
    return "auto"


def _normalize_tui_density(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text in {"cozy", "compact"}:
        return text
    return "cozy"


def _positive_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default
