# ============================================================
# src/core/config_loader.py: Cargador central de configuración
# ------------------------------------------------------------
# OBJETIVO:
#   Leer la configuración del backtester desde un YAML
#   (src/config/config.yaml) y aplicar "overrides" desde
#   variables de entorno (.env).
#
# CARACTERÍSTICAS:
#   - Cache interna (evita relecturas del archivo en cada llamada).
#   - Overrides vía .env (LOG_LEVEL, TRADING_COSTS, pesos, ventana, CSV).
#   - Validación mínima del esquema (claves imprescindibles).
#   - Constructores tipados: BacktestConfig y lista de ThresholdSpec.
#
# USO BÁSICO:
#   from core.config_loader import get_config, backtest_config_from
#   cfg = get_config()
#   bt_cfg = backtest_config_from(cfg)
#   specs = threshold_specs_from(cfg)
#
# NOTA:
#   Este módulo NO configura logs (evita dependencia circular).
# ============================================================

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, MutableMapping, Optional

from dotenv import load_dotenv
import yaml

from core.backtest import BacktestConfig
from core.errors import ConfigError
from strategies.signals.types import ThresholdSpec

# ------------------------------------------------------------
# Constantes y cache interna
# ------------------------------------------------------------
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "config.yaml"

# Se invalida llamando a reload_config().
_CONFIG_CACHE: Optional[Dict[str, Any]] = None

# Mapeo: ENV_VAR -> (ruta en config.yaml, conversor)
ENV_TO_CFG: Dict[str, tuple[tuple[str, str], type]] = {
    "LOG_LEVEL": (("environment", "log_level"), str),
    "TRADING_COSTS": (("backtest", "trading_costs"), float),
    "WEIGHT_ASSET_1": (("backtest", "weight_asset_1"), float),
    "WEIGHT_ASSET_2": (("backtest", "weight_asset_2"), float),
    "ZSCORE_WINDOW": (("backtest", "zscore_window"), int),
    "DATA_CSV": (("data", "csv"), str),
}

REQUIRED_PATHS: List[tuple[str, ...]] = [
    ("environment", "log_level"),
    ("backtest", "trading_costs"),
    ("backtest", "weight_asset_1"),
    ("backtest", "weight_asset_2"),
    ("backtest", "zscore_window"),
    ("signals",),
]


# ------------------------------------------------------------
# Utilidades internas
# ------------------------------------------------------------
def _ensure_file_exists(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"No se encontró el archivo de configuración: {path.resolve()}")


def _deep_set(d: MutableMapping[str, Any], keys: Iterable[str], value: Any) -> None:
    """
    Asigna value en un diccionario anidado siguiendo la lista de 'keys'.
    Crea los nodos intermedios si no existen.
    """
    keys = list(keys)
    current = d
    for k in keys[:-1]:
        if k not in current or not isinstance(current[k], dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value


# ------------------------------------------------------------
# Carga YAML + overrides desde .env
# ------------------------------------------------------------
def _load_yaml_config(path: Path) -> Dict[str, Any]:
    _ensure_file_exists(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"El YAML debe mapear a dict en la raíz. Archivo: {path}")
    return data


def _apply_env_overrides(cfg: Dict[str, Any]) -> None:
    """Aplica overrides de variables de entorno (.env) sobre el dict `cfg`."""
    load_dotenv(override=False)

    for env_var, (path_keys, cast) in ENV_TO_CFG.items():
        raw = os.getenv(env_var)
        if raw is None or raw == "":
            continue
        try:
            value = cast(raw)
        except ValueError as e:
            raise ConfigError(f"{env_var}={raw!r} no es un {cast.__name__} válido") from e
        _deep_set(cfg, path_keys, value)


def _validate_schema(cfg: Dict[str, Any]) -> None:
    """Lanza ConfigError si falta alguna clave imprescindible."""
    missing: List[str] = []
    for path_keys in REQUIRED_PATHS:
        if get_nested(cfg, *path_keys) is None:
            missing.append(".".join(path_keys))
    if missing:
        raise ConfigError(
            "Faltan claves imprescindibles en config.yaml (o tras overrides): " + ", ".join(missing)
        )
    if not isinstance(cfg["signals"], list) or not cfg["signals"]:
        raise ConfigError("'signals' debe ser una lista no vacía de umbrales.")


# ------------------------------------------------------------
# API pública
# ------------------------------------------------------------
def get_config(path: Optional[Path | str] = None, use_cache: bool = True) -> Dict[str, Any]:
    """
    Devuelve la configuración como diccionario.
    - path: ruta alternativa al YAML (opcional).
    - use_cache: si True, reutiliza la última carga.
    """
    global _CONFIG_CACHE
    if use_cache and _CONFIG_CACHE is not None and path is None:
        return _CONFIG_CACHE

    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    cfg = _load_yaml_config(cfg_path)
    _apply_env_overrides(cfg)
    _validate_schema(cfg)

    if path is None:
        _CONFIG_CACHE = cfg
    return cfg


def reload_config(path: Optional[Path | str] = None) -> Dict[str, Any]:
    """Fuerza la recarga del YAML y re-aplica overrides del .env."""
    global _CONFIG_CACHE
    _CONFIG_CACHE = None
    return get_config(path=path, use_cache=False)


def get_nested(cfg: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    Acceso seguro a valores anidados: get_nested(cfg, "backtest", "trading_costs")
    Devuelve `default` si no existe la ruta.
    """
    node: Any = cfg
    for k in keys:
        if not isinstance(node, dict) or k not in node:
            return default
        node = node[k]
    return node


def backtest_config_from(cfg: Dict[str, Any]) -> BacktestConfig:
    bt = cfg.get("backtest", {})
    try:
        return BacktestConfig(
            cost_rate=float(bt["trading_costs"]),
            weight_asset_1=float(bt["weight_asset_1"]),
            weight_asset_2=float(bt["weight_asset_2"]),
            periods_per_year=int(bt.get("periods_per_year", 252)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Sección 'backtest' inválida: {e}") from e


def threshold_specs_from(cfg: Dict[str, Any]) -> List[ThresholdSpec]:
    """Umbrales en el orden del YAML (define la precedencia al consolidar)."""
    return [ThresholdSpec.from_dict(d) for d in cfg.get("signals") or []]
