"""
Carga de series de precios emparejadas desde un CSV para backtesting.

Convierte un CSV con una columna por activo (por defecto 'series_1' y 'series_2')
en listas de floats alineadas por fila, descartando filas incompletas.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
import pandas as pd


def load_pair_csv(
    path: str | Path,
    col_1: str = "series_1",
    col_2: str | None = "series_2",
) -> tuple[list[float], list[float] | None]:
    """
    Carga uno o dos precios por fila.

    Args:
        path: Ruta al archivo CSV.
        col_1: Columna del activo 1.
        col_2: Columna del activo 2 (None = modo un solo activo).

    Returns:
        (precios_1, precios_2 | None), de la misma longitud.

    Raises:
        FileNotFoundError: Si el archivo no existe.
        ValueError: Si faltan columnas o no quedan filas válidas.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"No existe el CSV de precios: {p}")

    df = pd.read_csv(p, on_bad_lines="skip")
    cols = [col_1] + ([col_2] if col_2 else [])
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Faltan columnas requeridas en {p}: {missing} (tiene {list(df.columns)})")

    for c in cols:
        df[c] = pd.to_numeric(df[c], errors="coerce")
    before = len(df)
    df = df.dropna(subset=cols)
    if len(df) < before:
        logger.warning(f"{before - len(df)} filas descartadas por valores no numéricos en {p.name}")
    if df.empty:
        raise ValueError(f"CSV sin filas válidas: {p}")

    prices_1 = df[col_1].astype(float).tolist()
    prices_2 = df[col_2].astype(float).tolist() if col_2 else None
    logger.debug(f"Cargadas {len(prices_1)} filas de {p.name} ({', '.join(cols)})")
    return prices_1, prices_2
