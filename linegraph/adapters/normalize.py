from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from linegraph.errors import InvalidArgument


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_values(data: Any, *, label: str = "data") -> np.ndarray:
    """Coerce scalar samples into a fresh finite float64 array of shape (N,)."""

    if data is None:
        raise InvalidArgument(f"{label} must not be None")
    if pd is not None and isinstance(data, pd.DataFrame):
        numeric_cols = [c for c in data.columns if _is_numeric_dtype(data[c])]
        if len(numeric_cols) != 1:
            raise InvalidArgument("1-D DataFrame input must contain exactly one numeric column")
        data = data[numeric_cols[0]]

    arr = _coerce_numeric(data, label=label)
    if arr.ndim != 1:
        raise InvalidArgument(f"{label} must be 1-D, got shape {arr.shape}")
    _require_finite(arr, label=label)
    return arr


def normalize_points(data: Any, *, label: str = "data") -> np.ndarray:
    """Coerce (x, y) pairs into a fresh finite float64 array of shape (N, 2)."""

    if data is None:
        raise InvalidArgument(f"{label} must not be None")
    if pd is not None and isinstance(data, pd.DataFrame):
        data = _frame_to_xy(data)

    arr = _coerce_numeric(data, label=label)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidArgument(f"{label} must be a sequence of (x, y) pairs, got shape {arr.shape}")
    _require_finite(arr, label=label)
    return arr


def _frame_to_xy(frame: Any) -> np.ndarray:
    if "x" in frame.columns and "y" in frame.columns:
        cols = ["x", "y"]
    else:
        cols = [c for c in frame.columns if _is_numeric_dtype(frame[c])]
        if len(cols) != 2:
            raise InvalidArgument("2-D DataFrame input must contain `x`/`y` columns or exactly two numeric columns")
    return frame[cols].to_numpy()


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except (TypeError, ValueError):
        return False


def _coerce_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().copy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        try:
            arr = np.asarray(value, dtype=object)
        except ValueError as exc:
            raise InvalidArgument(f"{label} has ragged rows") from exc
        return _coerce_ndarray(arr, label=label)

    raise InvalidArgument(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape, dtype=np.float64)
    flat = out.reshape(-1)
    for i, raw in enumerate(arr.reshape(-1).tolist()):
        if isinstance(raw, Decimal):
            flat[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes)) or raw is None:
            raise InvalidArgument(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            flat[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out


def _require_finite(arr: np.ndarray, *, label: str) -> None:
    if arr.size and not np.all(np.isfinite(arr)):
        raise InvalidArgument(f"{label} contains non-finite values")
