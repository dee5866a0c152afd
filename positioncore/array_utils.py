import numpy as np
try:
    import cupy as cp  # type: ignore
except Exception:
    cp = None


def select_array_module(prefer_gpu: object, length: int, gpu_min_size: int):
    """Return xp module (cupy or numpy) based on preference and availability."""
    if prefer_gpu is False:
        return np
    if cp is not None and (prefer_gpu is True or (prefer_gpu == "auto" and length >= gpu_min_size)):
        return cp
    return np


def to_numpy(arr):
    """Convert array (NumPy or CuPy) to NumPy array."""
    if cp is not None and isinstance(arr, cp.ndarray):
        return cp.asnumpy(arr)
    return np.asarray(arr)


def ensure_float_array(arr, xp):
    """Return `arr` as a float64 array in the array module `xp` (np or cp).

    - NumPy/CuPy arrays already in `xp` with float64 dtype are returned as-is.
    - Lists, scalars and other numeric arrays are converted.
    - Object arrays are cast to float64; strings, booleans and values that
      cannot be cast raise TypeError.
    """
    if cp is not None and xp is cp and isinstance(arr, cp.ndarray):
        return arr if arr.dtype == cp.float64 else arr.astype(cp.float64)
    arr_np = to_numpy(arr)
    if arr_np.dtype.kind in ('U', 'S', 'b'):
        raise TypeError(f"expected a numeric array, got dtype {arr_np.dtype}")
    try:
        arr_np = arr_np.astype(np.float64, copy=False)
    except (TypeError, ValueError) as e:
        raise TypeError(f"expected a numeric array, got dtype {arr_np.dtype}") from e
    if xp is np:
        return arr_np
    return xp.asarray(arr_np)


def df_to_arrays(df, columns, xp=None):
    """Convert selected columns of a pandas DataFrame to a dict of float arrays.

    If `xp` is provided (np or cp), data will be converted to that array module.
    Otherwise returns NumPy arrays.
    """
    # Local import to avoid pandas requirement at module import time for some tooling
    import pandas as _pd
    if not isinstance(df, _pd.DataFrame):
        raise TypeError("df_to_arrays requires a pandas DataFrame")
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"DataFrame is missing required columns: {missing}")
    xp = xp or np
    return {col: ensure_float_array(df[col].to_numpy(copy=False), xp) for col in columns}
