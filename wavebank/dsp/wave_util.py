import numpy as np


# Linear PCM

PCM_DTYPES = {
    8: np.uint8,
    16: np.int16,
    32: np.int32,
}


def pcm_dtype(bits: int) -> np.dtype:
    try:
        return np.dtype(PCM_DTYPES[bits])
    except KeyError:
        raise ValueError(f'invalid bits {bits} not in {list(PCM_DTYPES)}')


def to_pcm(ys, bits: int) -> np.ndarray:
    """ Converts float samples in [-1, 1) to linear PCM, clipping overflow.

    Full scale is 2 ** (bits - 1). 8-bit PCM is unsigned, centered on 128.
    """
    dtype = pcm_dtype(bits)
    full_scale = 2 ** (bits - 1)

    ys = np.asarray(ys, dtype=np.float64) * full_scale
    ys = np.clip(np.round(ys), -full_scale, full_scale - 1)

    if bits == 8:
        ys += full_scale
    return ys.astype(dtype)


def from_pcm(data: np.ndarray) -> np.ndarray:
    """ Converts linear PCM (any dtype in PCM_DTYPES) to float64 in [-1, 1). """
    dtype = np.dtype(data.dtype)
    bits = dtype.itemsize * 8
    if PCM_DTYPES.get(bits) != dtype.type:
        raise ValueError(f'invalid PCM dtype {dtype}')

    full_scale = 2 ** (bits - 1)
    ys = data.astype(np.float64)
    if bits == 8:
        ys -= full_scale
    return ys / full_scale
