# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Field decoding.  read_value and read_column share one rule: numbers are
# widened to float64 from their native dtype, flags and bit sets read as
# NaN, unknown codes raise.

import math

import numpy as np

from .base import DataType, type_size
from .exceptions import TypeSizeMismatch, UnsupportedOutputType

RAW = 'raw' # request the undecoded bytes of every row

# Booleans and bit sets have no meaningful value as a double
_not_numeric = {
    DataType.BOOLEAN,
    DataType.BITSET8,
    DataType.BITSET16,
    DataType.BITSET32,
    DataType.BITSET64,
}

_native_dtypes = {
    DataType.BOOLEAN: np.dtype('?'),
    DataType.SIGNED_INT8: np.dtype('i1'),
    DataType.UNSIGNED_INT8: np.dtype('u1'),
    DataType.SIGNED_INT16: np.dtype('<i2'),
    DataType.UNSIGNED_INT16: np.dtype('<u2'),
    DataType.SIGNED_INT32: np.dtype('<i4'),
    DataType.UNSIGNED_INT32: np.dtype('<u4'),
    DataType.FLOAT: np.dtype('<f4'),
    DataType.DOUBLE: np.dtype('<f8'),
    DataType.SIGNED_INT64: np.dtype('<i8'),
    DataType.UNSIGNED_INT64: np.dtype('<u8'),
    DataType.BITSET8: np.dtype('u1'),
    DataType.BITSET16: np.dtype('<u2'),
    DataType.BITSET32: np.dtype('<u4'),
    DataType.BITSET64: np.dtype('<u8'),
}

# Everything a field may be reinterpreted as, keyed by (kind, itemsize)
_output_dtypes = {
    ('b', 1): np.dtype('?'),
    ('i', 1): np.dtype('i1'),
    ('u', 1): np.dtype('u1'),
    ('i', 2): np.dtype('<i2'),
    ('u', 2): np.dtype('<u2'),
    ('i', 4): np.dtype('<i4'),
    ('u', 4): np.dtype('<u4'),
    ('f', 4): np.dtype('<f4'),
    ('i', 8): np.dtype('<i8'),
    ('u', 8): np.dtype('<u8'),
    ('f', 8): np.dtype('<f8'),
}

def _widened_from(data_type):
    type_size(data_type) # reject unknown codes before anything else
    if data_type in _not_numeric:
        return None
    return _native_dtypes[data_type]

def read_value(buf, offset, data_type) -> float:
    dtype = _widened_from(data_type)
    if dtype is None:
        return math.nan
    return float(np.frombuffer(buf, dtype=dtype, count=1, offset=offset)[0])

def _strided(buf, layout, offset, dtype, inner=0):
    shape = (layout.row_count, inner) if inner else (layout.row_count,)
    if not layout.row_count:
        return np.empty(shape, dtype=dtype)
    return np.ndarray(shape=shape,
                      dtype=dtype,
                      buffer=buf,
                      offset=layout.data_start + offset,
                      strides=(layout.row_width, 1) if inner else (layout.row_width,))

def read_column(buf, layout, offset, data_type) -> np.ndarray:
    '''Every row's field at offset, widened to float64.'''
    dtype = _widened_from(data_type)
    if dtype is None:
        return np.full(layout.row_count, np.nan)
    return _strided(buf, layout, offset, dtype).astype(np.float64)

def output_dtype(data_type, dtype=None):
    size = type_size(data_type)
    if dtype is None:
        return _native_dtypes[data_type]
    if dtype is bytes or (isinstance(dtype, str) and dtype == RAW):
        return RAW

    try:
        requested = np.dtype(dtype)
    except TypeError:
        raise UnsupportedOutputType('Cannot interpret %r as a data type' % (dtype,)) from None
    if requested.itemsize != size:
        raise TypeSizeMismatch('%s fields are %d bytes wide, %s is %d'
                               % (getattr(data_type, 'name', data_type), size,
                                  requested, requested.itemsize))
    out = _output_dtypes.get((requested.kind, requested.itemsize))
    if out is None:
        raise UnsupportedOutputType('Channels cannot be read as %s' % requested)
    return out

def read_raw_column(buf, layout, offset, data_type, dtype=None) -> np.ndarray:
    '''Every row's field at offset, reinterpreted (not converted) as dtype.

    dtype must be as wide as the declared type.  RAW returns a
    (rows, width) uint8 array of the untouched bytes.'''
    out = output_dtype(data_type, dtype)
    if isinstance(out, str):
        return _strided(buf, layout, offset, np.uint8, type_size(data_type)).copy()
    return _strided(buf, layout, offset, out).copy()
