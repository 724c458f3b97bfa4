# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

from dataclasses import dataclass
import enum
import typing

import numpy as np

from .exceptions import UnknownDataType

class DataType(enum.IntEnum):
    NO = 0
    BOOLEAN = 1
    SIGNED_INT8 = 2
    UNSIGNED_INT8 = 3
    SIGNED_INT16 = 4
    UNSIGNED_INT16 = 5
    SIGNED_INT32 = 6
    UNSIGNED_INT32 = 7
    FLOAT = 8
    BITSET8 = 9
    BITSET16 = 10
    BITSET32 = 11
    DOUBLE = 12
    SIGNED_INT64 = 13
    UNSIGNED_INT64 = 14
    BITSET64 = 15

class DataDirection(enum.IntEnum):
    INPUT = 0
    OUTPUT = 1
    INPUT_OUTPUT = 2
    EMPTY = 3

class AdditionalDataType(enum.IntEnum):
    NO_TYPE = 0
    ANALOG_INPUT = 1
    ARITHMETIC = 2
    DIGITAL_OUTPUT = 3
    DIGITAL_INPUT = 4
    SET_POINT = 5
    ALARM = 6
    BIT_SET_OUTPUT = 7
    BIT_SET_INPUT = 8
    PID_CONTROLLER = 9
    ANALOG_OUTPUT = 10
    SIGNAL_CONDITIONING = 11
    REMOTE_INPUT = 12
    REFERENCE = 13

# Files written by old firmware may carry codes we don't know about.  Keep
# the raw number around so the failure happens only if somebody needs the
# size of the field.
def as_enum(enum_type, code):
    try:
        return enum_type(code)
    except ValueError:
        return code

_type_sizes = {
    DataType.BOOLEAN: 1,
    DataType.SIGNED_INT8: 1,
    DataType.UNSIGNED_INT8: 1,
    DataType.BITSET8: 1,
    DataType.SIGNED_INT16: 2,
    DataType.UNSIGNED_INT16: 2,
    DataType.BITSET16: 2,
    DataType.SIGNED_INT32: 4,
    DataType.UNSIGNED_INT32: 4,
    DataType.FLOAT: 4,
    DataType.BITSET32: 4,
    DataType.DOUBLE: 8,
    DataType.SIGNED_INT64: 8,
    DataType.UNSIGNED_INT64: 8,
    DataType.BITSET64: 8,
}

def type_size(data_type) -> int:
    try:
        return _type_sizes[data_type]
    except KeyError:
        raise UnknownDataType('Unknown data type %r' % (data_type,)) from None

@dataclass(eq=False)
class ChannelData:
    variable: typing.Any # header.Variable
    values: np.ndarray

@dataclass(eq=False)
class Channel:
    timecodes: np.ndarray
    values: np.ndarray
    dec_pts: int
    name: str
    units: str

@dataclass(eq=False)
class LogFile:
    channels: typing.Dict[str, Channel]
    metadata: typing.Dict[str, str]
    file_name: str
