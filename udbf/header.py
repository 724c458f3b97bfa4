# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# UNIVERSAL DATA-BIN-FILE FORMAT, header section.
# http://www.famosforum.de/index.php?attachment/508-udbf-107-pdf/

from dataclasses import dataclass
import logging
from typing import Tuple, Union

from .additional import AdditionalData, decode_additional_data
from .base import DataDirection, DataType, as_enum
from .cursor import Cursor
from .exceptions import UnknownLegacyDataType, UnsupportedEndianness, UnsupportedVersion

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = 107
SEPARATOR_LEN = 8   # minimum gap between header and data
DATA_ALIGNMENT = 16

# pre-102 files use a smaller table of type codes
_legacy_types = {
    0: DataType.NO,
    1: DataType.BOOLEAN,
    2: DataType.SIGNED_INT16,
    3: DataType.FLOAT,
    4: DataType.BITSET8,
    5: DataType.BITSET16,
    6: DataType.SIGNED_INT32,
}

@dataclass(frozen=True)
class FieldGates:
    vendor: bool
    checksum_flag: bool
    time_type: bool
    unit: bool
    legacy_types: bool

def field_gates(version) -> FieldGates:
    '''Which optional header fields a file of the given version carries.'''
    return FieldGates(vendor=version > 106,
                      checksum_flag=version > 101,
                      time_type=version >= 107,
                      unit=version >= 106,
                      legacy_types=version < 102)

@dataclass(frozen=True, eq=False)
class Variable:
    name: str
    direction: Union[DataDirection, int]
    data_type: Union[DataType, int]
    field_length: int # max digits incl. decimal point, display only
    precision: int    # digits after the decimal point
    unit: str
    additional_data: AdditionalData

    @property
    def is_input(self):
        return self.direction in (DataDirection.INPUT, DataDirection.INPUT_OUTPUT)

    def __repr__(self):
        return 'Variable(%r, %s, %s)' % (self.name, self.direction, self.data_type)

def _convert_legacy_type(code):
    try:
        return _legacy_types[code]
    except KeyError:
        raise UnknownLegacyDataType('The variable data type %d is unknown and cannot be converted'
                                    % code) from None

def decode_variable(cursor, version) -> Variable:
    gates = field_gates(version)
    name = cursor.fixed_string()
    direction = as_enum(DataDirection, cursor.u16())
    data_type = cursor.u16()
    data_type = (_convert_legacy_type(data_type) if gates.legacy_types
                 else as_enum(DataType, data_type))
    field_length = cursor.u16()
    precision = cursor.u16()
    unit = cursor.fixed_string() if gates.unit else ''
    return Variable(name=name,
                    direction=direction,
                    data_type=data_type,
                    field_length=field_length,
                    precision=precision,
                    unit=unit,
                    additional_data=decode_additional_data(cursor))

def _separator_start(pos):
    pos += SEPARATOR_LEN
    return pos + (-pos % DATA_ALIGNMENT)

def _padded_start(pos):
    # Alternate arithmetic seen in older readers, always leaves at
    # least 16 bytes of separator.
    pos += DATA_ALIGNMENT
    return pos + (-pos % DATA_ALIGNMENT)

DATA_START_RULES = {
    'separator': _separator_start,
    'padded': _padded_start,
}

@dataclass(frozen=True, eq=False)
class FileHeader:
    is_little_endian: bool
    version: int
    vendor: str
    with_checksum: bool
    module_additional_data: AdditionalData
    start_time_to_day_factor: float
    time_data_type: Union[DataType, int]
    time_to_second_factor: float
    start_time: float # days since EPOCH, before scaling
    sample_rate: float
    variables: Tuple[Variable, ...]
    header_size: int
    data_start: int

    @property
    def has_time_field(self):
        return self.time_data_type > DataType.NO

def decode_header(buf, data_start_rule='separator') -> FileHeader:
    try:
        start_rule = DATA_START_RULES[data_start_rule]
    except KeyError:
        raise ValueError('Unknown data start rule %r, expected one of %s'
                         % (data_start_rule, ', '.join(DATA_START_RULES))) from None

    c = Cursor(buf)
    endianness = c.u8()
    if endianness != 0:
        raise UnsupportedEndianness('Big-Endian data layout is not supported')

    version = c.u16()
    if version > SUPPORTED_VERSION:
        raise UnsupportedVersion('File version %d is not supported (newest known is %d)'
                                 % (version, SUPPORTED_VERSION))
    gates = field_gates(version)

    vendor = c.fixed_string() if gates.vendor else ''
    # zero means a checksum is present
    with_checksum = c.u8() == 0 if gates.checksum_flag else False
    module_additional_data = decode_additional_data(c)
    start_time_to_day_factor = c.f64()
    time_data_type = as_enum(DataType, c.u16()) if gates.time_type else DataType.UNSIGNED_INT32
    time_to_second_factor = c.f64()
    start_time = c.f64()
    sample_rate = c.f64()
    num_variables = c.u16()
    variables = tuple(decode_variable(c, version) for _ in range(num_variables))

    logger.debug('UDBF version %d from %r, %d variables, header ends at %d',
                 version, vendor, num_variables, c.pos)

    return FileHeader(is_little_endian=True,
                      version=version,
                      vendor=vendor,
                      with_checksum=with_checksum,
                      module_additional_data=module_additional_data,
                      start_time_to_day_factor=start_time_to_day_factor,
                      time_data_type=time_data_type,
                      time_to_second_factor=time_to_second_factor,
                      start_time=start_time,
                      sample_rate=sample_rate,
                      variables=variables,
                      header_size=c.pos + 1,
                      data_start=start_rule(c.pos))
