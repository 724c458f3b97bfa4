# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Additional data blocks hang off the module header and every variable.
# Layout: u16 declared length, then (if non zero) u16 tag, u16 struct id
# and a payload whose shape depends on all three.

from dataclasses import dataclass
from typing import Optional, Union

from .base import AdditionalDataType, as_enum
from .exceptions import MalformedAdditionalData

VENDOR_TAG = 175
VENDOR_PREFIX_LEN = 14

@dataclass(frozen=True)
class SlaveInfo:
    uart_index: int
    slave_address: int
    slave_data_index: int

@dataclass(frozen=True)
class VendorDetails:
    prefix: bytes # undocumented
    text: str     # usually json

@dataclass(frozen=True)
class UnknownDetails:
    size: int # payload bytes skipped

Details = Union[None, SlaveInfo, str, VendorDetails, UnknownDetails]

@dataclass(frozen=True)
class AdditionalData:
    tag: int = 0
    struct_id: int = 0
    length: int = 0
    details: Details = None

    @property
    def kind(self) -> Optional[AdditionalDataType]:
        kind = as_enum(AdditionalDataType, self.tag)
        return kind if isinstance(kind, AdditionalDataType) else None

    @property
    def is_empty(self):
        return self.length == 0

EMPTY_ADDITIONAL_DATA = AdditionalData()

def _malformed(tag, struct_id, length):
    return MalformedAdditionalData('Invalid additional data: tag %d, struct id %d, length %d'
                                   % (tag, struct_id, length))

def _decode_typed(cursor, tag, struct_id, length):
    if struct_id == 0:
        if length != 4:
            raise _malformed(tag, struct_id, length)
        return None
    if struct_id == 1:
        if length != 10:
            raise _malformed(tag, struct_id, length)
        return SlaveInfo(cursor.u16(), cursor.u16(), cursor.u16())
    if struct_id == 2:
        if length == 4:
            raise _malformed(tag, struct_id, length)
        # the string brings its own length prefix
        return cursor.fixed_string()
    raise _malformed(tag, struct_id, length)

def _decode_vendor(cursor, tag, struct_id, length):
    if length == 4:
        return None
    if length - 4 < VENDOR_PREFIX_LEN:
        raise _malformed(tag, struct_id, length)
    prefix = cursor.take(VENDOR_PREFIX_LEN)
    text = cursor.take(length - 4 - VENDOR_PREFIX_LEN).decode('utf-8', errors='replace').rstrip('\0')
    return VendorDetails(prefix, text)

def decode_additional_data(cursor) -> AdditionalData:
    length = cursor.u16()
    if length == 0:
        return EMPTY_ADDITIONAL_DATA
    if length < 4:
        raise MalformedAdditionalData('Invalid additional data length %d' % length)

    tag = cursor.u16()
    struct_id = cursor.u16()
    if tag <= AdditionalDataType.REFERENCE:
        details = _decode_typed(cursor, tag, struct_id, length)
    elif tag == VENDOR_TAG and struct_id == 0:
        details = _decode_vendor(cursor, tag, struct_id, length)
    else:
        # unknown, just consume the bytes
        cursor.skip(length - 4)
        details = UnknownDetails(length - 4)
    return AdditionalData(tag, struct_id, length, details)
