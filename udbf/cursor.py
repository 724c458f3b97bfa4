# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import struct

from .exceptions import TruncatedHeader

_u8 = struct.Struct('<B')
_u16 = struct.Struct('<H')
_f64 = struct.Struct('<d')

# Latin-9, one byte per character
STRING_ENCODING = 'iso8859_15'

class Cursor:
    '''Sequential little endian reads over a bytes-like object.

    Works directly on an mmap so the header can be parsed without
    copying the (potentially huge) data block.'''

    def __init__(self, buf, pos=0):
        self.buf = buf
        self.pos = pos

    def _unpack(self, fmt):
        try:
            val, = fmt.unpack_from(self.buf, self.pos)
        except struct.error:
            raise TruncatedHeader('File ends at offset %d while reading the header'
                                  % self.pos) from None
        self.pos += fmt.size
        return val

    def u8(self):
        return self._unpack(_u8)

    def u16(self):
        return self._unpack(_u16)

    def f64(self):
        return self._unpack(_f64)

    def skip(self, count):
        end = self.pos + count
        if end > len(self.buf):
            raise TruncatedHeader('Need %d bytes at offset %d, file has %d'
                                  % (count, self.pos, len(self.buf)))
        self.pos = end
        return end

    def take(self, count):
        start = self.pos
        return bytes(self.buf[start:self.skip(count)])

    def fixed_string(self):
        return self.take(self.u16()).decode(STRING_ENCODING).rstrip('\0')
