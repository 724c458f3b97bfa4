# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# UNIVERSAL DATA-BIN-FILE FORMAT, data block.
# Rows of fixed width start at header.data_start.  Each row is an
# optional time field followed by one field per input variable.

from functools import cached_property
import logging
import mmap
import os

import numpy as np

from . import base
from .codec import read_column, read_raw_column, output_dtype
from .exceptions import ForeignVariable, TruncatedHeader, UnknownDataType
from .header import decode_header
from .layout import plan_layout
from .timestamps import synthesize_timestamps, to_datetime64

logger = logging.getLogger(__name__)

_no_timestamps = np.empty(0, dtype='datetime64[ns]')

def _timestamps(buf, header, layout):
    if not header.has_time_field:
        return _no_timestamps.copy()
    return synthesize_timestamps(read_column(buf, layout, 0, header.time_data_type), header)

def _resolve(header, variable):
    if isinstance(variable, str):
        named = [v for v in header.variables if v.name == variable]
        if not named:
            raise ForeignVariable('No variable named %r in this file' % variable)
        # an output channel may share its name with the input that carries data
        return next((v for v in named if v.is_input), named[0])
    if not any(v is variable for v in header.variables):
        raise ForeignVariable('The variable %r does not belong to this file' % (variable,))
    return variable

def read_channel(buf, header, layout, variable, dtype=None):
    variable = _resolve(header, variable)
    offset = layout.offset_of(variable)
    # check the request before copying anything out of the file
    output_dtype(variable.data_type, dtype)
    values = read_raw_column(buf, layout, offset, variable.data_type, dtype)
    logger.debug('read %d rows of %s', layout.row_count, variable.name)
    return _timestamps(buf, header, layout), base.ChannelData(variable, values)

def read_all(buf, header, layout):
    dataset = [base.ChannelData(v, read_column(buf, layout, offset, v.data_type))
               for v, offset in zip(layout.variables, layout.offsets)]
    logger.debug('read %d rows of %d variables', layout.row_count, len(dataset))
    return _timestamps(buf, header, layout), dataset

class UDBFFile:
    '''An open UDBF file: decoded header plus a read-only map of the data.

    with UDBFFile('log.dat') as f:
        timestamps, dataset = f.read_all()
    '''

    def __init__(self, fname, data_start_rule='separator'):
        self.file_name = os.fspath(fname)
        self._file = open(self.file_name, 'rb')
        self._map = None
        try:
            size = os.fstat(self._file.fileno()).st_size
            if not size:
                raise TruncatedHeader('%s is empty' % self.file_name)
            self._map = mmap.mmap(self._file.fileno(), 0, access=mmap.ACCESS_READ)
            self.header = decode_header(self._map, data_start_rule)
        except BaseException:
            self.close()
            raise
        self._size = size

    # Planned on first use, so a field of unknown type fails the read and
    # not the open.
    @cached_property
    def layout(self):
        return plan_layout(self.header, self._size)

    def __getattr__(self, name):
        # expose the header fields (version, vendor, sample_rate, ...) directly
        if name in ('header', '_map', '_file', '_size'):
            raise AttributeError(name)
        return getattr(self.header, name)

    @property
    def closed(self):
        return self._file is None

    def _buffer(self):
        if self._map is None:
            raise ValueError('I/O operation on closed UDBF file')
        return self._map

    def read(self, variable, dtype=None):
        return read_channel(self._buffer(), self.header, self.layout, variable, dtype)

    def read_all(self):
        return read_all(self._buffer(), self.header, self.layout)

    def close(self):
        if self._map is not None:
            self._map.close()
            self._map = None
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        try:
            rows = '%d' % self.layout.row_count
        except UnknownDataType:
            rows = '?'
        return 'UDBFFile(%r, version=%d, variables=%d, rows=%s)' % (
            self.file_name, self.header.version, len(self.header.variables), rows)

def _timecodes(header, layout, timestamps):
    if header.has_time_field:
        if not len(timestamps):
            return np.empty(0)
        return (timestamps - timestamps[0]) / np.timedelta64(1, 'ms')
    rate = header.sample_rate if header.sample_rate > 0 else 1
    return np.arange(layout.row_count) * (1000 / rate)

def UDBF(fname, progress=None):
    with UDBFFile(fname) as f:
        header, layout = f.header, f.layout
        timestamps, dataset = f.read_all()

    timecodes = _timecodes(header, layout, timestamps)
    channels = {}
    for i, data in enumerate(dataset):
        if progress:
            progress(i, len(dataset))
        v = data.variable
        channels[v.name] = base.Channel(timecodes,
                                        data.values,
                                        dec_pts=v.precision,
                                        name=v.name,
                                        units=v.unit.strip())

    metadata = {
        'Vendor': header.vendor,
        'Format Version': str(header.version),
        'Sample Rate': '%g Hz' % header.sample_rate,
        'Checksum': 'yes' if header.with_checksum else 'no',
    }
    if header.has_time_field and len(timestamps):
        metadata['Log Start'] = str(timestamps[0])
    else:
        metadata['Log Start'] = str(to_datetime64(0, header))

    return base.LogFile(channels, metadata, fname)
