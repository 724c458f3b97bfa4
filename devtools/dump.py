#!/usr/bin/python3

import logging
import pprint
import sys

import udbf

fname = 'testdata.dat' if len(sys.argv) < 2 else sys.argv[1]
rows = 5 if len(sys.argv) < 3 else int(sys.argv[2])

pp = pprint.PrettyPrinter()

def dump_header(f):
    h = f.header
    print('version', h.version, repr(h.vendor), 'checksum' if h.with_checksum else 'no checksum')
    print('header size', h.header_size, 'data start', h.data_start)
    print('time', h.time_data_type if h.has_time_field else None,
          h.time_to_second_factor, 'start', h.start_time, '*', h.start_time_to_day_factor)
    print('sample rate', h.sample_rate)
    pp.pprint(h.module_additional_data)
    for v in h.variables:
        print('%-30s %-14s %-16s %3d %2d %r' % (v.name, v.direction, v.data_type,
                                               v.field_length, v.precision, v.unit))
        if not v.additional_data.is_empty:
            pp.pprint(v.additional_data)
    print('row width', f.layout.row_width, 'rows', f.layout.row_count)

def dump_rows(f):
    timestamps, dataset = f.read_all()
    count = f.layout.row_count
    for row in list(range(min(rows, count))) + list(range(max(rows, count - rows), count)):
        ts = timestamps[row] if len(timestamps) else ''
        print(row, ts, ' '.join('%g' % d.values[row] for d in dataset))

if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    with udbf.UDBFFile(fname) as f:
        dump_header(f)
        dump_rows(f)
