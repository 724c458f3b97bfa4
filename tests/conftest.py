"""pytest configuration for udbf.

The tests don't ship binary fixtures, files are assembled field by field
with the helpers below.
"""

import struct

import numpy as np
import pytest

from udbf import DataType

GANTNER_VENDOR = "UniversalDataBinFile - GANTNER instruments"
GANTNER_ROWS = 15000


def fixed_string(text, encoding="iso8859_15"):
    """Encode a u16 length prefixed string."""
    raw = text.encode(encoding)
    return struct.pack("<H", len(raw)) + raw


def additional_data(tag=None, struct_id=0, payload=b"", length=None):
    """Encode an additional data block, tag=None gives the empty block."""
    if tag is None:
        return struct.pack("<H", 0)
    if length is None:
        length = 4 + len(payload)
    return struct.pack("<HHH", length, tag, struct_id) + payload


def variable_record(
    name,
    direction=0,
    data_type=DataType.FLOAT,
    field_length=8,
    precision=3,
    unit=" V",
    additional=None,
    version=107,
):
    """Encode one variable description."""
    out = fixed_string(name)
    out += struct.pack("<HHHH", direction, data_type, field_length, precision)
    if version >= 106:
        out += fixed_string(unit)
    out += additional_data() if additional is None else additional
    return out


def header_bytes(
    variables=(),
    version=107,
    vendor=GANTNER_VENDOR,
    checksum=True,
    module_additional=None,
    day_factor=1.0,
    time_type=DataType.UNSIGNED_INT64,
    time_factor=1e-9,
    start_time=36526.0,
    sample_rate=25.0,
    endianness=0,
):
    """Encode a file header; variables are already encoded records."""
    out = struct.pack("<BH", endianness, version)
    if version > 106:
        out += fixed_string(vendor)
    if version > 101:
        out += struct.pack("<B", 0 if checksum else 1)
    out += additional_data() if module_additional is None else module_additional
    out += struct.pack("<d", day_factor)
    if version >= 107:
        out += struct.pack("<H", time_type)
    out += struct.pack("<dddH", time_factor, start_time, sample_rate, len(variables))
    for record in variables:
        out += record
    return out


def data_start_for(header):
    """Default data start: 8 separator bytes, then 16 byte alignment."""
    pos = len(header) + 8
    return pos + (-pos % 16)


def udbf_bytes(header, rows=b"", trailing=b""):
    """Join a header, separator padding and the data rows."""
    padding = b"\0" * (data_start_for(header) - len(header))
    return header + padding + rows + trailing


def gantner_rows(rows=GANTNER_ROWS):
    """A 25 Hz recording of two float channels with a u64 ns time field."""
    dtype = np.dtype([("time", "<u8"), ("acc", "<f4"), ("strain", "<f4")])
    data = np.zeros(rows, dtype=dtype)
    data["time"] = np.arange(rows, dtype=np.uint64) * 40_000_000
    data["acc"] = np.linspace(4.914855, 5.003572, rows)
    data["strain"] = np.linspace(5.003258, 4.962194, rows)
    return data


def gantner_header():
    """Two channel version 107 header whose layout ends at offset 145."""
    return header_bytes(
        variables=[
            variable_record("WEA10_ACC_Y"),
            variable_record("WEA10_STRAIN"),
        ],
        module_additional=additional_data(tag=0, struct_id=0),
    )


@pytest.fixture(scope="session")
def gantner_data():
    """The structured array written to the gantner file."""
    return gantner_rows()


@pytest.fixture(scope="session")
def gantner_path(tmp_path_factory, gantner_data):
    """Path to a representative two channel logger file."""
    path = tmp_path_factory.mktemp("udbf") / "gantner.dat"
    path.write_bytes(udbf_bytes(gantner_header(), gantner_data.tobytes()))
    return path


@pytest.fixture()
def write_udbf(tmp_path):
    """Return a function which writes bytes to a new file and returns its path."""
    count = 0

    def _write(data, name=None):
        nonlocal count
        count += 1
        path = tmp_path / (name or "file_%d.dat" % count)
        path.write_bytes(data)
        return path

    return _write
