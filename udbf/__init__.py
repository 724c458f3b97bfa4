# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

"""Reader for UDBF (Universal Data Bin File) logger files."""

from .additional import (EMPTY_ADDITIONAL_DATA, VENDOR_TAG, AdditionalData, SlaveInfo,
                         UnknownDetails, VendorDetails, decode_additional_data)
from .base import (AdditionalDataType, Channel, ChannelData, DataDirection, DataType, LogFile,
                   type_size)
from .codec import RAW, output_dtype, read_column, read_raw_column, read_value
from .cursor import Cursor
from .exceptions import (ExtractionError, ForeignVariable, HeaderError, MalformedAdditionalData,
                         TruncatedHeader, TypeSizeMismatch, UDBFError, UnknownDataType,
                         UnknownLegacyDataType, UnsupportedEndianness, UnsupportedOutputType,
                         UnsupportedVersion)
from .header import (SUPPORTED_VERSION, FieldGates, FileHeader, Variable, decode_header,
                     decode_variable, field_gates)
from .layout import RowLayout, plan_layout
from .reader import UDBF, UDBFFile, read_all, read_channel
from .timestamps import EPOCH, synthesize_timestamps, to_datetime64
