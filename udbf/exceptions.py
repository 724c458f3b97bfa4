# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

"""Errors raised while decoding UDBF files."""


class UDBFError(Exception):
    """Base class for udbf errors."""


class HeaderError(ValueError, UDBFError):
    """Raised when the file header cannot be decoded."""


class UnsupportedEndianness(HeaderError):
    """Raised for files not written in little endian byte order."""


class UnsupportedVersion(HeaderError):
    """Raised for format versions newer than the decoder knows."""


class MalformedAdditionalData(HeaderError):
    """Raised for an invalid additional data length or struct id."""


class UnknownLegacyDataType(HeaderError):
    """Raised when a pre-102 data type code has no modern equivalent."""


class TruncatedHeader(HeaderError):
    """Raised when the file ends in the middle of the header."""


class UnknownDataType(ValueError, UDBFError):
    """Raised when a data type code has no known byte size."""


class ExtractionError(UDBFError):
    """Parent class for errors while reading the data block."""


class ForeignVariable(ValueError, ExtractionError):
    """Raised when a variable is not stored in this file's data block."""


class TypeSizeMismatch(TypeError, ExtractionError):
    """Raised when the requested output width differs from the field width."""


class UnsupportedOutputType(TypeError, ExtractionError):
    """Raised when a channel is requested as a type we can't reinterpret to."""
