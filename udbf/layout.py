# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

from dataclasses import dataclass
import logging
from typing import Tuple

from .base import type_size
from .exceptions import ForeignVariable

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class RowLayout:
    variables: Tuple # eligible Variables, declaration order
    offsets: Tuple[int, ...]
    time_size: int
    row_width: int
    row_count: int
    data_start: int

    @property
    def data_end(self):
        # may be short of the file length if the last row was cut off
        return self.data_start + self.row_count * self.row_width

    def index_of(self, variable):
        for i, v in enumerate(self.variables):
            if v is variable:
                return i
        raise ForeignVariable('Variable %r has no values in the data block'
                              % getattr(variable, 'name', variable))

    def offset_of(self, variable):
        return self.offsets[self.index_of(variable)]

def plan_layout(header, file_size) -> RowLayout:
    # Output only and empty channels aren't stored in the file at all
    variables = tuple(v for v in header.variables if v.is_input)

    time_size = type_size(header.time_data_type) if header.has_time_field else 0
    offsets = []
    row_width = time_size
    for v in variables:
        offsets.append(row_width)
        row_width += type_size(v.data_type)

    available = max(file_size - header.data_start, 0)
    row_count = available // row_width if row_width else 0
    partial = available - row_count * row_width
    if partial and row_width:
        logger.debug('Ignoring %d bytes of incomplete trailing row', partial)
    logger.debug('row width %d, %d rows from offset %d',
                 row_width, row_count, header.data_start)

    return RowLayout(variables=variables,
                     offsets=tuple(offsets),
                     time_size=time_size,
                     row_width=row_width,
                     row_count=row_count,
                     data_start=header.data_start)
