# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import numpy as np

# Day number zero of the format (same as OLE automation dates), UTC
EPOCH = np.datetime64('1899-12-30T00:00:00', 'ns')

SECONDS_PER_DAY = 86400
NS_PER_DAY = SECONDS_PER_DAY * 10**9

def synthesize_timestamps(raw, header) -> np.ndarray:
    '''Absolute datetime64[ns] for raw per-row time values.

    days = raw * time_to_second_factor / 86400 + start_time * start_time_to_day_factor
    '''
    raw = np.asarray(raw, dtype=np.float64)
    # Keep the row offset and the start separate in integer ns, adding
    # them as doubles would round away the sub-millisecond part.
    start_ns = int(round(header.start_time * header.start_time_to_day_factor * NS_PER_DAY))
    offset_ns = raw * header.time_to_second_factor * 1e9
    valid = np.isfinite(offset_ns)
    ticks = np.zeros(raw.shape, dtype=np.int64)
    ticks[valid] = np.rint(offset_ns[valid]).astype(np.int64)
    out = EPOCH + np.timedelta64(start_ns, 'ns') + ticks.astype('timedelta64[ns]')
    out[~valid] = np.datetime64('NaT')
    return out

def to_datetime64(raw, header) -> np.datetime64:
    return synthesize_timestamps([raw], header)[0]
