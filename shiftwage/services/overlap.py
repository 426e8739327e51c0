# shiftwage/services/overlap.py
"""
Interval overlap between a worked shift and daily time windows.

Shifts are placed on an absolute minute timeline whose origin is midnight of
the clock-in day: a shift clocked in at 22:00 starts at minute 1320 and may end
past 1440. Each window is measured against its occurrence on the clock-in day;
a shift lasting longer than 24h meets the next day's occurrence only with the
part worked after its first 24h, and so on. All intervals are half-open [start, end).
"""
from typing import Iterator, List, Optional, Tuple

from shiftwage.models.wage import MINUTES_PER_DAY, TimeWindow

Segment = Tuple[int, int]

def interval_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    return max(0, min(a_end, b_end) - max(a_start, b_start))

def overlap_minutes(shift_start: int, shift_end: int, window: TimeWindow) -> int:
    """Overlap of a shift with the window occurrence anchored on the clock-in day"""
    window_start, window_end = window.bounds()
    return interval_overlap(shift_start, shift_end, window_start, window_end)

def shift_days(shift_start: int, shift_end: int, anchor: Optional[int] = None) -> Iterator[Tuple[int, int, int]]:
    """Split [shift_start, shift_end) into 24h pieces counted from `anchor`.

    Yields (piece_start, piece_end, day_offset); the anchor defaults to shift_start.
    """
    if anchor is None:
        anchor = shift_start
    day = max(0, (shift_start - anchor) // MINUTES_PER_DAY)

    while True:
        offset = day * MINUTES_PER_DAY
        piece_start = max(shift_start, anchor + offset)
        if piece_start >= shift_end:
            return
        yield piece_start, min(shift_end, anchor + offset + MINUTES_PER_DAY), offset
        day += 1

def window_occurrences(
    window: TimeWindow, shift_start: int, shift_end: int, anchor: Optional[int] = None
) -> Iterator[Segment]:
    """Yield the occurrence of the window each day of the shift is measured against, when they meet"""
    window_start, window_end = window.bounds()
    for piece_start, piece_end, offset in shift_days(shift_start, shift_end, anchor):
        start, end = window_start + offset, window_end + offset
        if interval_overlap(piece_start, piece_end, start, end):
            yield start, end

def clip_to_window(
    shift_start: int, shift_end: int, window: TimeWindow, anchor: Optional[int] = None
) -> List[Segment]:
    """Parts of the shift that fall inside the window, in time order"""
    window_start, window_end = window.bounds()
    segments = []
    for piece_start, piece_end, offset in shift_days(shift_start, shift_end, anchor):
        clipped_start = max(piece_start, window_start + offset)
        clipped_end = min(piece_end, window_end + offset)
        if clipped_start < clipped_end:
            segments.append((clipped_start, clipped_end))
    return segments

def daily_overlap_minutes(
    shift_start: int, shift_end: int, window: TimeWindow, anchor: Optional[int] = None
) -> int:
    """Overlap of a shift with the window, one occurrence per 24h worked.

    Equal to overlap_minutes for shifts up to a day long.
    """
    return sum(end - start for start, end in clip_to_window(shift_start, shift_end, window, anchor))

def segments_overlap_minutes(segments: List[Segment], window: TimeWindow, anchor: Optional[int] = None) -> int:
    return sum(daily_overlap_minutes(start, end, window, anchor) for start, end in segments)
