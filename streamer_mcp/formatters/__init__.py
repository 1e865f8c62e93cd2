"""Response formatters"""

from .stream import format_streamer_list, format_live_status, format_live_list

__all__ = [
    'format_streamer_list',
    'format_live_status',
    'format_live_list'
]
