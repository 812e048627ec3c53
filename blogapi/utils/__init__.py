from blogapi.utils.helpers import get_summary, host, time_taken, today_str, utc_now
from blogapi.utils.text import calculate_reading_time, calculate_word_count, slugify

__all__ = [
    "calculate_reading_time",
    "calculate_word_count",
    "get_summary",
    "host",
    "slugify",
    "time_taken",
    "today_str",
    "utc_now",
]
