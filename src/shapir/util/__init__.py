from .time import normalize_dt, now_utc, parse_api_datetime, to_api_date

__all__ = [
    "now_utc",
    "parse_api_datetime",
    "to_api_date",
    "normalize_dt",
]
