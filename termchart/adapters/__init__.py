from .normalize import series_from_arrays, series_from_records

__all__ = ["series_from_arrays", "series_from_records"]
