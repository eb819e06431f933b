"""
general.
=======

Shared general-purpose modules used across the search stack:
text normalization (`token`) and config/corpus loading plus debug logging (`utils`).
"""

__all__: list[str] = []
__docformat__ = "google"
