"""
Utility functions package for WinnerTrack.
"""

from .date_utils import DateUtils, DateState
from .text_utils import TextUtils

__all__ = ['DateUtils', 'DateState', 'TextUtils']
