"""
Parsing package for WinnerTrack.
"""

from .record_parser import RecordParser

__all__ = ['RecordParser']
