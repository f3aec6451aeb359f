"""
Data source package for WinnerTrack.
"""

from .sheet_source import DataSourceError, SAMPLE_CSV, SheetSource

__all__ = ['DataSourceError', 'SAMPLE_CSV', 'SheetSource']
