"""
Reports package for WinnerTrack: messages, status texts and CSV exports.
"""

from .message_generator import (
    MessageGenerator,
    TournamentStatus,
    describe_tournament,
    format_date,
    format_date_relative,
    should_show_participants,
)
from .report_generator import ReportGenerator, all_participants, form_indicator, rank_change_label, sort_leaderboard

__all__ = [
    'MessageGenerator', 'TournamentStatus', 'describe_tournament', 'format_date',
    'format_date_relative', 'should_show_participants',
    'ReportGenerator', 'all_participants', 'form_indicator', 'rank_change_label', 'sort_leaderboard',
]
