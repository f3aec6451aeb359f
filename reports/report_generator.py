"""
Report generator for the WinnerTrack system.
"""

import os
import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from models.player import PlayerStat
from models.snapshot import StatsSnapshot
from models.tournament import TournamentRecord, TournamentState
from reports.message_generator import format_date

logger = logging.getLogger(__name__)

SORT_KEYS = {
    'wins': lambda p: (-p.total_wins, p.total_matches),
    'winrate': lambda p: (-p.win_rate, -p.total_wins),
    'form': lambda p: (-p.last5_win_rate, -p.total_wins),
    'streak': lambda p: (-p.current_streak, -p.best_streak, -p.total_wins),
}


def sort_leaderboard(players: Sequence[PlayerStat], sort_by: str = 'wins') -> List[PlayerStat]:
    """Return the players ordered by one of the leaderboard criteria."""
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort criterion '{sort_by}', expected one of {', '.join(SORT_KEYS)}")
    return sorted(players, key=SORT_KEYS[sort_by])


def rank_change_label(change: int) -> str:
    """Arrow label for a rank change ("↑2", "↓1" or "-")."""
    if change > 0:
        return f"↑{change}"
    if change < 0:
        return f"↓{abs(change)}"
    return "-"


def form_indicator(win_rate: float) -> str:
    """Word for a recent win rate."""
    if win_rate >= 80:
        return "🔥 Hot"
    if win_rate >= 60:
        return "📈 Rising"
    if win_rate >= 40:
        return "➖ Steady"
    if win_rate >= 20:
        return "📉 Falling"
    return "❄️ Cold"


def all_participants(records: Iterable[TournamentRecord]) -> List[str]:
    """Every registered participant across all records, sorted by name."""
    names = set()
    for record in records:
        names.update(record.participants)
    return sorted(names)


class ReportGenerator:
    """Generates CSV reports from a stats snapshot."""

    def __init__(self, snapshot: StatsSnapshot, max_badges: Optional[int] = None):
        self.snapshot = snapshot
        self.max_badges = max_badges

    def generate_leaderboard_report(self, output_file: str, sort_by: str = 'wins') -> int:
        """
        Export the leaderboard to CSV.
        Returns the number of players exported.
        """
        players = sort_leaderboard(self.snapshot.players, sort_by)
        if not players:
            logger.warning("No players found for leaderboard report")
            return 0

        data = []
        for player in players:
            badges = player.badges[:self.max_badges] if self.max_badges else player.badges
            data.append({
                'Rank': player.rank,
                'Change': rank_change_label(player.rank_change),
                'Player': player.name,
                'Wins': player.total_wins,
                'Matches': player.total_matches,
                'Losses': player.total_losses,
                'Win Rate': player.win_rate,
                'Sundays': player.sundays_played,
                'Participation': player.participation_rate,
                'Current Streak': player.current_streak,
                'Best Streak': player.best_streak,
                'Form': player.last5_form,
                'Form Trend': form_indicator(player.last5_win_rate),
                'Last Win': format_date(player.last_win_date) if player.last_win_date else '',
                'Next Milestone': player.next_milestone.message if player.next_milestone else '',
                'Badges': ', '.join(f"{badge.icon} {badge.name}" for badge in badges),
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated leaderboard report with {len(players)} players: {output_file}")
        return len(players)

    def generate_pair_report(self, output_file: str) -> int:
        """Export pair statistics to CSV."""
        pairs = self.snapshot.pairs
        if not pairs:
            logger.warning("No pairs found for pair report")
            return 0

        df = pd.DataFrame([
            {'Pair': pair.pair, 'Wins': pair.wins, 'Last Win': format_date(pair.last_win)}
            for pair in pairs
        ])
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated pair report with {len(pairs)} pairs: {output_file}")
        return len(pairs)

    def generate_history_report(self, output_file: str) -> int:
        """Export every tournament record, most recent first."""
        records = self.snapshot.records
        if not records:
            logger.warning("No tournaments found for history report")
            return 0

        data = []
        for record in records:
            completed = record.state == TournamentState.COMPLETED
            data.append({
                'Date': record.date,
                'State': record.state.value,
                'Tournament': record.tournament_number if completed else '',
                'Winners': ' & '.join(record.winners) if completed else '',
                'Participants': len(record.participants),
                'Teams': ', '.join(record.teams),
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated history report with {len(records)} tournaments: {output_file}")
        return len(records)

    def generate_all_reports(self, output_directory: str = "reports") -> Dict[str, int]:
        """Generate every report into ``output_directory``."""
        os.makedirs(output_directory, exist_ok=True)

        results = {
            'leaderboard': self.generate_leaderboard_report(os.path.join(output_directory, "leaderboard.csv")),
            'pairs': self.generate_pair_report(os.path.join(output_directory, "pairs.csv")),
            'history': self.generate_history_report(os.path.join(output_directory, "tournament_history.csv")),
        }

        logger.info(f"Generated all reports in directory: {output_directory}")
        return results
