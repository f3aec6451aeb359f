"""
Stats aggregation for the WinnerTrack system.

Folds completed tournament records into per-player and per-pair statistics,
then ranks the players.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config.settings import FeatureGate
from models.player import MatchEntry, Milestone, PairStat, PlayerStat, WinEntry
from models.tournament import AppState, CompletedTournament, TournamentRecord, TournamentState
from utils.date_utils import DateUtils
from utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

RECENT_FORM_COUNT = 5


@dataclass(frozen=True)
class FeatureUnlock:
    """Whether a gated feature is available yet, and how far off it is."""
    unlocked: bool
    progress: float = 1.0
    remaining: int = 0


def completed_only(records: Iterable[TournamentRecord]) -> List[CompletedTournament]:
    """Keep the completed records, in their original order."""
    return [record for record in records if record.state == TournamentState.COMPLETED]


def classify_app_state(records: Sequence[TournamentRecord]) -> AppState:
    """Classify the data set by how many tournaments have results."""
    if not records:
        return AppState.EMPTY

    completed_count = len(completed_only(records))
    if completed_count == 0:
        return AppState.SCHEDULED_ONLY
    if completed_count == 1:
        return AppState.FIRST_WIN
    if completed_count <= 3:
        return AppState.MINIMAL
    if completed_count <= 10:
        return AppState.GROWING
    return AppState.ESTABLISHED


def check_feature_unlock(feature_name: str, records: Sequence[TournamentRecord],
                         gates: Dict[str, FeatureGate]) -> FeatureUnlock:
    """Check a feature gate against the number of completed tournaments and winners."""
    gate = gates.get(feature_name)
    if gate is None:
        return FeatureUnlock(unlocked=True)

    completed = completed_only(records)
    winners = {name for record in completed for name in record.winners}
    tournament_count = len(completed)

    unlocked = tournament_count >= gate.min_tournaments and len(winners) >= gate.min_players
    progress = tournament_count / gate.min_tournaments if gate.min_tournaments else 1.0
    return FeatureUnlock(
        unlocked=unlocked,
        progress=min(progress, 1.0),
        remaining=max(0, gate.min_tournaments - tournament_count),
    )


class StatsAggregator:
    """Computes player and pair statistics from completed tournaments."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime.now()

    def calculate_player_stats(self, records: Sequence[TournamentRecord],
                               previous_ranks: Optional[Dict[str, int]] = None) -> List[PlayerStat]:
        """
        Build the ranked player list.
        Scheduled records in ``records`` are ignored.
        """
        completed = completed_only(records)
        players: Dict[str, PlayerStat] = {}

        for tournament in completed:
            self._add_participations(players, tournament)
            self._add_wins(players, tournament)

        total_sundays = len({tournament.date for tournament in completed})
        stats = list(players.values())
        for player in stats:
            self._finalize_player(player, total_sundays)

        self.rank_players(stats, previous_ranks or {})
        logger.info(f"Aggregated {len(stats)} players from {len(completed)} completed tournaments")
        return stats

    def _get_player(self, players: Dict[str, PlayerStat], name: str) -> PlayerStat:
        if name not in players:
            players[name] = PlayerStat(name=name)
        return players[name]

    def _add_participations(self, players: Dict[str, PlayerStat], tournament: CompletedTournament) -> None:
        for participant in dict.fromkeys(tournament.participants):
            player = self._get_player(players, participant)
            player.total_matches += 1
            player.sundays.add(tournament.date)
            player.matches.append(MatchEntry(tournament.date, tournament.tournament_number))

    def _add_wins(self, players: Dict[str, PlayerStat], tournament: CompletedTournament) -> None:
        # A duplicated winner name is a self-pair: credited once, without a partner
        for winner in dict.fromkeys(tournament.winners):
            player = self._get_player(players, winner)

            if winner in tournament.participants and player.matches:
                player.matches[-1].won = True
            else:
                player.total_matches += 1
                player.matches.append(MatchEntry(tournament.date, tournament.tournament_number, won=True))

            partner = tournament.partner_of(winner)
            partner = partner if partner != winner else None

            player.total_wins += 1
            player.sundays.add(tournament.date)
            player.wins.append(WinEntry(tournament.date, tournament.tournament_number, partner))
            if partner:
                player.partners[partner] = player.partners.get(partner, 0) + 1

    def _finalize_player(self, player: PlayerStat, total_sundays: int) -> None:
        player.total_losses = player.total_matches - player.total_wins
        player.win_rate = (
            round(player.total_wins / player.total_matches * 100, 1) if player.total_matches else 0.0
        )
        player.participation_rate = (
            round(player.sundays_played / total_sundays * 100) if total_sundays else 0
        )

        player.current_streak, player.best_streak = self.calculate_streaks(player.sundays)

        form, recent, form_rate = self.calculate_recent_form(player.matches)
        player.last5_form = form
        player.last5_matches = recent
        player.last5_win_rate = form_rate

        win_dates = sorted((win.date for win in player.wins), key=DateUtils.sort_key, reverse=True)
        player.last_win_date = win_dates[0] if win_dates else None
        player.days_since_last_win = (
            DateUtils.days_since(player.last_win_date, self.now) if player.last_win_date else None
        )

    @staticmethod
    def calculate_streaks(dates: Iterable[str]) -> Tuple[int, int]:
        """
        Return ``(current, best)`` runs of weekly tournament dates.

        The current run is anchored at the most recent date and drops to 0 as
        soon as a gap falls outside the weekly cadence.
        """
        days = sorted({d for d in dates if DateUtils.parse_date(d) is not None},
                      key=DateUtils.sort_key, reverse=True)
        if not days:
            return 0, 0

        current = 1
        best = 1
        run = 1
        for newer, older in zip(days, days[1:]):
            if DateUtils.is_weekly_cadence(newer, older):
                if current > 0:
                    current += 1
                run += 1
            else:
                current = 0
                run = 1
            best = max(best, run)

        return current, max(best, current)

    @staticmethod
    def calculate_recent_form(matches: Sequence[MatchEntry],
                              count: int = RECENT_FORM_COUNT) -> Tuple[str, List[MatchEntry], int]:
        """Return the form string ("W-L-W"), the entries it covers and their win rate."""
        ordered = sorted(matches, key=lambda match: DateUtils.sort_key(match.date), reverse=True)
        recent = ordered[:count]
        wins = sum(1 for match in recent if match.won)
        form = '-'.join('W' if match.won else 'L' for match in recent)
        win_rate = round(wins / len(recent) * 100) if recent else 0
        return form, recent, win_rate

    @staticmethod
    def rank_players(players: List[PlayerStat], previous_ranks: Dict[str, int]) -> None:
        """Sort in place by wins (fewer matches first on ties) and fill rank fields."""
        players.sort(key=lambda p: (-p.total_wins, p.total_matches))

        for index, player in enumerate(players):
            player.rank = index + 1
            previous = previous_ranks.get(player.name)
            if previous:
                player.previous_rank = previous
                player.rank_change = previous - player.rank
            else:
                player.previous_rank = None
                player.rank_change = 0

            player.next_milestone = None
            if index == 0:
                continue

            above = players[index - 1]
            wins_needed = above.total_wins - player.total_wins + 1
            if wins_needed > 0:
                player.next_milestone = Milestone(
                    kind='rank',
                    message=f"{TextUtils.plural(wins_needed, 'win')} away from #{above.rank} ({above.name})",
                    target_rank=above.rank,
                    target_name=above.name,
                    wins_needed=wins_needed,
                )
            else:
                player.next_milestone = Milestone(
                    kind='tie',
                    message=f"Tied at {player.total_wins} wins - need fewer matches to rank higher",
                )

    @staticmethod
    def rank_snapshot(players: Iterable[PlayerStat]) -> Dict[str, int]:
        """Name to rank mapping to persist for the next run."""
        return {player.name: player.rank for player in players}

    def calculate_pair_stats(self, records: Sequence[TournamentRecord]) -> List[PairStat]:
        """Count wins per unordered winner pair, most wins first."""
        pairs: Dict[Tuple[str, str], PairStat] = {}

        for tournament in completed_only(records):
            key = tuple(sorted(tournament.winners))
            if key not in pairs:
                pairs[key] = PairStat(players=key, last_win=tournament.date)

            stat = pairs[key]
            stat.wins += 1
            if DateUtils.sort_key(tournament.date) > DateUtils.sort_key(stat.last_win):
                stat.last_win = tournament.date

        result = sorted(pairs.values(), key=lambda pair: pair.wins, reverse=True)
        logger.info(f"Aggregated {len(result)} winning pairs")
        return result

    @staticmethod
    def get_player_statistics(players: Sequence[PlayerStat]) -> Dict[str, object]:
        """Get overall statistics for logging and reports."""
        if not players:
            return {}

        total_wins = sum(p.total_wins for p in players)
        total_matches = sum(p.total_matches for p in players)
        return {
            'total_players': len(players),
            'players_with_wins': sum(1 for p in players if p.total_wins > 0),
            'total_wins': total_wins,
            'total_matches': total_matches,
            'average_win_rate': round(sum(p.win_rate for p in players) / len(players), 1),
            'longest_current_streak': max(p.current_streak for p in players),
        }
