"""
Motivational messages and tournament status texts for the WinnerTrack system.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from config.settings import DisplaySettings
from models.player import PairStat, PlayerStat
from models.tournament import TournamentRecord, TournamentState
from utils.date_utils import DateUtils
from utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

STREAK_MESSAGE_MIN = 3
BEST_DUO_MESSAGE_MIN_WINS = 2
HIGH_WIN_RATE = 80
HIGH_WIN_RATE_MIN_SUNDAYS = 5


@dataclass(frozen=True)
class TournamentStatus:
    """Heading texts for a tournament card."""
    title: str
    subtitle: str
    status: str
    status_class: str


def format_date(date_str: str) -> str:
    """Format a stored date as "Jan 5, 2025"; unparseable dates are returned as is."""
    parsed = DateUtils.parse_date(date_str)
    if parsed is None:
        return date_str
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_date_relative(date_str: str, now: datetime) -> str:
    """Format a past date as "Today", "Yesterday", "N days ago" or a plain date."""
    days = DateUtils.days_since(date_str, now)
    if days is None:
        return date_str
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if 0 < days <= 7:
        return f"{days} days ago"
    return format_date(date_str)


def describe_tournament(record: TournamentRecord, now: datetime, recent_days: int = 7) -> TournamentStatus:
    """Describe a record relative to ``now`` for the latest-tournament card."""
    state = DateUtils.classify(record.date, now)

    if record.state == TournamentState.SCHEDULED:
        if state is not None and state.is_today:
            return TournamentStatus("🎾 Tournament Day is TODAY!", "Good luck to all participants!",
                                    "Playing now", "status-today")
        if state is not None and state.is_future:
            return TournamentStatus("📅 Upcoming Tournament",
                                    f"{TextUtils.plural(state.days_until, 'day')} until game day",
                                    "Scheduled", "status-scheduled")
        return TournamentStatus("⏳ Awaiting Results", "Tournament completed, waiting for data update",
                                "Results pending", "status-pending")

    if state is not None and state.is_today:
        return TournamentStatus("🏆 Today's Champions!", "Fresh off the court",
                                "Completed today", "status-today-completed")
    if state is not None and state.days_ago <= recent_days:
        return TournamentStatus("🏆 Recent Winners", f"{TextUtils.plural(state.days_ago, 'day')} ago",
                                "Recent", "status-recent")
    return TournamentStatus("🏆 Winners", format_date(record.date), "Completed", "status-completed")


def should_show_participants(record: TournamentRecord, now: datetime, recent_days: int = 7) -> bool:
    """Participants are shown for today, upcoming days and recent results."""
    state = DateUtils.classify(record.date, now)
    if state is None:
        return False
    if state.is_today:
        return True
    if record.state == TournamentState.SCHEDULED:
        return state.is_future
    return state.days_ago <= recent_days


class MessageGenerator:
    """Builds the short list of storyline messages shown above the leaderboard."""

    def __init__(self, settings: Optional[DisplaySettings] = None):
        self.settings = settings or DisplaySettings()

    def generate(self, records: Sequence[TournamentRecord], players: Sequence[PlayerStat],
                 pairs: Sequence[PairStat], now: datetime) -> List[str]:
        """Return at most ``max_messages`` messages, highest priority first."""
        if not records:
            return []

        limit = self.settings.max_messages
        messages: List[str] = []
        latest_is_today = False

        if self.settings.date_aware_messages:
            latest = records[0]
            latest_state = DateUtils.classify(latest.date, now)
            latest_is_today = latest_state is not None and latest_state.is_today

            if latest_is_today:
                if latest.state == TournamentState.SCHEDULED:
                    messages.append("🎾 Tournament day is HERE! Good luck to all players!")
                    messages.append("💪 Time to prove your skills on the court!")
                else:
                    messages.append("🎉 Fresh champions crowned TODAY! Congratulations to the winners!")
                    messages.append("🔥 The competition was intense today!")

            upcoming = self._upcoming_days(records, now)
            if upcoming is not None and not latest_is_today:
                messages.append(f"📅 Next tournament in {TextUtils.plural(upcoming, 'day')}. Are you ready?")

            if self._has_pending_results(records, now) and len(messages) < 3:
                messages.append("⏳ Some tournament results are still pending. Check back soon!")

        if players:
            for player in players:
                if player.current_streak >= STREAK_MESSAGE_MIN and len(messages) < limit:
                    messages.append(f"🔥 {player.name} is on a {player.current_streak}-week winning streak!")

            if pairs and pairs[0].wins >= BEST_DUO_MESSAGE_MIN_WINS and len(messages) < limit:
                messages.append(f"🔗 Can anyone break the {pairs[0].pair} combo? "
                                f"They have {pairs[0].wins} wins together!")

            if len(players) >= 2 and len(messages) < limit:
                leader, runner_up = players[0], players[1]
                gap = leader.total_wins - runner_up.total_wins
                if gap == 1:
                    messages.append(f"⚔️ {runner_up.name} is just 1 win away from overtaking {leader.name}!")
                elif gap == 0:
                    messages.append(f"⚔️ Tied at the top! {leader.name} and {runner_up.name} are neck and neck!")

            for player in players:
                if (player.win_rate >= HIGH_WIN_RATE and player.sundays_played >= HIGH_WIN_RATE_MIN_SUNDAYS
                        and len(messages) < limit):
                    messages.append(f"💎 {player.name} has an impressive {player.win_rate:g}% win rate!")

        logger.debug(f"Generated {len(messages[:limit])} motivation messages")
        return messages[:limit]

    def _upcoming_days(self, records: Sequence[TournamentRecord], now: datetime) -> Optional[int]:
        """Days until the nearest scheduled tournament within the recent window."""
        days = []
        for record in records:
            if record.state != TournamentState.SCHEDULED:
                continue
            state = DateUtils.classify(record.date, now)
            if state is not None and state.is_future and state.days_until <= self.settings.recent_threshold_days:
                days.append(state.days_until)
        return min(days) if days else None

    @staticmethod
    def _has_pending_results(records: Sequence[TournamentRecord], now: datetime) -> bool:
        for record in records:
            if record.state != TournamentState.SCHEDULED:
                continue
            state = DateUtils.classify(record.date, now)
            if state is not None and state.is_past:
                return True
        return False
