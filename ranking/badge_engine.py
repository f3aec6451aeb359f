"""
Badge rules for the WinnerTrack system.

The catalog is a table of rules evaluated uniformly against finalized player
statistics. Base rules only read statistics; composite rules additionally
require other badges of the same player. Composite rules run after every base
rule, and the attached badges keep catalog order.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from config.settings import BadgeThresholds
from models.badge import Badge, BadgeTier
from models.player import PairStat, PlayerStat
from models.tournament import TournamentRecord
from ranking.stats_aggregator import completed_only
from utils.date_utils import DateUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeContext:
    """Data set wide values the rules compare a player against."""
    thresholds: BadgeThresholds
    max_wins: int = 0
    max_sundays: int = 0
    top_pair: Optional[PairStat] = None
    first_winners: Tuple[str, ...] = ()


Predicate = Callable[[PlayerStat, BadgeContext], bool]
Label = Callable[[PlayerStat, BadgeContext], str]


@dataclass(frozen=True)
class BadgeRule:
    """One catalog entry: when it fires and what it attaches."""
    rule_id: str
    icon: str
    name: str
    tier: BadgeTier
    predicate: Predicate
    requires: Tuple[str, ...] = ()
    label: Optional[Label] = None
    subtitle: Optional[Label] = None

    @property
    def is_composite(self) -> bool:
        return bool(self.requires)

    def make_badge(self, player: PlayerStat, context: BadgeContext) -> Badge:
        return Badge(
            icon=self.icon,
            name=self.label(player, context) if self.label else self.name,
            tier=self.tier,
            subtitle=self.subtitle(player, context) if self.subtitle else None,
        )


def _always(player: PlayerStat, context: BadgeContext) -> bool:
    return True


def _sunday_king(player, context):
    return context.max_wins > 0 and player.total_wins == context.max_wins


def _golden_gloves(player, context):
    return player.total_wins >= context.thresholds.golden_gloves_wins


def _consistency_crown(player, context):
    t = context.thresholds
    return player.win_rate >= t.consistency_win_rate and player.sundays_played >= t.consistency_min_sundays


def _week_streak(player, context):
    t = context.thresholds
    return t.streak_threshold <= player.current_streak < t.lightning_streak


def _iron_man(player, context):
    return (player.sundays_played == context.max_sundays
            and context.max_sundays >= context.thresholds.iron_man_min_sundays)


def _dynamic_duo(player, context):
    top_pair = context.top_pair
    return (top_pair is not None and top_pair.includes(player.name)
            and top_pair.wins >= context.thresholds.dynamic_duo_min_wins)


def _universal_partner(player, context):
    return len(player.partners) >= context.thresholds.universal_partner_count


def _perfect_chemistry(player, context):
    together = Counter(win.partner for win in player.wins if win.partner)
    return any(
        wins >= context.thresholds.perfect_chemistry_min and wins == together[partner]
        for partner, wins in player.partners.items()
    )


def _duo_specialist(player, context):
    t = context.thresholds
    if not player.partners or player.total_wins < t.duo_specialist_min_wins:
        return False
    top_partner_wins = max(player.partners.values())
    return top_partner_wins / player.total_wins * 100 >= t.duo_specialist_rate


def _lightning_bolt(player, context):
    t = context.thresholds
    return t.lightning_streak <= player.current_streak < t.unstoppable_streak


def _unstoppable(player, context):
    return player.current_streak >= context.thresholds.unstoppable_streak


def _rising_star(player, context):
    t = context.thresholds
    if len(player.wins) < t.rising_star_min_wins:
        return False
    wins = sorted(player.wins, key=lambda win: DateUtils.sort_key(win.date), reverse=True)
    recent_dates = {win.date for win in wins[:3]}
    return len(recent_dates) == 3 and player.current_streak >= t.streak_threshold and len(wins) > 3


def _marathon_runner(player, context):
    return player.sundays_played >= context.thresholds.marathon_sundays


def _triple_threat(player, context):
    if not player.wins:
        return False
    per_day = Counter(win.date for win in player.wins)
    return max(per_day.values()) >= context.thresholds.triple_threat_same_day


def _perfect_attendance(player, context):
    # Counts Sundays only; consecutive attendance is not checked
    return player.sundays_played >= context.thresholds.perfect_attendance_weeks


def _precision_player(player, context):
    t = context.thresholds
    return player.win_rate >= t.precision_win_rate and player.sundays_played >= t.efficiency_min_sundays


def _balanced_champion(player, context):
    t = context.thresholds
    return (t.balanced_win_rate_min <= player.win_rate <= t.balanced_win_rate_max
            and player.total_wins >= t.balanced_min_wins)


def _lucky_seven(player, context):
    return player.total_wins == context.thresholds.lucky_wins


def _first_blood(player, context):
    return player.name in context.first_winners


def _legend(player, context):
    return player.total_wins >= context.thresholds.legend_wins


def _free_agent(player, context):
    t = context.thresholds
    return (bool(player.partners)
            and len(player.partners) >= t.free_agent_min_partners
            and max(player.partners.values()) == 1
            and player.total_wins >= t.free_agent_min_wins)


BADGE_CATALOG: Tuple[BadgeRule, ...] = (
    BadgeRule('sunday_king', '👑', 'Sunday King', BadgeTier.LEGENDARY, _sunday_king),
    BadgeRule('golden_gloves', '🥇', 'Golden Gloves', BadgeTier.EPIC, _golden_gloves),
    BadgeRule('consistency_crown', '💎', 'Consistency Crown', BadgeTier.RARE, _consistency_crown),
    BadgeRule('week_streak', '🔥', 'Week Streak', BadgeTier.RARE, _week_streak,
              label=lambda player, context: f"{player.current_streak}-Week Streak"),
    BadgeRule('iron_man', '🏋️', 'Iron Man', BadgeTier.EPIC, _iron_man),
    BadgeRule('dynamic_duo', '🔗', 'Dynamic Duo', BadgeTier.RARE, _dynamic_duo),
    BadgeRule('universal_partner', '🤝', 'Universal Partner', BadgeTier.RARE, _universal_partner),
    BadgeRule('perfect_chemistry', '💫', 'Perfect Chemistry', BadgeTier.EPIC, _perfect_chemistry),
    BadgeRule('duo_specialist', '🎯', 'Duo Specialist', BadgeTier.RARE, _duo_specialist),
    BadgeRule('lightning_bolt', '⚡', 'Lightning Bolt', BadgeTier.EPIC, _lightning_bolt),
    BadgeRule('unstoppable', '🌪️', 'Unstoppable', BadgeTier.LEGENDARY, _unstoppable),
    BadgeRule('rising_star', '📈', 'Rising Star', BadgeTier.RARE, _rising_star),
    BadgeRule('marathon_runner', '🏃', 'Marathon Runner', BadgeTier.EPIC, _marathon_runner),
    BadgeRule('triple_threat', '🎪', 'Triple Threat', BadgeTier.RARE, _triple_threat),
    BadgeRule('perfect_attendance', '📅', 'Perfect Attendance', BadgeTier.RARE, _perfect_attendance),
    BadgeRule('precision_player', '🎯', 'Precision Player', BadgeTier.LEGENDARY, _precision_player),
    BadgeRule('triple_crown', '🏆', 'Triple Crown', BadgeTier.LEGENDARY, _always,
              requires=('sunday_king', 'iron_man', 'dynamic_duo')),
    BadgeRule('balanced_champion', '⚖️', 'Balanced Champion', BadgeTier.RARE, _balanced_champion),
    BadgeRule('lucky_7', '🎰', 'Lucky 7', BadgeTier.RARE, _lucky_seven),
    BadgeRule('first_blood', '🌟', 'First Blood', BadgeTier.RARE, _first_blood),
    BadgeRule('legend', '🐉', 'Legend', BadgeTier.LEGENDARY, _legend),
    BadgeRule('free_agent', '🦅', 'Free Agent', BadgeTier.EPIC, _free_agent,
              subtitle=lambda player, context: f"{len(player.partners)} different partners"),
)


class BadgeEngine:
    """Evaluates the badge catalog and attaches badges to players."""

    def __init__(self, thresholds: Optional[BadgeThresholds] = None,
                 rules: Sequence[BadgeRule] = BADGE_CATALOG):
        self.thresholds = thresholds or BadgeThresholds()
        self.rules = tuple(rules)

    def build_context(self, players: Sequence[PlayerStat], pairs: Sequence[PairStat],
                      records: Sequence[TournamentRecord]) -> BadgeContext:
        """Compute the data set wide values the rules need."""
        dated = [record for record in completed_only(records)
                 if DateUtils.parse_date(record.date) is not None]
        dated.sort(key=lambda record: DateUtils.sort_key(record.date))
        first_winners = tuple(dict.fromkeys(dated[0].winners)) if dated else ()

        return BadgeContext(
            thresholds=self.thresholds,
            max_wins=max((p.total_wins for p in players), default=0),
            max_sundays=max((p.sundays_played for p in players), default=0),
            top_pair=pairs[0] if pairs else None,
            first_winners=first_winners,
        )

    def evaluate(self, player: PlayerStat, context: BadgeContext) -> List[Badge]:
        """Return the badges ``player`` earns, in catalog order."""
        earned: Set[str] = {
            rule.rule_id for rule in self.rules
            if not rule.is_composite and rule.predicate(player, context)
        }
        earned.update(
            rule.rule_id for rule in self.rules
            if rule.is_composite and set(rule.requires) <= earned and rule.predicate(player, context)
        )
        return [rule.make_badge(player, context) for rule in self.rules if rule.rule_id in earned]

    def assign_badges(self, players: Sequence[PlayerStat], pairs: Sequence[PairStat],
                      records: Sequence[TournamentRecord]) -> Dict[str, List[Badge]]:
        """Attach badges to every player; returns name to badge list."""
        if not players:
            return {}

        context = self.build_context(players, pairs, records)
        assigned = {}
        for player in players:
            player.badges = self.evaluate(player, context)
            assigned[player.name] = player.badges

        logger.info(f"Assigned {sum(len(b) for b in assigned.values())} badges to {len(players)} players")
        return assigned
