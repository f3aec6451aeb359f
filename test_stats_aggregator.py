#!/usr/bin/env python3
"""
Tests for player and pair statistics.

This test file focuses on:
- Wins, matches and rates per player
- Weekly streaks and recent form
- Ranking, rank changes and milestones
- Pair statistics
- App state and feature gates
"""

import unittest
from datetime import datetime

from config.settings import FeatureGate
from models.player import MatchEntry
from models.tournament import AppState, CompletedTournament, ScheduledTournament
from parsing.record_parser import RecordParser
from ranking.stats_aggregator import (
    StatsAggregator, check_feature_unlock, classify_app_state, completed_only,
)
from source.sheet_source import SAMPLE_CSV


def completed(date, winners, participants=None, number=1):
    return CompletedTournament(
        date=date,
        tournament_number=number,
        winners=winners,
        participants=tuple(participants if participants is not None else winners),
    )


class TestPlayerStats(unittest.TestCase):
    """Test cases for per-player statistics."""

    def setUp(self):
        """Set up test fixtures."""
        self.now = datetime(2025, 1, 15, 10, 0)
        self.aggregator = StatsAggregator(self.now)

    def test_single_win(self):
        """One completed tournament gives both winners a perfect record."""
        players = self.aggregator.calculate_player_stats([completed("2025-01-01", ("A", "B"))])

        self.assertEqual([p.name for p in players], ["A", "B"])
        a = players[0]
        self.assertEqual(a.total_wins, 1)
        self.assertEqual(a.total_matches, 1)
        self.assertEqual(a.total_losses, 0)
        self.assertEqual(a.win_rate, 100.0)
        self.assertEqual(a.sundays_played, 1)
        self.assertEqual(a.participation_rate, 100)
        self.assertEqual((a.current_streak, a.best_streak), (1, 1))
        self.assertEqual(a.last5_form, "W")
        self.assertEqual(a.partners, {"B": 1})
        self.assertEqual(a.last_win_date, "2025-01-01")
        self.assertEqual(a.days_since_last_win, 14)

    def test_winner_missing_from_participants_still_counted(self):
        """A winner not listed as participant gets a synthesized match."""
        players = self.aggregator.calculate_player_stats(
            [completed("2025-01-05", ("A", "B"), participants=("C", "D"))]
        )
        by_name = {p.name: p for p in players}

        self.assertEqual(by_name["A"].total_matches, 1)
        self.assertEqual(by_name["A"].total_wins, 1)
        self.assertEqual(by_name["C"].total_matches, 1)
        self.assertEqual(by_name["C"].total_wins, 0)
        self.assertEqual(by_name["C"].win_rate, 0.0)
        self.assertEqual(by_name["C"].last5_form, "L")
        self.assertIsNone(by_name["C"].last_win_date)

    def test_spacing_variants_are_one_player(self):
        """A name typed with a double space in one column merges with the other column."""
        records = RecordParser().parse(
            "Date,Participants,TournamentsPlayed,Teams,Winners\n"
            '05-01-2025,"john  doe,Ravi",1,"","1-John Doe and Ravi"'
        )
        players = self.aggregator.calculate_player_stats(records)

        self.assertEqual(sorted(p.name for p in players), ["John Doe", "Ravi"])
        for player in players:
            self.assertEqual((player.total_wins, player.total_matches), (1, 1))

    def test_scheduled_records_ignored(self):
        """Participants of scheduled tournaments earn no matches."""
        players = self.aggregator.calculate_player_stats([
            ScheduledTournament("2025-01-19", participants=("A", "Z")),
            completed("2025-01-12", ("A", "B")),
        ])

        self.assertEqual(sorted(p.name for p in players), ["A", "B"])
        self.assertEqual(players[0].total_matches, 1)

    def test_duplicate_participant_counted_once(self):
        """A name listed twice in one record is one match."""
        players = self.aggregator.calculate_player_stats(
            [completed("2025-01-12", ("A", "B"), participants=("A", "A", "B"))]
        )
        self.assertEqual(players[0].total_matches, 1)

    def test_self_pair_credited_once(self):
        """A pair of identical names counts one win and no partner."""
        players = self.aggregator.calculate_player_stats(
            [completed("2025-01-12", ("A", "A"), participants=("A",))]
        )

        self.assertEqual(len(players), 1)
        self.assertEqual(players[0].total_wins, 1)
        self.assertEqual(players[0].total_matches, 1)
        self.assertEqual(players[0].partners, {})
        self.assertIsNone(players[0].wins[0].partner)

    def test_two_consecutive_weeks(self):
        """Back to back Sundays make a two week streak."""
        players = self.aggregator.calculate_player_stats([
            completed("2025-01-12", ("A", "B")),
            completed("2025-01-05", ("A", "B")),
        ])

        a = players[0]
        self.assertEqual(a.total_wins, 2)
        self.assertEqual((a.current_streak, a.best_streak), (2, 2))

    def test_participation_rate(self):
        """Participation is attended days over all completed days."""
        players = self.aggregator.calculate_player_stats([
            completed("2025-01-12", ("A", "B")),
            completed("2025-01-05", ("A", "C")),
            completed("2025-01-05", ("A", "B"), number=2),
        ])
        by_name = {p.name: p for p in players}

        self.assertEqual(by_name["A"].participation_rate, 100)
        self.assertEqual(by_name["C"].participation_rate, 50)
        self.assertEqual(by_name["A"].win_rate, 100.0)

    def test_win_rate_rounded_to_one_decimal(self):
        """Rates are rounded to one decimal place."""
        records = [completed("2025-01-05", ("A", "B"), participants=("A", "B", "C"))]
        records += [completed("2025-01-05", ("B", "C"), participants=("A", "B", "C"), number=2)]
        records += [completed("2025-01-05", ("B", "C"), participants=("A", "B", "C"), number=3)]
        players = self.aggregator.calculate_player_stats(records)
        by_name = {p.name: p for p in players}

        self.assertEqual(by_name["A"].win_rate, 33.3)
        self.assertEqual(by_name["C"].win_rate, 66.7)

    def test_sample_data_invariants(self):
        """Counting invariants hold for the sample export."""
        records = RecordParser().parse(SAMPLE_CSV)
        players = self.aggregator.calculate_player_stats(records)
        pairs = self.aggregator.calculate_pair_stats(records)

        for player in players:
            self.assertLessEqual(player.total_wins, player.total_matches)
            self.assertLessEqual(player.sundays_played, player.total_matches)
            self.assertLessEqual(player.current_streak, player.best_streak)
            self.assertEqual(player.total_losses, player.total_matches - player.total_wins)
            self.assertEqual(player.total_wins, len(player.wins))
        self.assertEqual(sorted(p.rank for p in players), list(range(1, len(players) + 1)))
        self.assertEqual(sum(pair.wins for pair in pairs), len(completed_only(records)))
        self.assertEqual(sum(p.total_wins for p in players), 2 * len(completed_only(records)))

    def test_sample_data_leaders(self):
        """Leaders of the sample export."""
        players = self.aggregator.calculate_player_stats(RecordParser().parse(SAMPLE_CSV))
        kishore, naveen = players[0], players[1]

        self.assertEqual((kishore.name, kishore.total_wins, kishore.total_matches), ("Kishore", 3, 8))
        self.assertEqual((naveen.name, naveen.total_wins, naveen.total_matches), ("Naveen", 3, 8))
        self.assertEqual(kishore.win_rate, 37.5)
        self.assertEqual(kishore.last5_form, "W-L-L-W-L")
        self.assertEqual(kishore.last5_win_rate, 40)
        self.assertEqual((kishore.current_streak, kishore.best_streak), (0, 3))


class TestStreaksAndForm(unittest.TestCase):
    """Test cases for streak and form helpers."""

    def test_no_dates(self):
        self.assertEqual(StatsAggregator.calculate_streaks([]), (0, 0))

    def test_single_date(self):
        self.assertEqual(StatsAggregator.calculate_streaks(["2025-01-05"]), (1, 1))

    def test_broken_current_streak_keeps_best(self):
        """A long gap at the top drops the current streak but not the best run."""
        dates = ["2025-03-02", "2025-02-23", "2025-02-02", "2025-01-26", "2025-01-19"]
        self.assertEqual(StatsAggregator.calculate_streaks(dates), (0, 3))

    def test_cadence_band_edges(self):
        """Gaps of 9 days continue a streak, 10 days break it."""
        self.assertEqual(StatsAggregator.calculate_streaks(["2025-01-14", "2025-01-05"]), (2, 2))
        self.assertEqual(StatsAggregator.calculate_streaks(["2025-01-15", "2025-01-05"]), (0, 1))
        self.assertEqual(StatsAggregator.calculate_streaks(["2025-01-10", "2025-01-05"]), (2, 2))
        self.assertEqual(StatsAggregator.calculate_streaks(["2025-01-09", "2025-01-05"]), (0, 1))

    def test_unordered_and_repeated_dates(self):
        """Input order and duplicates do not matter."""
        dates = ["2025-01-05", "2025-01-19", "2025-01-12", "2025-01-12"]
        self.assertEqual(StatsAggregator.calculate_streaks(dates), (3, 3))

    def test_unparseable_dates_skipped(self):
        self.assertEqual(StatsAggregator.calculate_streaks(["someday", "2025-01-05"]), (1, 1))

    def test_recent_form(self):
        """Form lists the newest matches first."""
        matches = [
            MatchEntry("2025-01-05", 1, True),
            MatchEntry("2025-01-12", 1, False),
            MatchEntry("2025-01-19", 1, True),
        ]
        form, recent, rate = StatsAggregator.calculate_recent_form(matches)

        self.assertEqual(form, "W-L-W")
        self.assertEqual([m.date for m in recent], ["2025-01-19", "2025-01-12", "2025-01-05"])
        self.assertEqual(rate, 67)

    def test_recent_form_limited_to_five(self):
        matches = [MatchEntry(f"2025-01-{day:02d}", 1, day % 2 == 0) for day in range(1, 8)]
        form, recent, rate = StatsAggregator.calculate_recent_form(matches)

        self.assertEqual(len(recent), 5)
        self.assertEqual(form, "L-W-L-W-L")
        self.assertEqual(rate, 40)

    def test_recent_form_empty(self):
        self.assertEqual(StatsAggregator.calculate_recent_form([]), ("", [], 0))


class TestRanking(unittest.TestCase):
    """Test cases for ranks, rank changes and milestones."""

    def setUp(self):
        """Set up test fixtures."""
        self.aggregator = StatsAggregator(datetime(2025, 2, 1))

    def test_fewer_matches_wins_tie(self):
        """Equal wins are ordered by fewer matches."""
        records = [
            completed("2025-01-05", ("P1", "X"), participants=("P1", "P2", "X")),
            completed("2025-01-05", ("P1", "Y"), participants=("P1", "P2", "Y"), number=2),
            completed("2025-01-12", ("P2", "Z"), participants=("P1", "P2", "Z")),
            completed("2025-01-12", ("P2", "Z"), participants=("P2", "Z"), number=2),
        ]
        players = self.aggregator.calculate_player_stats(records)
        by_name = {p.name: p for p in players}

        self.assertEqual(by_name["P1"].total_wins, 2)
        self.assertEqual(by_name["P1"].total_matches, 3)
        self.assertEqual(by_name["P2"].total_matches, 4)
        self.assertLess(by_name["P1"].rank, by_name["P2"].rank)

    def test_rank_change_against_previous_snapshot(self):
        """Rank change is previous minus current; new players show no change."""
        records = [
            completed("2025-01-12", ("A", "C")),
            completed("2025-01-05", ("A", "B")),
        ]
        players = self.aggregator.calculate_player_stats(records, previous_ranks={"B": 1, "A": 2})
        by_name = {p.name: p for p in players}

        self.assertEqual(by_name["A"].rank, 1)
        self.assertEqual(by_name["A"].previous_rank, 2)
        self.assertEqual(by_name["A"].rank_change, 1)
        self.assertEqual(by_name["B"].rank_change, by_name["B"].previous_rank - by_name["B"].rank)
        self.assertLess(by_name["B"].rank_change, 0)
        self.assertIsNone(by_name["C"].previous_rank)
        self.assertEqual(by_name["C"].rank_change, 0)

    def test_milestones(self):
        """Each player below the leader is told how many wins they need."""
        records = [
            completed("2025-01-19", ("A", "B")),
            completed("2025-01-12", ("A", "C")),
            completed("2025-01-05", ("A", "B")),
        ]
        players = self.aggregator.calculate_player_stats(records)

        self.assertIsNone(players[0].next_milestone)
        b = players[1]
        self.assertEqual(b.name, "B")
        self.assertEqual(b.next_milestone.kind, "rank")
        self.assertEqual(b.next_milestone.wins_needed, 2)
        self.assertEqual(b.next_milestone.message, "2 wins away from #1 (A)")
        c = players[2]
        self.assertEqual(c.next_milestone.message, "2 wins away from #2 (B)")

    def test_tied_players_need_one_win(self):
        """Equal wins still need one more win to pass."""
        players = self.aggregator.calculate_player_stats([completed("2025-01-01", ("A", "B"))])

        self.assertEqual(players[1].next_milestone.wins_needed, 1)
        self.assertEqual(players[1].next_milestone.message, "1 win away from #1 (A)")

    def test_rank_snapshot(self):
        players = self.aggregator.calculate_player_stats([completed("2025-01-01", ("A", "B"))])
        self.assertEqual(self.aggregator.rank_snapshot(players), {"A": 1, "B": 2})

    def test_player_statistics_summary(self):
        players = self.aggregator.calculate_player_stats([
            completed("2025-01-01", ("A", "B"), participants=("A", "B", "C")),
        ])
        summary = self.aggregator.get_player_statistics(players)

        self.assertEqual(summary['total_players'], 3)
        self.assertEqual(summary['players_with_wins'], 2)
        self.assertEqual(summary['total_wins'], 2)
        self.assertEqual(self.aggregator.get_player_statistics([]), {})


class TestPairStats(unittest.TestCase):
    """Test cases for pair statistics."""

    def setUp(self):
        """Set up test fixtures."""
        self.aggregator = StatsAggregator(datetime(2025, 2, 1))

    def test_unordered_pairs_merge(self):
        """A & B and B & A are the same pair."""
        pairs = self.aggregator.calculate_pair_stats([
            completed("2025-01-19", ("B", "A")),
            completed("2025-01-12", ("C", "D")),
            completed("2025-01-05", ("A", "B")),
        ])

        self.assertEqual(len(pairs), 2)
        self.assertEqual(pairs[0].players, ("A", "B"))
        self.assertEqual(pairs[0].pair, "A & B")
        self.assertEqual(pairs[0].wins, 2)
        self.assertEqual(pairs[0].last_win, "2025-01-19")
        self.assertTrue(pairs[0].includes("B"))
        self.assertFalse(pairs[0].includes("C"))

    def test_last_win_is_latest_regardless_of_order(self):
        pairs = self.aggregator.calculate_pair_stats([
            completed("2025-01-05", ("A", "B")),
            completed("2025-01-19", ("A", "B")),
            completed("2025-01-12", ("A", "B")),
        ])
        self.assertEqual(pairs[0].last_win, "2025-01-19")

    def test_sample_top_pair(self):
        records = RecordParser().parse(SAMPLE_CSV)
        pairs = self.aggregator.calculate_pair_stats(records)

        self.assertEqual(pairs[0].pair, "Naveen & Vivek")
        self.assertEqual(pairs[0].wins, 2)
        self.assertTrue(all(pair.wins == 1 for pair in pairs[1:]))

    def test_no_completed_records(self):
        self.assertEqual(self.aggregator.calculate_pair_stats([ScheduledTournament("2025-01-05")]), [])


class TestAppState(unittest.TestCase):
    """Test cases for app state classification and feature gates."""

    def _completed(self, count):
        return [completed(f"2025-01-{day:02d}", ("A", "B")) for day in range(1, count + 1)]

    def test_app_states(self):
        self.assertEqual(classify_app_state([]), AppState.EMPTY)
        self.assertEqual(classify_app_state([ScheduledTournament("2025-01-05")]), AppState.SCHEDULED_ONLY)
        self.assertEqual(classify_app_state(self._completed(1)), AppState.FIRST_WIN)
        self.assertEqual(classify_app_state(self._completed(2)), AppState.MINIMAL)
        self.assertEqual(classify_app_state(self._completed(3)), AppState.MINIMAL)
        self.assertEqual(classify_app_state(self._completed(4)), AppState.GROWING)
        self.assertEqual(classify_app_state(self._completed(10)), AppState.GROWING)
        self.assertEqual(classify_app_state(self._completed(11)), AppState.ESTABLISHED)

    def test_scheduled_records_do_not_count(self):
        records = [ScheduledTournament("2025-02-01")] + self._completed(1)
        self.assertEqual(classify_app_state(records), AppState.FIRST_WIN)

    def test_feature_locked_until_enough_data(self):
        gates = {'basic_rankings': FeatureGate(min_tournaments=2, min_players=2)}

        locked = check_feature_unlock('basic_rankings', self._completed(1), gates)
        self.assertFalse(locked.unlocked)
        self.assertEqual(locked.progress, 0.5)
        self.assertEqual(locked.remaining, 1)

        unlocked = check_feature_unlock('basic_rankings', self._completed(3), gates)
        self.assertTrue(unlocked.unlocked)
        self.assertEqual(unlocked.progress, 1.0)
        self.assertEqual(unlocked.remaining, 0)

    def test_feature_needs_distinct_winners(self):
        gates = {'duo_tracking': FeatureGate(min_tournaments=3, min_players=3)}
        self.assertFalse(check_feature_unlock('duo_tracking', self._completed(4), gates).unlocked)

    def test_unknown_feature_is_unlocked(self):
        self.assertTrue(check_feature_unlock('anything', [], {}).unlocked)


if __name__ == '__main__':
    unittest.main()
