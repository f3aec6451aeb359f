"""
Record parser for the WinnerTrack system.

Turns the published spreadsheet export into tournament records. Columns are
read by position: date, participants, planned tournament count, teams,
winners text. The winners text holds one segment per tournament of the day,
e.g. ``"1-Kishore and Nagarjuna, 2-Naveen & Vivek"``.
"""

import csv
import io
import logging
import re
from typing import List, Optional, Tuple

from models.snapshot import ParseWarning
from models.tournament import CompletedTournament, ScheduledTournament, TournamentRecord
from utils.date_utils import DateUtils
from utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

MIN_COLUMNS = 5

# A new segment starts at ", <number> -"; other commas belong to the names
SEGMENT_SPLIT = re.compile(r',\s*(?=\d+\s*-)')
SEGMENT_PATTERN = re.compile(r'(\d+)\s*-\s*(.+)')
PAIR_SEPARATORS = (' and ', ' & ', ',')


class RecordParser:
    """Parses CSV text into an ordered list of tournament records."""

    def __init__(self):
        self.warnings: List[ParseWarning] = []

    def parse(self, csv_text: str) -> List[TournamentRecord]:
        """
        Parse the full export, header row included.
        Returns records sorted by date, most recent first.

        Quoted cells may contain commas and line breaks. Warnings carry the
        line on which the offending row ends.
        """
        self.warnings = []
        if not csv_text or not csv_text.strip():
            logger.info("CSV has no content")
            return []

        reader = csv.reader(io.StringIO(csv_text, newline=''))
        records: List[TournamentRecord] = []
        row_count = 0
        try:
            if next(reader, None) is None:
                logger.info("CSV has no data rows")
                return []

            for values in reader:
                if not any(value.strip() for value in values):
                    continue
                row_count += 1
                records.extend(self.parse_row(values, reader.line_num))
        except csv.Error as e:
            self._warn(reader.line_num, f"unreadable CSV ({e})", "")

        if not row_count:
            logger.info("CSV has no data rows")

        records.sort(key=lambda record: DateUtils.sort_key(record.date), reverse=True)
        logger.info(f"Parsed {len(records)} tournament records from {row_count} rows")
        return records

    def parse_row(self, values: List[str], line_num: int = 0) -> List[TournamentRecord]:
        """Parse one data row into zero, one scheduled or several completed records."""
        if len(values) < MIN_COLUMNS:
            self._warn(line_num, f"insufficient columns ({len(values)} < {MIN_COLUMNS})", ','.join(values))
            return []

        date = DateUtils.normalize_date(values[0])
        participants = tuple(TextUtils.parse_names(values[1]))
        planned = max(TextUtils.parse_int(values[2]), 0)
        teams = tuple(TextUtils.split_list(values[3]))
        winners_text = values[4].strip()

        if DateUtils.parse_date(date) is None:
            logger.warning(f"Line {line_num}: unrecognized date '{date}', stored as is")

        if not winners_text:
            logger.debug(f"Line {line_num}: scheduled tournament on {date}")
            return [ScheduledTournament(
                date=date,
                participants=participants,
                planned_tournament_count=planned,
                teams=teams,
            )]

        records = []
        for tournament_number, winners in self.parse_winners(winners_text, line_num):
            records.append(CompletedTournament(
                date=date,
                tournament_number=tournament_number,
                winners=winners,
                participants=participants,
                planned_tournament_count=planned,
                teams=teams,
            ))

        if not records:
            self._warn(line_num, "no tournament could be parsed from winners text", winners_text)
        else:
            logger.debug(f"Line {line_num}: {len(records)} completed tournament(s) on {date}")
        return records

    def parse_winners(self, winners_text: str, line_num: int = 0) -> List[Tuple[int, Tuple[str, str]]]:
        """Split winners text into ``(tournament_number, (winner1, winner2))`` entries."""
        tournaments = []
        for segment in SEGMENT_SPLIT.split(winners_text):
            match = SEGMENT_PATTERN.search(segment)
            if not match:
                self._warn(line_num, "could not match tournament pattern", segment)
                continue

            tournament_number = int(match.group(1))
            pair_text = match.group(2).strip()
            winners = self.parse_winner_pair(pair_text)
            if winners is None:
                self._warn(line_num, f"could not parse 2 winners for tournament {tournament_number}", pair_text)
                continue

            tournaments.append((tournament_number, winners))
        return tournaments

    @staticmethod
    def parse_winner_pair(text: str) -> Optional[Tuple[str, str]]:
        """Split "A and B", "A & B" or "A,B" into two names; None unless exactly two."""
        for separator in PAIR_SEPARATORS:
            if separator in text:
                names = [TextUtils.normalize_name(name) for name in text.split(separator)]
                names = [name for name in names if name]
                if len(names) == 2:
                    return names[0], names[1]
                return None
        return None

    def _warn(self, line_num: int, reason: str, text: str) -> None:
        logger.warning(f"Line {line_num}: {reason}: '{text}'")
        self.warnings.append(ParseWarning(line_number=line_num, reason=reason, text=text))
