"""
Data source for the WinnerTrack system: the published spreadsheet CSV.
"""

import logging
import time
from typing import Optional

import requests

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = 'YOUR_GOOGLE_SHEETS_CSV_URL_HERE'

SAMPLE_CSV = """Date,Participants,TournamentsPlayed,Teams,Winners
15-02-2026,"Kishore,Rahul,Naveen,Vardhan,Vivek,Mahindra,Anil,Nagarjuna",0,"",""
08-02-2026,"Kishore,Koushik,Naveen,Vardhan,Vivek,Charan,Anil,Nagarjuna,Rahul,Mahindra,Ravi,Kumar",3,"Team A,Team B,Team C","1-Kishore and Nagarjuna, 2-Naveen and Vivek, 3-Ravi and Kumar"
22-01-2026,"Naveen,Vardhan,Kishore,Vivek,Ravi,Kumar,Charan,Anil",2,"Team A,Team B","1-Vardhan and Kishore, 2-Naveen and Vivek"
15-01-2026,"Naveen,Vardhan,Kishore,Vivek,Koushik,Mahindra",1,"Team Elite","1-Naveen and Koushik"
08-01-2026,"Naveen,Vardhan,Kishore,Vivek,Ravi,Kumar,Anil,Charan",2,"Team X,Team Y","1-Ravi and Charan, 2-Kishore and Anil"
"""


class DataSourceError(Exception):
    """Raised when no CSV text could be obtained at all."""


class SheetSource:
    """Fetches the published sheet as CSV text."""

    def __init__(self, csv_url: str = '', timeout: int = 30, test_mode: bool = False,
                 session: Optional[requests.Session] = None):
        self.csv_url = csv_url
        self.timeout = timeout
        self.test_mode = test_mode
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: dict) -> 'SheetSource':
        source = (config or {}).get('source') or {}
        return cls(
            csv_url=source.get('csv_url', ''),
            timeout=source.get('timeout', 30),
            test_mode=source.get('test_mode', False),
        )

    def fetch(self) -> str:
        """Return the CSV text or raise DataSourceError."""
        if self.test_mode:
            logger.info("Test mode enabled, using sample data")
            return SAMPLE_CSV

        if not self.csv_url or self.csv_url == PLACEHOLDER_URL:
            raise DataSourceError("No CSV URL configured; set source.csv_url in the configuration file")

        separator = '&' if '?' in self.csv_url else '?'
        url = f"{self.csv_url}{separator}cachebust={int(time.time() * 1000)}"

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching CSV from {self.csv_url}: {e}")
            raise DataSourceError(f"Cannot connect to the spreadsheet: {e}") from e

        if response.status_code == 404:
            raise DataSourceError("Sheet not found (404). Verify the CSV URL and that the sheet is published.")
        if response.status_code == 403:
            raise DataSourceError("Access denied (403). Make sure the sheet is published to the web.")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"HTTP error fetching CSV: {e}")
            raise DataSourceError(f"HTTP {response.status_code}: {response.reason}") from e

        text = response.text
        if not text or not text.strip():
            raise DataSourceError("Received empty data from the spreadsheet")

        logger.info(f"Loaded {len(text)} characters of CSV data")
        return text
