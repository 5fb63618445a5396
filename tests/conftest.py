"""
Shared pytest fixtures for escapement tests.

Provides raw and prepared escapement records and CSV content.
"""

import pytest
import pandas as pd

from escapement.data.loader import EscapementDataLoader


# ============================================================================
# Raw Data Fixtures
# ============================================================================

@pytest.fixture
def raw_escapement():
    """Raw records with the source's column names, including a wrong-sign longitude."""
    return pd.DataFrame({
        "sampleDate": [
            "2010-06-01", "2010-06-02", "2011-06-05",
            "2010-07-01", "2011-07-03", "2012-07-02",
            "2012-08-10",
        ],
        "Species": ["Sockeye", "Sockeye", "Sockeye", "Chinook", "Chinook", "Chinook", "Coho"],
        "SASAP.Region": ["Bristol Bay", "Bristol Bay", "Bristol Bay", "Kodiak", "Kodiak", "Kodiak", "Kodiak"],
        "Location": ["Kvichak River", "Kvichak River", "Wood River",
                     "Karluk River", "Karluk River", "Ayakulik River",
                     "Buskin River"],
        "DailyCount": [100, 50, 300, 20, 40, 60, 10],
        "Latitude": [59.34, 59.34, 59.20, 57.57, 57.57, 57.20, None],
        "Longitude": [-156.10, -156.10, 158.50, -154.40, -154.40, -154.50, -152.50],
    })


@pytest.fixture
def escapement_csv_text(raw_escapement):
    """The raw records serialized as CSV text."""
    return raw_escapement.to_csv(index=False)


@pytest.fixture
def escapement_csv(tmp_path, raw_escapement):
    """The raw records written to a CSV file."""
    path = tmp_path / "escapement.csv"
    raw_escapement.to_csv(path, index=False)
    return path


# ============================================================================
# Prepared Data Fixtures
# ============================================================================

@pytest.fixture
def records(raw_escapement):
    """Prepared records (snake_case columns, year/month/day added)."""
    return EscapementDataLoader().prepare(raw_escapement)


def make_records(rows):
    """Build prepared-style records from (species, region, year, location, count) tuples."""
    return pd.DataFrame(
        [
            {
                "species": species,
                "region": region,
                "year": year,
                "location": location,
                "daily_count": count,
            }
            for species, region, year, location, count in rows
        ]
    )


@pytest.fixture
def record_factory():
    """Factory building records from (species, region, year, location, count) tuples."""
    return make_records
