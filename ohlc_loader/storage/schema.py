"""DuckDB schema definitions."""

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS daily (
    ticker VARCHAR NOT NULL,
    date DATE NOT NULL,
    open DOUBLE NOT NULL,
    high DOUBLE NOT NULL,
    low DOUBLE NOT NULL,
    close DOUBLE NOT NULL,
    volume BIGINT NOT NULL,
    adjusted_close DOUBLE NOT NULL,
    PRIMARY KEY (ticker, date)
);
"""

INSERT_SQL = """
INSERT OR REPLACE INTO daily (ticker, date, open, high, low, close, volume, adjusted_close)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""

UPDATE_SQL = """
UPDATE daily
SET open = ?, high = ?, low = ?, close = ?, volume = ?, adjusted_close = ?
WHERE ticker = ? AND date = ?
"""
