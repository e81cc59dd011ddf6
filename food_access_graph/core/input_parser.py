"""Loading of food access tables into rows of field strings."""

import logging
from pathlib import Path
from typing import IO, List, Sequence, Union

import pandas as pd

from .exceptions import DataLoadError

logger = logging.getLogger(__name__)


class TractDataLoader:
    """Reads a delimited food access export with a header row.

    All cells are kept as strings; no NA conversion is applied so that empty
    cells reach the node builder as empty strings. Data lines whose field
    count differs from the header, in either direction, are skipped.
    """

    def __init__(self, delimiter: str = ',', encoding: str = 'utf-8'):
        self.delimiter = delimiter
        self.encoding = encoding

    def read_csv(self, source: Union[str, Path, IO]) -> List[List[str]]:
        """Read a CSV file (or file-like object) into rows of field strings.

        Raises:
            DataLoadError: if the input is empty, not decodable or not
                parsable as delimited text
        """
        long_lines: List[Sequence[str]] = []

        def _skip_long_line(fields):
            long_lines.append(fields)
            return None

        # header=None: the header row fixes the column count, so the parser
        # never mistakes an extra leading field for an index column
        try:
            df = pd.read_csv(
                source,
                sep=self.delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                encoding=self.encoding,
                engine='python',
                on_bad_lines=_skip_long_line,
            )
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Cannot read food access table: {e}") from e

        data = df.iloc[1:]
        # Short lines are padded with missing values by the parser
        short = data.isna().any(axis=1)
        if short.any():
            logger.warning(f"Skipping {int(short.sum())} lines with fewer fields than the header")
        if long_lines:
            logger.warning(f"Skipping {len(long_lines)} lines with more fields than the header")

        rows = self.dataframe_to_rows(data[~short])

        name = source if isinstance(source, (str, Path)) else getattr(source, 'name', '<stream>')
        logger.info(f"Finished reading CSV file: {name} ({len(rows)} rows)")
        return rows

    @staticmethod
    def dataframe_to_rows(df: pd.DataFrame) -> List[List[str]]:
        """Convert a DataFrame into rows of strings in column order."""
        df = df.fillna('').astype(str)
        return df.values.tolist()
