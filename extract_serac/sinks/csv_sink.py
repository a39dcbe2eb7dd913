"""
CSV sink.

Writes the header and the flattened rows with every field quoted. Narrative
fields are multi-line free text, quoting keeps them in one cell.
"""
import csv
import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from extract_serac.exceptions import SinkFailure

logger = logging.getLogger(__name__)


def write_csv(
    rows: Sequence[Sequence[str]],
    header: Sequence[str],
    path: Union[str, Path],
) -> Path:
    """
    Write rows to a CSV file, header first, all fields quoted.

    Args:
        rows: Flattened rows, each matching header
        header: Column labels
        path: Output file; parent directories are created

    Returns:
        Resolved output path

    Raises:
        SinkFailure: the file cannot be written
    """
    output_path = Path(path).resolve()
    df = pd.DataFrame([list(row) for row in rows], columns=list(header), dtype=str)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False, quoting=csv.QUOTE_ALL, encoding="utf-8")
    except OSError as e:
        raise SinkFailure(f"Cannot write {output_path}: {e}") from e

    logger.info(f"Wrote {len(df)} rows to {output_path}")
    return output_path
