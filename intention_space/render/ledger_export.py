"""
Ledger audit export.

Writes every proposal of a run as one JSON object per line, so that
"which source proposed what, for which step" can be inspected or replayed.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union
import logging

from ..core.proposal import Proposal

logger = logging.getLogger(__name__)


def ledger_to_records(ledger: Iterable[Proposal]) -> List[Dict[str, Any]]:
    """Plain-dict records in ledger (append) order, with a sequence number."""
    records = []
    for seq, proposal in enumerate(ledger):
        record = proposal.to_dict()
        record["seq"] = seq
        records.append(record)
    return records


def write_ledger_jsonl(path: Union[str, Path], ledger: Iterable[Proposal]) -> int:
    """Write ledger records as JSONL.

    Returns:
        Number of records written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    records = ledger_to_records(ledger)
    with open(path, 'w', encoding='utf-8') as f:
        for record in records:
            f.write(json.dumps(record, sort_keys=True) + "\n")

    logger.info(f"Wrote {len(records)} ledger entries to {path}")
    return len(records)


def read_ledger_jsonl(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load records written by write_ledger_jsonl, skipping blank lines.

    Raises:
        json.JSONDecodeError: If a line is not valid JSON
    """
    records = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            records.append(json.loads(line))
    return records
