"""Output adapters: ASCII text, PGM images and ledger audit files."""

from .ascii import to_ascii, side_by_side
from .pgm import to_pgm, write_pgm
from .ledger_export import ledger_to_records, write_ledger_jsonl, read_ledger_jsonl

__all__ = [
    'to_ascii',
    'side_by_side',
    'to_pgm',
    'write_pgm',
    'ledger_to_records',
    'write_ledger_jsonl',
    'read_ledger_jsonl',
]
