"""
Debug-only rejected field collector

Read-only observability into CSV values that failed normalization and were skipped.
It does NOT change behavior; a rejected field never fails the student.

Usage:
    1. Enable with --debug-rejected CLI flag
    2. Call record_rejected_field() when a value is rejected
    3. Call flush_rejected_fields() once the batch ends

Output:
    debug_rejected_fields.jsonl - one JSON object per rejected value
"""

import json
import os
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Dict, List

DEBUG_FILE = "debug_rejected_fields.jsonl"

_rejected_buffer: List[Dict] = []


def record_rejected_field(*, student_name: str, field_kind: str, raw_value: str, reason: str):
    """Record a rejected field to the in-memory buffer."""
    _rejected_buffer.append(
        {
            "timestamp": datetime.now(ZoneInfo("America/Sao_Paulo")).isoformat(),
            "student_name": student_name,
            "field": field_kind,
            "raw_value": raw_value,
            "reason": reason,
        }
    )


def pending_rejected_fields():
    return list(_rejected_buffer)


def flush_rejected_fields(output_dir="."):
    """Append buffered entries to debug_rejected_fields.jsonl and clear the buffer."""
    if not _rejected_buffer:
        return

    path = os.path.join(output_dir, DEBUG_FILE)
    try:
        with open(path, "a", encoding="utf-8") as f:
            for record in _rejected_buffer:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError as e:
        print(f"❌ Error saving {path}: {e}")
        return

    _rejected_buffer.clear()
