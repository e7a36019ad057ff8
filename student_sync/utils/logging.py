"""Logging utilities"""

import json
import os
from datetime import datetime
from zoneinfo import ZoneInfo

LOG_FILE = "log.jsonl"


def log_result(student_name, status, reason="", fields_filled=(), log_dir="."):
    """Append one student's result to the JSONL run log"""
    result = {
        "timestamp": datetime.now(ZoneInfo("America/Sao_Paulo")).isoformat(),
        "student_name": student_name,
        "status": status,
        "fields_filled": list(fields_filled),
    }
    if reason:
        result["failure_reason"] = reason

    try:
        with open(os.path.join(log_dir, LOG_FILE), "a", encoding="utf-8") as f:
            f.write(json.dumps(result, ensure_ascii=False) + "\n")
    except OSError as e:
        print(f"  ⚠️ Could not write run log: {e}")

    print(f"[{status}] {student_name}")
    if reason:
        print(f"  Reason: {reason}")
