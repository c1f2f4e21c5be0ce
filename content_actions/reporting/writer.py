# content_actions/reporting/writer.py
"""
Writers to persist a RunReport as JSON and CSV.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Tuple

from ..core.controller.runner import StepOutcome
from ..core.result import EXCEPTION, RETURN_RESULT
from .schemas import RunReport, StepReport


def build_report(script: str, outcomes: List[StepOutcome]) -> RunReport:
    items: list[StepReport] = []
    for o in outcomes:
        outputs = o.outputs or {}
        items.append(
            StepReport(
                index=o.index,
                name=o.name,
                ok=o.ok,
                return_code=o.return_code,
                return_result=outputs.get(RETURN_RESULT, ""),
                exception=outputs.get(EXCEPTION),
                outputs=outputs,
            )
        )
    return RunReport(
        script=script,
        total=len(items),
        success=sum(1 for i in items if i.ok),
        failure=sum(1 for i in items if not i.ok),
        items=items,
    )


def write_report(report: RunReport, out_dir: Path) -> Tuple[Path, Path]:
    """
    Write a RunReport into out_dir as JSON and CSV.
    Returns (json_path, csv_path).
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / "report.json"
    csv_path = out_dir / "report.csv"

    # JSON
    json_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")

    # CSV: one row per step
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["script", "index", "name", "returnCode", "returnResult", "exception"])
        for item in report.items:
            writer.writerow(
                [
                    report.script,
                    item.index,
                    item.name,
                    item.return_code,
                    item.return_result,
                    item.exception or "",
                ]
            )

    return json_path, csv_path
