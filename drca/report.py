from __future__ import annotations

"""
DRCA report generator
---------------------
This module writes a DOCX report summarising the loaded datasets and the
answers of every no-argument query.

Design goals:
- Keep DRCA usable even if report dependencies are missing (lazy imports).
- Reuse the engine's own query methods so the report and the CLI always agree.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from collections import Counter
import logging
import os
import tempfile

from .engine import DRCA

logger = logging.getLogger(__name__)


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "DRCA Analytical Report"
    subtitle: str = "Disaster Relief Claims Analytics"

    # How many categories to show in bar charts / tables
    top_n: int = 10

    # Optional: list of CLI commands issued before the report was requested
    command_log: Optional[List[str]] = None


def generate_docx_report(
    engine: DRCA,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """Generate a DOCX report + charts for the engine's datasets.

    Returns the path written.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not engine.disasters and not engine.claims:
        raise ValueError("Nothing to report on (no disasters or claims loaded).")

    # -----------------------------
    # 1) Query results
    # -----------------------------
    summary = engine.summary()
    month_costs = engine.claim_cost_by_month()
    agent_costs = engine.build_map_of_agents_to_total_claim_cost()
    state_counts = sorted(
        engine.idx.disaster_counts.items(), key=lambda kv: (-kv[1], kv[0])
    )[:config.top_n]
    severities = [c.severity_rating for c in engine.claims]

    # -----------------------------
    # 2) Charts
    # -----------------------------
    with tempfile.TemporaryDirectory(prefix="drca_report_") as tmpdir:
        # Each chart is: (title, file_path, caption)
        chart_paths: List[Tuple[str, str, str]] = []

        def _save(filename: str) -> str:
            path = os.path.join(tmpdir, filename)
            plt.tight_layout()
            plt.savefig(path, dpi=200)
            plt.close()
            return path

        def _bar(title: str, labels: List[str], values: List[float], ylabel: str, caption: str, filename: str) -> None:
            plt.figure()
            plt.bar(labels, values)
            plt.xticks(rotation=45, ha="right")
            plt.title(title)
            plt.ylabel(ylabel)
            chart_paths.append((title, _save(filename), caption))

        if state_counts:
            _bar(
                f"Top {config.top_n} States by Number of Disasters",
                [k for k, _ in state_counts],
                [v for _, v in state_counts],
                "Disasters",
                "Read from the per-state disaster-count index.",
                "top_states.png",
            )

        if month_costs:
            shown = month_costs[:config.top_n]
            _bar(
                "Total Claim Cost by Declaration Month",
                [k for k, _ in shown],
                [v for _, v in shown],
                "Estimated cost (US$)",
                "Month and year of each claim's disaster declaration; highest first.",
                "month_costs.png",
            )

        if severities:
            c_sev = Counter(severities)
            levels = np.arange(1, 11)
            plt.figure()
            plt.bar(levels, [c_sev[int(s)] for s in levels], edgecolor="black", linewidth=0.8)
            plt.xticks(levels)
            plt.title("Claims by Severity Rating")
            plt.xlabel("Severity rating")
            plt.ylabel("Claims")
            chart_paths.append((
                "Claims by Severity Rating",
                _save("severity.png"),
                "Severity is an integer scale from 1 (minor) to 10 (critical).",
            ))

        # -----------------------------
        # 3) Build DOCX report
        # -----------------------------
        doc = Document()

        style = doc.styles["Normal"]
        style.font.name = "Calibri"
        style.font.size = Pt(11)

        def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
            p = doc.add_paragraph()
            r = p.add_run(text)
            r.bold = bold
            r.italic = italic
            r.font.size = Pt(size)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

        def _kv(key: str, value: str) -> None:
            p = doc.add_paragraph()
            r = p.add_run(f"{key}: ")
            r.bold = True
            p.add_run(value)

        _center_title(config.title, 22, bold=True)
        _center_title(config.subtitle, 12, italic=True)

        doc.add_paragraph("")
        if engine.dataset_path:
            _kv("Data directory", os.path.basename(os.path.normpath(engine.dataset_path)))
        _kv("Disasters", str(len(engine.disasters)))
        _kv("Claims", str(len(engine.claims)))
        _kv("Agents", str(len(engine.agents)))
        _kv("Claim handlers", str(len(engine.claim_handlers)))

        doc.add_paragraph("")
        doc.add_heading("Key findings", level=1)
        _kv("Closed claims", str(summary["closed_claims"]))
        _kv("State with most disasters", summary["state_with_most_disasters"] or "n/a")
        _kv("State with least disasters", summary["state_with_least_disasters"] or "n/a")
        _kv("Disasters declared after their end date", str(summary["disasters_declared_after_end_date"]))
        _kv("Top three months by claim cost", ", ".join(summary["top_three_months"]) or "n/a")

        if config.command_log:
            doc.add_paragraph("")
            doc.add_heading("Command log", level=1)
            for line in config.command_log:
                doc.add_paragraph(line, style="List Bullet")

        doc.add_paragraph("")
        doc.add_heading("Visualizations", level=1)
        for title, path, caption in chart_paths:
            doc.add_paragraph(title)
            doc.add_picture(path, width=Inches(6.5))
            doc.add_paragraph(caption)
            doc.add_paragraph("")

        top_agents = sorted(agent_costs.items(), key=lambda kv: (-kv[1], kv[0]))[:config.top_n]
        if top_agents:
            names = {a.id: a for a in engine.agents}
            doc.add_heading(f"Top {config.top_n} agents by total claim cost", level=1)
            t = doc.add_table(rows=1, cols=4)
            h = t.rows[0].cells
            h[0].text = "Agent ID"
            h[1].text = "Name"
            h[2].text = "State"
            h[3].text = "Total claim cost (US$)"
            for agent_id, total in top_agents:
                r = t.add_row().cells
                r[0].text = str(agent_id)
                r[1].text = names[agent_id].full_name()
                r[2].text = names[agent_id].state
                r[3].text = f"{total:,.2f}"

        # -----------------------------
        # Reproducibility footer
        # -----------------------------
        doc.add_paragraph("")
        doc.add_heading("Reproducibility footer", level=1)

        from . import __version__ as drca_version
        from datetime import datetime as _dt
        generated_at = _dt.now().isoformat(timespec="seconds")

        doc.add_paragraph(f"DRCA version: {drca_version}")
        doc.add_paragraph(f"Report generated at: {generated_at}")
        doc.add_paragraph(
            "Monetary values are rounded half-up to cents; month buckets use the "
            "declaration date of each claim's disaster."
        )

        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        doc.save(out_path)
        logger.info("report written to %s (%d charts)", out_path, len(chart_paths))
    return out_path
