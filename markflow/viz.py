"""
markflow.viz
============

Minimal plotting helpers used by the CLI, reports and README screenshots.

Outputs are PNGs written to the *images/* folder (auto‑created when first
needed).  Filenames can be overridden via keyword argument.
"""
from __future__ import annotations

import os
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import matplotlib.pyplot as plt

from . import clock
from .law_engine import days_until, deadline_urgency
from .models import Deadline, Urgency

# default output dir
_IMG_DIR = Path("images")

URGENCY_COLOURS = {
    Urgency.URGENT: "#d62828",
    Urgency.WARNING: "#f77f00",
    Urgency.NORMAL: "#2b9348",
    Urgency.COMPLETED: "#8d99ae",
}


def _target(out_path: Optional[str | os.PathLike], default_name: str) -> Path:
    if out_path is None:
        _IMG_DIR.mkdir(exist_ok=True)
        return _IMG_DIR / default_name
    return Path(out_path)


# ---------------------------------------------------------------------
# Plot 1 – bar chart of deadline counts by urgency
# ---------------------------------------------------------------------
def urgency_summary(
    deadlines: Iterable[Deadline],
    as_of: Optional[date] = None,
    out_path: str | os.PathLike | None = None,
) -> Path:
    """
    Generate a bar chart of how many deadlines sit in each urgency level.

    Parameters
    ----------
    deadlines : iterable of Deadline
        Stored deadlines (open and completed).
    as_of : datetime.date, optional
        Evaluation date; defaults to today.
    out_path : str or Path, default='images/urgency_summary.png'
        Where to save the PNG.

    Returns
    -------
    pathlib.Path
        Final image path for convenience.
    """
    as_of = clock.resolve(as_of)
    counts = Counter(deadline_urgency(days_until(d.due_date, as_of), d.status) for d in deadlines)
    levels = list(Urgency)
    ys = [counts.get(u, 0) for u in levels]

    plt.figure()
    bars = plt.bar([u.value for u in levels], ys,
                   color=[URGENCY_COLOURS[u] for u in levels], edgecolor="#333")
    # add counts on top of each bar
    for rect, cnt in zip(bars, ys):
        plt.text(rect.get_x() + rect.get_width() / 2,
                 cnt + 0.05,
                 str(cnt),
                 ha="center", va="bottom",
                 fontsize=8, color="#333")
    plt.grid(axis="y", linestyle=":", alpha=0.3)
    plt.title(f"Deadlines by Urgency ({as_of.isoformat()})")
    plt.ylabel("Deadline Count")
    plt.tight_layout()

    out_path = _target(out_path, "urgency_summary.png")
    plt.savefig(out_path, dpi=120, bbox_inches="tight")
    plt.close()
    return out_path


# ---------------------------------------------------------------------
# Plot 2 – timeline of open deadlines, coloured by urgency
# ---------------------------------------------------------------------
def deadline_timeline(
    deadlines: Iterable[Deadline],
    as_of: Optional[date] = None,
    out_path: str | os.PathLike | None = None,
) -> Path:
    """
    Scatter open deadlines along a date axis, one row per matter.

    A dashed vertical line marks *as_of*; overdue items sit to its left.
    """
    as_of = clock.resolve(as_of)
    open_items = sorted((d for d in deadlines if d.is_open), key=lambda d: d.due_date)
    serials = sorted({d.matter_serial for d in open_items})
    rows = {s: i for i, s in enumerate(serials)}

    plt.figure(figsize=(8, max(2, 0.4 * len(serials) + 1)))
    for d in open_items:
        urgency = deadline_urgency(days_until(d.due_date, as_of), d.status)
        plt.scatter(d.due_date, rows[d.matter_serial], color=URGENCY_COLOURS[urgency],
                    s=60, edgecolor="#333", zorder=3)
    plt.axvline(as_of, linestyle="--", color="#333", alpha=0.6)
    plt.yticks(range(len(serials)), serials, fontsize=8)
    plt.grid(axis="x", linestyle=":", alpha=0.3)
    plt.title("Open Deadlines")
    plt.gcf().autofmt_xdate()
    plt.tight_layout()

    out_path = _target(out_path, "deadline_timeline.png")
    plt.savefig(out_path, dpi=120, bbox_inches="tight")
    plt.close()
    return out_path
