"""
tests/test_viz.py
=================

Smoke tests for the plotting helpers in markflow.viz
"""

from datetime import date

import matplotlib

matplotlib.use("Agg")

from markflow.models import Deadline, DeadlineStatus, DeadlineType  # noqa: E402
from markflow.viz import deadline_timeline, urgency_summary  # noqa: E402

AS_OF = date(2025, 3, 3)

DEADLINES = [
    Deadline("97234567", DeadlineType.OFFICE_ACTION, date(2025, 3, 5)),
    Deadline("97345678", DeadlineType.OPPOSITION, date(2025, 3, 25)),
    Deadline("97123456", DeadlineType.SECTION_8, date(2025, 9, 1)),
    Deadline("97123456", DeadlineType.TTAB_DEADLINE, date(2025, 1, 2), status=DeadlineStatus.COMPLETED),
]


def test_urgency_summary_writes_png(tmp_path):
    out = urgency_summary(DEADLINES, AS_OF, out_path=tmp_path / "urgency.png")
    assert out.exists()
    assert out.stat().st_size > 0


def test_deadline_timeline_writes_png(tmp_path):
    out = deadline_timeline(DEADLINES, AS_OF, out_path=tmp_path / "timeline.png")
    assert out.exists()
    assert out.stat().st_size > 0


def test_timeline_handles_empty_docket(tmp_path):
    out = deadline_timeline([], AS_OF, out_path=tmp_path / "empty.png")
    assert out.exists()
