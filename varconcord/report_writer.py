"""Tab-delimited concordance report output."""

from typing import IO, Dict, List

from .constants import FRACTION_DECIMALS, NO_CALL_COLUMNS, REPORT_COLUMNS
from .models import ReportRow, SampleStats
from .reference import ReferenceIndex


def build_report_rows(
    index: ReferenceIndex, samples: Dict[str, SampleStats]
) -> List[ReportRow]:
    """One row per (sample, panel) with at least one hit, sorted by sample then panel.

    ``index`` supplies the per-panel marker totals used as denominators.
    """
    rows = []
    for sample_name in sorted(samples):
        stats = samples[sample_name]
        for label in sorted(stats.hits):
            hits = stats.hits[label]
            if hits < 1:
                continue
            total = index.total_markers(label)
            rows.append(
                ReportRow(
                    sample_name=sample_name,
                    reference_name=label,
                    markers_matched=hits,
                    total_markers=total,
                    fraction_matched=hits / total,
                )
            )
    return rows


def format_fraction(value: float) -> str:
    return f"{value:.{FRACTION_DECIMALS}f}"


def write_report(out: IO[str], rows: List[ReportRow]) -> None:
    """Write the header line and one line per report row."""
    out.write("\t".join(REPORT_COLUMNS) + "\n")
    for row in rows:
        fields = [
            row.sample_name,
            row.reference_name,
            str(row.markers_matched),
            format_fraction(row.fraction_matched),
            str(row.total_markers),
        ]
        out.write("\t".join(fields) + "\n")


def write_no_call_summary(out: IO[str], samples: Dict[str, SampleStats]) -> None:
    """Write per-sample no-call counts for every sample seen in the scan."""
    out.write("\t".join(NO_CALL_COLUMNS) + "\n")
    for sample_name in sorted(samples):
        out.write(f"{sample_name}\t{samples[sample_name].no_calls}\n")
