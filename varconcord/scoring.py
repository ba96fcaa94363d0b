"""Streaming concordance scoring against a loaded ReferenceIndex."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .models import (
    GenomicInterval,
    QueryRecord,
    ReportRow,
    SampleStats,
    normalize_allele,
)
from .parser import iter_query_records
from .reference import (
    ReferenceIndex,
    load_reference_vcfs,
    plan_traversal_intervals,
)
from .report_writer import build_report_rows

logger = logging.getLogger(__name__)


class ConcordanceAccumulator:
    """Per-sample hit and no-call counters, updated one record at a time.

    Each call to ``observe`` counts the record once; feeding the same
    record twice double-counts it.
    """

    def __init__(self, index: ReferenceIndex):
        self.index = index
        self.samples: Dict[str, SampleStats] = {}
        self.records_observed = 0

    def stats_for(self, sample_name: str) -> SampleStats:
        stats = self.samples.get(sample_name)
        if stats is None:
            stats = SampleStats()
            self.samples[sample_name] = stats
        return stats

    def observe(self, record: QueryRecord) -> None:
        if record.is_filtered:
            return

        entry = self.index.get(record.interval)
        if entry is None:
            logger.debug("No reference sites at %s, skipping", record.interval)
            return

        self.records_observed += 1
        for call in record.genotypes:
            stats = self.stats_for(call.sample_name)
            if not call.is_called:
                stats.no_calls += 1
                continue

            called = {normalize_allele(a) for a in call.alleles}
            for allele, labels in entry.items():
                if allele not in called:
                    continue
                for label in labels:
                    stats.hits[label] = stats.hits.get(label, 0) + 1


class ConcordanceEngine:
    """One scoring run: load panels once, scan the query, then report."""

    def __init__(self):
        self.index: Optional[ReferenceIndex] = None
        self.accumulator: Optional[ConcordanceAccumulator] = None
        self._scanned = False

    def load(self, panels: Iterable[Tuple[str, str]]) -> ReferenceIndex:
        """Build the reference index from ``(label, vcf_path)`` pairs."""
        if self.index is not None:
            raise RuntimeError("Reference panels have already been loaded for this run")
        self.index = load_reference_vcfs(panels)
        self.accumulator = ConcordanceAccumulator(self.index)
        return self.index

    def _require_loaded(self) -> None:
        if self.index is None:
            raise RuntimeError("Reference panels must be loaded before scanning")

    def traversal_intervals(self) -> List[GenomicInterval]:
        self._require_loaded()
        return plan_traversal_intervals(self.index)

    def run(self, query_path: str) -> Dict[str, SampleStats]:
        """Scan the query VCF over the planned intervals."""
        self._require_loaded()
        if self._scanned:
            raise RuntimeError("The query has already been scanned for this run")
        self._scanned = True
        for record in iter_query_records(query_path, self.traversal_intervals()):
            self.accumulator.observe(record)

        logger.info(
            "Observed %d query records covering %d samples",
            self.accumulator.records_observed,
            len(self.accumulator.samples),
        )
        return self.accumulator.samples

    def report(self) -> List[ReportRow]:
        self._require_loaded()
        return build_report_rows(self.index, self.accumulator.samples)
