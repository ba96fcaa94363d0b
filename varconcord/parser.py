"""VCF record reader built on pysam.

Reference panels and the query callset are both read through
``pysam.VariantFile``; records are converted into the plain models in
``varconcord.models`` so the scoring code never touches pysam objects.
"""

import logging
from typing import Iterable, Iterator, List, Set

import pysam

from .constants import PASS_FILTER
from .models import (
    GenomicInterval,
    GenotypeCall,
    QueryRecord,
    SiteRecord,
    normalize_allele,
)

logger = logging.getLogger(__name__)


class VariantFileError(OSError):
    """A VCF could not be opened or read."""


def open_variant_file(path: str) -> pysam.VariantFile:
    """Open a .vcf or .vcf.gz file for reading."""
    try:
        return pysam.VariantFile(path, "r")
    except (OSError, ValueError) as exc:
        raise VariantFileError(f"Unable to read VCF {path}: {exc}") from exc


def record_interval(rec) -> GenomicInterval:
    """Return the 1-based inclusive span of a pysam record."""
    return GenomicInterval(rec.chrom, rec.pos, rec.stop)


def is_filtered(rec) -> bool:
    """True when FILTER holds anything other than PASS or '.'."""
    return any(name != PASS_FILTER for name in rec.filter.keys())


def parse_site_record(rec) -> SiteRecord:
    """Convert a reference-panel record into a SiteRecord."""
    return SiteRecord(
        interval=record_interval(rec),
        ref_allele=normalize_allele(rec.ref),
        alt_alleles=tuple(normalize_allele(a) for a in rec.alts or ()),
        is_filtered=is_filtered(rec),
    )


def parse_genotypes(rec) -> List[GenotypeCall]:
    """Extract per-sample called alleles, dropping missing ('.') alleles.

    Samples without a GT field, or whose GT is entirely missing, come back
    with an empty allele tuple and count as no-calls.
    """
    calls = []
    for name, sample in rec.samples.items():
        alleles = sample.alleles or ()
        calls.append(
            GenotypeCall(
                sample_name=name,
                alleles=tuple(normalize_allele(a) for a in alleles if a is not None),
            )
        )
    return calls


def parse_query_record(rec) -> QueryRecord:
    """Convert a query callset record into a QueryRecord."""
    return QueryRecord(
        interval=record_interval(rec),
        genotypes=parse_genotypes(rec),
        is_filtered=is_filtered(rec),
    )


def stream_sites(path: str) -> Iterator[SiteRecord]:
    """Stream every record of a reference panel VCF as a SiteRecord."""
    vcf = open_variant_file(path)
    try:
        for rec in vcf:
            yield parse_site_record(rec)
    finally:
        vcf.close()


def _has_index(vcf: pysam.VariantFile) -> bool:
    return getattr(vcf, "index", None) is not None


def iter_query_records(
    path: str, intervals: Iterable[GenomicInterval]
) -> Iterator[QueryRecord]:
    """Yield query records restricted to the planned intervals.

    Each record whose exact interval is planned is yielded once. Indexed
    files are queried interval by interval; anything else is streamed and
    filtered against the planned set.
    """
    planned = list(intervals)
    vcf = open_variant_file(path)
    try:
        if _has_index(vcf):
            logger.debug("Using index to visit %d intervals in %s", len(planned), path)
            yield from _fetch_intervals(vcf, planned)
        else:
            logger.debug("No index for %s, streaming whole file", path)
            yield from _stream_matching(vcf, set(planned))
    finally:
        vcf.close()


def _fetch_intervals(vcf, planned: List[GenomicInterval]) -> Iterator[QueryRecord]:
    contigs = set(vcf.index.keys())
    for interval in planned:
        if interval.contig not in contigs:
            continue
        # pysam regions are 0-based half-open
        for rec in vcf.fetch(interval.contig, interval.start - 1, interval.end):
            if record_interval(rec) == interval:
                yield parse_query_record(rec)


def _stream_matching(vcf, planned: Set[GenomicInterval]) -> Iterator[QueryRecord]:
    for rec in vcf:
        if record_interval(rec) in planned:
            yield parse_query_record(rec)
