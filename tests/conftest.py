"""Shared test fixtures with all VCF content embedded as Python strings."""

import pytest

from varconcord.models import GenomicInterval, GenotypeCall, QueryRecord, SiteRecord


# ============================================================
# VCF text builders
# ============================================================

VCF_HEADER_LINES = [
    "##fileformat=VCFv4.2",
    "##FILTER=<ID=PASS,Description=\"All filters passed\">",
    "##FILTER=<ID=LowQual,Description=\"Low quality\">",
    "##FORMAT=<ID=GT,Number=1,Type=String,Description=\"Genotype\">",
    "##contig=<ID=chr1,length=248956422>",
    "##contig=<ID=chr2,length=242193529>",
    "##contig=<ID=chr10,length=133797422>",
]


def build_vcf_string(records, samples=None):
    """Build VCF text from (chrom, pos, ref, alt, filter[, genotypes...]) tuples."""
    samples = samples or []
    columns = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
    if samples:
        columns.append("FORMAT")
        columns.extend(samples)

    lines = list(VCF_HEADER_LINES)
    lines.append("\t".join(columns))
    for rec in records:
        chrom, pos, ref, alt, filt = rec[:5]
        fields = [chrom, str(pos), ".", ref, alt, ".", filt, "."]
        if samples:
            fields.append("GT")
            fields.extend(rec[5:])
        lines.append("\t".join(fields))
    return "\n".join(lines) + "\n"


def write_vcf(path, records, samples=None):
    with open(path, "w") as f:
        f.write(build_vcf_string(records, samples))
    return str(path)


# ============================================================
# Reference panels
# ============================================================

# SET1: one variant site, one reference-only site
SET1_RECORDS = [
    ("chr1", 100, "G", "A", "PASS"),
    ("chr1", 200, "C", ".", "."),
]

# SET2: shares chr1:100 expecting the same allele, plus one of its own
SET2_RECORDS = [
    ("chr1", 100, "G", "A", "PASS"),
    ("chr2", 50, "T", "C", "PASS"),
]

FILTERED_PANEL_RECORDS = [
    ("chr1", 100, "G", "A", "PASS"),
    ("chr1", 300, "A", "T", "LowQual"),
]

MULTI_ALT_PANEL_RECORDS = [
    ("chr1", 100, "G", "A,T", "PASS"),
]


# ============================================================
# Query callset
# ============================================================

QUERY_SAMPLES = ["S1", "S2", "S3"]

QUERY_RECORDS = [
    # S1 hom-alt A, S2 no-call, S3 het
    ("chr1", 100, "G", "A", "PASS", "1/1", "./.", "0/1"),
    # Not in any panel
    ("chr1", 150, "A", "G", "PASS", "1/1", "1/1", "1/1"),
    # S1 hom-ref C matches SET1's reference-only assertion
    ("chr1", 200, "C", "T", "PASS", "0/0", "./.", "1/1"),
    # Filtered query record at a panel site
    ("chr2", 50, "T", "C", "LowQual", "1/1", "1/1", "1/1"),
]


# ============================================================
# Model helpers
# ============================================================

def site(contig, start, ref, alts=(), filtered=False, end=None):
    return SiteRecord(
        interval=GenomicInterval(contig, start, end if end is not None else start),
        ref_allele=ref,
        alt_alleles=tuple(alts),
        is_filtered=filtered,
    )


def query(contig, start, calls, filtered=False, end=None):
    """Build a QueryRecord from a {sample: alleles} mapping."""
    return QueryRecord(
        interval=GenomicInterval(contig, start, end if end is not None else start),
        genotypes=[GenotypeCall(name, tuple(alleles)) for name, alleles in calls.items()],
        is_filtered=filtered,
    )


# ============================================================
# File fixtures
# ============================================================

@pytest.fixture
def set1_vcf(tmp_path):
    return write_vcf(tmp_path / "set1.vcf", SET1_RECORDS)


@pytest.fixture
def set2_vcf(tmp_path):
    return write_vcf(tmp_path / "set2.vcf", SET2_RECORDS)


@pytest.fixture
def filtered_panel_vcf(tmp_path):
    return write_vcf(tmp_path / "filtered.vcf", FILTERED_PANEL_RECORDS)


@pytest.fixture
def multi_alt_panel_vcf(tmp_path):
    return write_vcf(tmp_path / "multi_alt.vcf", MULTI_ALT_PANEL_RECORDS)


@pytest.fixture
def query_vcf(tmp_path):
    return write_vcf(tmp_path / "query.vcf", QUERY_RECORDS, QUERY_SAMPLES)
