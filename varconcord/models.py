from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True, order=True)
class GenomicInterval:
    """A single site span, 1-based inclusive. Ordered by contig, start, end."""

    contig: str
    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.contig}:{self.start}-{self.end}"


@dataclass
class SiteRecord:
    interval: GenomicInterval
    ref_allele: str = ""
    alt_alleles: Tuple[str, ...] = ()
    is_filtered: bool = False

    @property
    def is_variant(self) -> bool:
        return len(self.alt_alleles) > 0

    def describe(self) -> str:
        alts = ",".join(self.alt_alleles) if self.alt_alleles else "."
        return f"{self.interval.contig}:{self.interval.start} {self.ref_allele}>{alts}"


@dataclass
class GenotypeCall:
    sample_name: str
    alleles: Tuple[str, ...] = ()

    @property
    def is_called(self) -> bool:
        return len(self.alleles) > 0


@dataclass
class QueryRecord:
    interval: GenomicInterval
    genotypes: List[GenotypeCall] = field(default_factory=list)
    is_filtered: bool = False


@dataclass
class SampleStats:
    no_calls: int = 0
    hits: Dict[str, int] = field(default_factory=dict)


@dataclass
class ReportRow:
    sample_name: str
    reference_name: str
    markers_matched: int
    total_markers: int
    fraction_matched: float


def normalize_allele(allele: str) -> str:
    """Bases compare case-insensitively; alleles are held in upper case."""
    return allele.upper()
