"""Reference panel index: interval -> allele -> panel labels."""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .models import GenomicInterval, SiteRecord, normalize_allele
from .parser import stream_sites

logger = logging.getLogger(__name__)


class ReferencePanelError(ValueError):
    """A reference panel failed validation; the whole load is abandoned."""


class ReferenceIndex:
    """Exact-interval index of expected alleles with per-panel marker totals.

    Populated during loading, then frozen. Once frozen the index is
    read-only for the rest of the run.
    """

    def __init__(self):
        self._entries: Dict[GenomicInterval, Dict[str, Set[str]]] = {}
        self._total_markers: Dict[str, int] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add_site(self, label: str, interval: GenomicInterval, allele: str) -> None:
        """Record that panel ``label`` expects ``allele`` at ``interval``."""
        if self._frozen:
            raise RuntimeError("ReferenceIndex is frozen; no further sites may be added")

        alleles = self._entries.setdefault(interval, {})
        alleles.setdefault(allele, set()).add(label)
        self._total_markers[label] = self._total_markers.get(label, 0) + 1

    def get(self, interval: GenomicInterval) -> Optional[Dict[str, Set[str]]]:
        return self._entries.get(interval)

    def __contains__(self, interval) -> bool:
        return interval in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def intervals(self) -> List[GenomicInterval]:
        return list(self._entries)

    def total_markers(self, label: str) -> int:
        return self._total_markers.get(label, 0)

    @property
    def labels(self) -> List[str]:
        return list(self._total_markers)


def allele_of_interest(site: SiteRecord) -> str:
    """The alternate allele for a variant site, otherwise the reference allele."""
    allele = site.alt_alleles[0] if site.is_variant else site.ref_allele
    return normalize_allele(allele)


def validate_site(label: str, site: SiteRecord) -> None:
    if site.is_filtered:
        raise ReferencePanelError(
            f"Reference panel '{label}' should not have filtered variants: "
            f"{site.describe()}"
        )
    if len(site.alt_alleles) > 1:
        raise ReferencePanelError(
            f"Reference panel '{label}' has site with multiple alternates. "
            f"Must have either zero or one ALT: {site.describe()}"
        )


def check_unique_labels(labels: Sequence[str]) -> None:
    duplicates = sorted(label for label, n in Counter(labels).items() if n > 1)
    if duplicates:
        raise ReferencePanelError(
            f"Reference panel labels must be unique; repeated: {', '.join(duplicates)}"
        )


def load_reference_panels(
    panels: Iterable[Tuple[str, Iterable[SiteRecord]]],
) -> ReferenceIndex:
    """Build a frozen ReferenceIndex from ``(label, sites)`` pairs.

    Panels are consumed in order. Any invalid site aborts the load and no
    index is returned.
    """
    panels = list(panels)
    check_unique_labels([label for label, _ in panels])

    index = ReferenceIndex()
    for label, sites in panels:
        for site in sites:
            validate_site(label, site)
            index.add_site(label, site.interval, allele_of_interest(site))
        logger.info("Loaded %d markers from panel '%s'", index.total_markers(label), label)

    index.freeze()
    logger.info(
        "Reference index holds %d sites across %d panels", len(index), len(index.labels)
    )
    return index


def load_reference_vcfs(panels: Iterable[Tuple[str, str]]) -> ReferenceIndex:
    """Build a ReferenceIndex from ``(label, vcf_path)`` pairs."""
    return load_reference_panels(
        (label, stream_sites(path)) for label, path in panels
    )


def _interval_sort_key(interval: Optional[GenomicInterval]):
    if interval is None:
        return (1, "", 0, 0)
    return (0, interval.contig, interval.start, interval.end)


def plan_traversal_intervals(index: ReferenceIndex) -> List[GenomicInterval]:
    """Sorted, distinct intervals the query scan must visit."""
    return sorted(set(index.intervals()), key=_interval_sort_key)
