"""varconcord: score sample genotypes against labeled reference panels."""

__version__ = "0.1.0"
