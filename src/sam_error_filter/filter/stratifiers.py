"""
Stratifier suffixes understood by the error-metric collector.

Rule files name the stratifier a criterion applies to by its suffix. The
collector only ever feeds values under these names, so a criterion
declared for any other suffix is accepted but never evaluated.
"""

from __future__ import annotations

KNOWN_SUFFIXES: frozenset[str] = frozenset(
    {
        "all",
        "gc",
        "read_ordinality",
        "read_base",
        "read_direction",
        "paired_orientation",
        "pair_proper",
        "ref_base",
        "prev_base",
        "next_base",
        "homopolymer_length",
        "homopolymer",
        "binned_homopolymer",
        "cycle",
        "binned_cycle",
        "soft_clips",
        "insert_length",
        "base_quality",
        "mapping_quality",
        "mismatches_in_read",
        "one_base_padded_context",
        "two_base_padded_context",
        "consensus",
        "ns_in_read",
        "flowcell_tile",
        "flowcell_x",
        "flowcell_y",
        "read_group",
        "indel_length",
    }
)


def is_known_suffix(suffix: str) -> bool:
    """Whether the collector can produce values for ``suffix``."""
    return suffix in KNOWN_SUFFIXES
