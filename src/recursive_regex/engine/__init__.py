# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The delimiter matching pipeline: scanning, pairing, windowing and materializing."""

from __future__ import annotations

from recursive_regex.engine.materializer import build_probe, combined_source, materialize
from recursive_regex.engine.pairing import (
    apply_prefix_constraint,
    apply_suffix_constraint,
    complement_regions,
    drop_unpaired,
    pair_partners,
    pair_spans,
)
from recursive_regex.engine.patterns import (
    MarkerPattern,
    PatternMatcher,
    PlainPatternMatcher,
    check_offset,
    compile_flags,
    compile_pattern,
    pattern_source,
)
from recursive_regex.engine.scanner import build_event_stream, merge_events, scan_markers
from recursive_regex.engine.windowing import Window


__all__ = (
    "MarkerPattern",
    "PatternMatcher",
    "PlainPatternMatcher",
    "Window",
    "apply_prefix_constraint",
    "apply_suffix_constraint",
    "build_event_stream",
    "build_probe",
    "check_offset",
    "combined_source",
    "compile_flags",
    "compile_pattern",
    "complement_regions",
    "drop_unpaired",
    "materialize",
    "merge_events",
    "pair_partners",
    "pair_spans",
    "pattern_source",
    "scan_markers",
)
