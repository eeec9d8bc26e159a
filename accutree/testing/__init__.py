"""Testing utilities for AccuTree consumers."""

from .fixtures import (
    ExpectationPayload,
    RecordingNode,
    VisitLog,
    VisitRecord,
    build_balanced,
    build_chain,
    build_random_tree,
    build_tree,
    reference_fold,
)

__all__ = [
    'ExpectationPayload',
    'RecordingNode',
    'VisitLog',
    'VisitRecord',
    'build_balanced',
    'build_chain',
    'build_random_tree',
    'build_tree',
    'reference_fold',
]
