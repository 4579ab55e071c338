"""
Slop Score Calculator

Summarizes a batch of verification results as a 0-100 "slop score":
the share of analyzed claims that came back as lies.

Separated from engine.py for single-responsibility.
"""

from __future__ import annotations

from typing import Iterable

from claimcheck.models import AnalysisResult


def is_not_applicable(result: AnalysisResult) -> bool:
    """True for the neutral result returned when no relevant files were found."""
    return result.confidence == 0.0 and not result.evidence and not result.is_lie


def calculate_slop_score(results: Iterable[AnalysisResult]) -> tuple[int, dict]:
    """
    Calculate the slop score for a batch of results.

    Returns:
        (score, breakdown) where breakdown counts every result class.

    Scoring:
      score = round(100 * lies / total), 0 for an empty batch.
      Non-applicable results count toward the total.
    """
    results = list(results)
    total = len(results)
    lies = sum(1 for r in results if r.is_lie)
    not_applicable = sum(1 for r in results if is_not_applicable(r))

    score = round(100 * lies / total) if total else 0

    breakdown = {
        "total": total,
        "lies": lies,
        "verified": total - lies,
        "not_applicable": not_applicable,
        "final_score": score,
    }
    return score, breakdown
