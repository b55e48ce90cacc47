"""Dependency metadata verification.

Checks the metadata records of a project's dependencies and produces a
pass / warning / failure verdict.
"""

from __future__ import annotations

from depmeta_core.verification.engine import VerificationEngine, run_verification
from depmeta_core.verification.models import Finding, Verdict, VerdictStatus
from depmeta_core.verification.output import (
    format_verdict_json,
    format_verdict_table,
    print_verdict,
)

__all__ = [
    "Finding",
    "Verdict",
    "VerdictStatus",
    "VerificationEngine",
    "format_verdict_json",
    "format_verdict_table",
    "print_verdict",
    "run_verification",
]
