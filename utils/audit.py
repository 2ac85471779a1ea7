"""Audit status detection for DefiLlama pools.

The ``audits`` field of a ``/pools`` record is loosely typed: depending on the
project it is a boolean, a count encoded as a string, a number, a yes/no
string or missing. :func:`decode_audit_field` turns it into one of the
variants below so the rest of the code never inspects raw types.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Union

from config import KNOWN_AUDITED_PROJECTS

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class AuditFlag:
    value: bool


@dataclass(frozen=True)
class AuditCount:
    value: int


@dataclass(frozen=True)
class AuditNumber:
    value: float


@dataclass(frozen=True)
class AuditAbsent:
    pass


AuditField = Union[AuditFlag, AuditCount, AuditNumber, AuditAbsent]


def decode_audit_field(raw: Any) -> AuditField:
    """Decode the raw ``audits`` value.

    Strings equal to ``yes`` or ``true`` (any case) become a true flag.
    Other strings are read as a count from their leading integer digits, so
    ``"2"`` and ``"3 audits"`` are counts. Anything unrecognized is absent.
    """
    if raw is None:
        return AuditAbsent()
    if isinstance(raw, bool):
        return AuditFlag(raw)
    if isinstance(raw, (int, float)):
        return AuditNumber(float(raw))
    if isinstance(raw, str):
        if raw.lower() in ("yes", "true"):
            return AuditFlag(True)
        match = _LEADING_INT.match(raw)
        if match:
            return AuditCount(int(match.group(1)))
    return AuditAbsent()


def audit_positive(field: AuditField) -> bool:
    """Return True if the decoded field reports at least one audit."""
    if isinstance(field, AuditFlag):
        return field.value
    if isinstance(field, AuditCount):
        return field.value > 0
    if isinstance(field, AuditNumber):
        return not math.isnan(field.value) and field.value > 0
    return False


def project_slug(project: str) -> str:
    """Normalize a project name: lowercase, whitespace runs to hyphens."""
    return _WHITESPACE.sub("-", project.lower())


def is_known_audited(project: str) -> bool:
    """Return True if the project overlaps a known-audited slug either way."""
    if not project:
        return False
    slug = project_slug(project)
    return any(known in slug or slug in known for known in KNOWN_AUDITED_PROJECTS)


def is_audited(record: Dict[str, Any]) -> bool:
    """Decide whether a raw pool record counts as audited.

    The upstream audit field wins when it is positive; otherwise the project
    name is matched against ``KNOWN_AUDITED_PROJECTS``.
    """
    if audit_positive(decode_audit_field(record.get("audits"))):
        return True
    project = record.get("project")
    return isinstance(project, str) and is_known_audited(project)
