"""
Certification requirements and translator levels.
"""

from enum import Enum
from typing import FrozenSet, Iterable, List, Optional


class TranslatorLevel(str, Enum):
    """Translator qualification tier."""

    CERTIFIED = "Certified"
    CERTIFIED_LAW = "Certified with specialisation in law"
    CERTIFIED_HEALTH = "Certified with specialisation in health care"
    LAYMAN = "Layman"
    READ_TRANSLATION_COURSES = "Read Translation courses"


class Certification(str, Enum):
    """Certification requirement stored on a booking."""

    YES = "yes"
    NO = "no"
    BOTH = "both"
    NORMAL = "normal"
    LAW = "law"
    N_LAW = "n_law"
    HEALTH = "health"
    N_HEALTH = "n_health"


ALL_LEVELS: FrozenSet[TranslatorLevel] = frozenset(TranslatorLevel)

CERTIFIED_LEVELS: FrozenSet[TranslatorLevel] = frozenset(
    {
        TranslatorLevel.CERTIFIED,
        TranslatorLevel.CERTIFIED_LAW,
        TranslatorLevel.CERTIFIED_HEALTH,
    }
)

UNCERTIFIED_LEVELS: FrozenSet[TranslatorLevel] = frozenset(
    {TranslatorLevel.LAYMAN, TranslatorLevel.READ_TRANSLATION_COURSES}
)


def levels_for_certification(certified: Optional[str]) -> FrozenSet[TranslatorLevel]:
    """Expand a booking's certification requirement into acceptable levels."""
    if certified is None:
        return ALL_LEVELS
    if certified in (Certification.YES, Certification.BOTH):
        return CERTIFIED_LEVELS
    if certified in (Certification.LAW, Certification.N_LAW):
        return frozenset({TranslatorLevel.CERTIFIED_LAW})
    if certified in (Certification.HEALTH, Certification.N_HEALTH):
        return frozenset({TranslatorLevel.CERTIFIED_HEALTH})
    return UNCERTIFIED_LEVELS


def certification_from_job_for(job_for: Iterable[str]) -> Optional[str]:
    """Derive the certification requirement from the booking form's job_for list."""
    options = set(job_for or [])
    if "normal" in options and "certified" in options:
        return Certification.BOTH.value
    if "normal" in options:
        return Certification.NORMAL.value
    if "certified" in options:
        return Certification.YES.value
    if "certified_in_law" in options:
        return Certification.LAW.value
    if "certified_in_health" in options:
        return Certification.HEALTH.value
    return None


def job_for_labels(certified: Optional[str]) -> List[str]:
    """Labels echoed back to the booking form after creation."""
    if certified is None:
        return []
    if certified == Certification.BOTH:
        return ["normal", "certified"]
    if certified == Certification.YES:
        return ["certified"]
    return [certified]
