"""
Job type and translator qualification categories.
"""

from enum import Enum
from typing import Optional


class JobType(str, Enum):
    """Commercial category of a booking."""

    PAID = "paid"
    RWS = "rws"
    UNPAID = "unpaid"

    @classmethod
    def from_consumer_type(cls, consumer_type: Optional[str]) -> Optional["JobType"]:
        """Derive the job type from the customer's consumer category."""
        return _JOB_TYPE_BY_CONSUMER_TYPE.get(consumer_type)

    @classmethod
    def for_translator_type(cls, translator_type: Optional[str]) -> "JobType":
        """Job type a translator category may take (volunteer work by default)."""
        return _JOB_TYPE_BY_TRANSLATOR_TYPE.get(translator_type, cls.UNPAID)

    @property
    def translator_type(self) -> "TranslatorType":
        """Translator category qualified for this job type."""
        return _TRANSLATOR_TYPE_BY_JOB_TYPE[self]


class TranslatorType(str, Enum):
    """Translator qualification category."""

    PROFESSIONAL = "professional"
    RWS_TRANSLATOR = "rwstranslator"
    VOLUNTEER = "volunteer"


class ConsumerType(str, Enum):
    """Customer consumer category."""

    RWS_CONSUMER = "rwsconsumer"
    NGO = "ngo"
    PAID = "paid"


_TRANSLATOR_TYPE_BY_JOB_TYPE = {
    JobType.PAID: TranslatorType.PROFESSIONAL,
    JobType.RWS: TranslatorType.RWS_TRANSLATOR,
    JobType.UNPAID: TranslatorType.VOLUNTEER,
}

_JOB_TYPE_BY_TRANSLATOR_TYPE = {
    translator_type.value: job_type
    for job_type, translator_type in _TRANSLATOR_TYPE_BY_JOB_TYPE.items()
}

_JOB_TYPE_BY_CONSUMER_TYPE = {
    ConsumerType.RWS_CONSUMER.value: JobType.RWS,
    ConsumerType.NGO.value: JobType.UNPAID,
    ConsumerType.PAID.value: JobType.PAID,
}
