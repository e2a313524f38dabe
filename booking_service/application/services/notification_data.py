"""
Notification data block describing a booking.
"""

from typing import Any, Dict, List, Optional

from booking_service.domain.entities.job import Job
from booking_service.domain.value_objects.certification import Certification
from booking_service.domain.value_objects.user_type import Gender

_GENDER_LABELS = {Gender.MALE.value: "Man", Gender.FEMALE.value: "Kvinna"}

_CERTIFICATION_LABELS = {
    Certification.BOTH.value: ["Godkänd tolk", "Auktoriserad"],
    Certification.YES.value: ["Auktoriserad"],
    Certification.N_HEALTH.value: ["Sjukvårdstolk"],
    Certification.LAW.value: ["Rättstolk"],
    Certification.N_LAW.value: ["Rättstolk"],
}


def job_for_display(job: Job) -> List[str]:
    """Localized labels for the requested gender and certification."""
    labels = []
    if job.gender:
        labels.append(_GENDER_LABELS.get(job.gender, job.gender))
    if job.certified:
        labels.extend(_CERTIFICATION_LABELS.get(job.certified, [job.certified]))
    return labels


def job_to_data(
    job: Job,
    customer_town: Optional[str] = None,
    customer_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Data block attached to notifications about a booking."""
    return {
        "job_id": str(job.id),
        "from_language_id": str(job.from_language_id),
        "immediate": job.immediate,
        "duration": job.duration,
        "status": job.status.value,
        "gender": job.gender,
        "certified": job.certified,
        "due": job.due.isoformat(),
        "due_date": job.due.strftime("%Y-%m-%d"),
        "due_time": job.due.strftime("%H:%M"),
        "job_type": job.job_type.value,
        "customer_phone_type": job.customer_phone_type,
        "customer_physical_type": job.customer_physical_type,
        "customer_town": customer_town or job.town,
        "customer_type": customer_type,
        "job_for": job_for_display(job),
    }
