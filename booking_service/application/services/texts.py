"""
Customer and translator facing texts (Swedish).
"""

from datetime import datetime


def format_due(due: datetime) -> str:
    return due.strftime("%Y-%m-%d %H:%M")


def convert_to_hours_mins(minutes: int) -> str:
    """Render a duration as ``45min``, ``1h`` or ``1h 30min``."""
    if minutes < 60:
        return f"{minutes}min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"


# Push notification bodies

def suitable_job_push(language: str, duration: int, due: datetime, immediate: bool) -> str:
    if immediate:
        return f"Ny akutbokning för {language}tolk {duration}min"
    return f"Ny bokning för {language}tolk {duration}min {format_due(due)}"


def job_accepted_push(language: str, duration: int, due: datetime) -> str:
    return (
        f"Din bokning för {language} translators, {duration}min, {format_due(due)} "
        "har accepterats av en tolk. Vänligen öppna appen för att se detaljer om tolken."
    )


def customer_cancelled_push(language: str, duration: int, due: datetime) -> str:
    return (
        f"Kunden har avbokat bokningen för {language}tolk, {duration}min, {format_due(due)}. "
        "Var god och kolla dina tidigare bokningar för detaljer."
    )


def translator_cancelled_push(language: str, duration: int, due: datetime) -> str:
    return (
        f"Er {language}tolk, {duration}min {format_due(due)}, har avbokat tolkningen. "
        "Vi letar nu efter en ny tolk som kan ersätta denne. Tack."
    )


def job_expired_push(language: str, duration: int, due: datetime) -> str:
    return (
        f"Tyvärr har ingen tolk accepterat er bokning: ({language}, {duration}min, "
        f"{format_due(due)}). Vänligen pröva boka om tiden."
    )


def session_start_remind_push(
    language: str, duration: int, due: datetime, physical: bool, town: str = None
) -> str:
    place = f"på plats i {town}" if physical else "telefon"
    return (
        f"Detta är en påminnelse om att du har en {language}tolkning ({place}) "
        f"kl {due.strftime('%H:%M')} på {due.strftime('%Y-%m-%d')} som vara i {duration} min. "
        "Lycka till och kom ihåg att ge feedback efter utförd tolkning!"
    )


# SMS bodies

def physical_job_sms(due: datetime, town: str, duration: int, job_id) -> str:
    return (
        f"Ny tolkbokning på plats i {town} den {due.strftime('%d.%m.%Y')} "
        f"kl {due.strftime('%H:%M')}, {convert_to_hours_mins(duration)}. "
        f"Öppna appen för att acceptera uppdrag #{job_id}."
    )


def phone_job_sms(due: datetime, duration: int, job_id) -> str:
    return (
        f"Ny telefontolkning den {due.strftime('%d.%m.%Y')} "
        f"kl {due.strftime('%H:%M')}, {convert_to_hours_mins(duration)}. "
        f"Öppna appen för att acceptera uppdrag #{job_id}."
    )


# API messages

def accepted_message(language: str, duration: int, due: datetime) -> str:
    return f"Du har nu accepterat och fått bokningen för {language}tolk {duration}min {format_due(due)}"


def already_accepted_message(language: str, duration: int, due: datetime) -> str:
    return (
        f"Denna {language}tolkning {duration}min {format_due(due)} har redan accepterats "
        "av annan tolk. Du har inte fått denna tolkning"
    )


ALREADY_BOOKED_MESSAGE = "Du har redan en bokning den tiden! Bokningen är inte accepterad."

NOT_AVAILABLE_MESSAGE = "Denna tolkning är inte längre tillgänglig."

LATE_WITHDRAWAL_MESSAGE = (
    "Du kan inte avboka en bokning som sker inom 24 timmar genom DigitalTolk. "
    "Vänligen ring på {phone} och gör din avbokning over telefon. Tack!"
)

CUSTOMER_ONLY_MESSAGE = "Translator can not create booking"

FILL_ALL_FIELDS_MESSAGE = "Du måste fylla in alla fält"

PAST_DUE_MESSAGE = "Can't create booking in past"

FLAG_COMMENT_MESSAGE = "Please, add comment"

UNKNOWN_TRANSLATOR_MESSAGE = "Ingen tolk med den e-postadressen hittades"


# Email subjects

def job_created_subject(job_id) -> str:
    return f"Vi har mottagit er tolkbokning. Bokningsnr: #{job_id}"


def job_accepted_subject(job_id) -> str:
    return f"Bekräftelse - tolk har accepterat er bokning (bokning # {job_id})"


def session_ended_subject(job_id) -> str:
    return f"Information om avslutad tolkning för bokningsnummer # {job_id}"


def job_reopened_subject(language: str, job_id) -> str:
    return f"Vi har nu återöppnat er bokning av {language}tolk för bokning #{job_id}"


def job_cancelled_subject(job_id) -> str:
    return f"Avbokning av bokningsnr: #{job_id}"


def translator_changed_subject(job_id) -> str:
    return f"Meddelande om tilldelning av tolkuppdrag för uppdrag # {job_id})"


def job_changed_subject(job_id) -> str:
    return f"Meddelande om ändring av tolkbokning för uppdrag # {job_id}"
