"""Application constants such as roles, services and weekdays."""
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class ServiceType(str, Enum):
    FIRST_EXAM_AND_XRAY = "FirstExamAndXray"
    HYGIENE = "Hygiene"
    HYGIENE_AND_EXAM = "HygieneAndExam"
    PERIODONTAL_SCALING = "PeriodontalScaling"
    PEDIATRIC_EXAM_AND_CLEANING = "PediatricExamAndCleaning"
    CROWN_AND_EXAM = "CrownAndExam"
    EXTRACTION_CONSULT = "ExtractionConsult"
    EXTRACTION = "Extraction"
    INVISALIGN_CONSULT = "InvisalignConsult"
    BOTOX_CONSULT_FOR_MIGRAINES = "BotoxConsultForMigraines"
    BOTOX_CONSULT_FOR_COSMETIC = "BotoxConsultForCosmetic"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        for day in cls:
            if day.value.lower() == value.strip().lower():
                return day
        raise ValueError(f"Unknown weekday: {value}")


# Labels shown in the admin console.
SERVICE_LABELS = {
    ServiceType.FIRST_EXAM_AND_XRAY: "First Exam & X-ray",
    ServiceType.HYGIENE: "Hygiene",
    ServiceType.HYGIENE_AND_EXAM: "Hygiene + Exam",
    ServiceType.PERIODONTAL_SCALING: "Periodontal Scaling (Deep Cleaning)",
    ServiceType.PEDIATRIC_EXAM_AND_CLEANING: "Pediatric Exam + Cleaning",
    ServiceType.CROWN_AND_EXAM: "Crown + Exam",
    ServiceType.EXTRACTION_CONSULT: "Extraction Consult",
    ServiceType.EXTRACTION: "Extraction",
    ServiceType.INVISALIGN_CONSULT: "Invisalign Consult",
    ServiceType.BOTOX_CONSULT_FOR_MIGRAINES: "Botox Consult for Migraines",
    ServiceType.BOTOX_CONSULT_FOR_COSMETIC: "Botox Consult for Cosmetic",
}

# Services offered on the public booking form and the store value each books.
SERVICE_CATALOG = {
    "Braces & Aligners": ServiceType.INVISALIGN_CONSULT,
    "Check-up & Cleaning": ServiceType.FIRST_EXAM_AND_XRAY,
    "Cosmetic Dentistry": ServiceType.BOTOX_CONSULT_FOR_COSMETIC,
    "Dental Crowns & Bridges": ServiceType.CROWN_AND_EXAM,
    "Dental Implants": ServiceType.HYGIENE_AND_EXAM,
    "Dental Veneers": ServiceType.BOTOX_CONSULT_FOR_COSMETIC,
    "Dentures (Full & Partial)": ServiceType.EXTRACTION,
    "Emergency Dental Care": ServiceType.FIRST_EXAM_AND_XRAY,
    "Gum Disease Treatment": ServiceType.PERIODONTAL_SCALING,
    "Oral Surgery": ServiceType.EXTRACTION_CONSULT,
    "Pediatric Dentistry": ServiceType.PEDIATRIC_EXAM_AND_CLEANING,
    "Preventive Care": ServiceType.HYGIENE,
    "Root Canal Treatment": ServiceType.HYGIENE,
    "Teeth Whitening": ServiceType.HYGIENE_AND_EXAM,
    "TMJ Treatment": ServiceType.BOTOX_CONSULT_FOR_MIGRAINES,
    "Tooth Extraction": ServiceType.EXTRACTION,
}


def resolve_service(value) -> ServiceType:
    """Map a ServiceType value or a booking-form service name to ServiceType."""
    if isinstance(value, ServiceType):
        return value
    if value in SERVICE_CATALOG:
        return SERVICE_CATALOG[value]
    return ServiceType(value)
