"""Built-in source table.

Adding a community is a new SourceConfig entry here or under ``sources:``
in the YAML config; no pipeline code changes.
"""

from typing import Dict, Tuple

from .models import FieldMapping, FieldType, SourceConfig


def label_pattern(label: str) -> str:
    """Pattern for a ``Label: value`` line.

    Leading list bullets and heading marks are skipped and the value runs
    to the end of the line. ``label`` is itself a regular expression.
    """
    return rf"^[^\w\n]*{label}[ \t]*(.+)$"


def _field(label: str, type: FieldType = FieldType.TEXT, required: bool = False) -> FieldMapping:
    return FieldMapping(pattern=label_pattern(label), type=type, required=required)


_TEXT = FieldType.TEXT
_INTEGER = FieldType.INTEGER
_CURRENCY = FieldType.CURRENCY
_BOOLEAN = FieldType.BOOLEAN
_DISTANCE = FieldType.DISTANCE

BESALARY_FIELDS: Dict[str, FieldMapping] = {
    # 1. Personalia
    "age": _field(r"Age:", _INTEGER),
    "education": _field(r"Education:"),
    "work_experience": _field(r"Work experience[^:\n]*:", _INTEGER),
    "civil_status": _field(r"Civil status:"),
    "dependents": _field(r"Dependent people/children:", _INTEGER),
    # 2. Employer profile
    "sector": _field(r"Sector/Industry:"),
    "employee_count": _field(r"Amount of employees:"),
    "multinational": _field(r"Multinational\?[ \t:]*", _BOOLEAN),
    # 3. Contract & conditions
    "job_title": _field(r"Current job title:", required=True),
    "job_description": _field(r"Job description:"),
    "seniority": _field(r"Seniority:", _INTEGER),
    "official_hours": _field(r"Official hours/week[^:\n]*:", _INTEGER),
    "average_hours": _field(r"Average real hours/week[^:\n]*:", _INTEGER),
    "shift_description": _field(r"Shiftwork or 9 to 5[^:\n]*:"),
    "on_call": _field(r"On-call duty:"),
    "vacation_days": _field(r"Vacation days/year:", _INTEGER),
    # 4. Salary
    "gross_salary": _field(r"Gross salary/month:", _CURRENCY, required=True),
    "net_salary": _field(r"Net salary/month:", _CURRENCY),
    "net_compensation": _field(r"Netto compensation:", _CURRENCY),
    "mobility_budget": _field(r"Car/bike/\.\.\. or mobility budget:"),
    "thirteenth_month": _field(r"13th month[^:\n]*:"),
    "meal_vouchers": _field(r"Meal vouchers:", _CURRENCY),
    "eco_cheques": _field(r"Ecocheques:", _CURRENCY),
    "group_insurance": _field(r"Group insurance:"),
    "other_insurances": _field(r"Other insurances:"),
    "other_benefits": _field(r"Other benefits[^:\n]*:"),
    # 5. Mobility
    "work_city": _field(r"City/region of work:", required=True),
    "commute_distance": _field(r"Distance home-work:", _DISTANCE),
    "commute_method": _field(r"How do you commute\?:?"),
    "commute_compensation": _field(r"How is the travel[^:\n]*compensated:"),
    "telework_days": _field(r"Telework days/week:", _INTEGER),
    # 6. Other
    "day_off_ease": _field(r"How easily can you plan a day off:"),
    "stress_level": _field(r"Is your job stressful\?:?"),
    "reports": _field(r"Responsible for personnel[^:\n]*:", _INTEGER),
}

BESALARY = SourceConfig(
    name="BESalary",
    country="Belgium",
    currency="EUR",
    section_titles=(
        "1. PERSONALIA",
        "2. EMPLOYER PROFILE",
        "3. CONTRACT & CONDITIONS",
        "4. SALARY",
        "5. MOBILITY",
        "6. OTHER",
    ),
    field_mappings=BESALARY_FIELDS,
    required_flair="salary",
)

DEFAULT_SOURCES: Tuple[SourceConfig, ...] = (BESALARY,)
