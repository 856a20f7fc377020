"""Canonicalization tables for free-text survey fields.

Each table maps a canonical tag to the phrases people actually write for it,
in English, Dutch, French and German. Declaration order matters: the
first-declared tag wins substring matches and fuzzy ties.

Tables are read-only (MappingProxyType) and shared process-wide.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

CanonicalMapping = Mapping[str, Tuple[str, ...]]

EDUCATION: CanonicalMapping = MappingProxyType({
    "highSchool": (
        "high school",
        "highschool",
        "secondary school",
        "secondary education",
        "aso",
        "tso",
        "bso",
        "kso",
        "middelbaar",
        "secondaire",
        "abitur",
    ),
    "associate": (
        "associate",
        "associate degree",
        "graduaat",
        "graduate",
        "short-cycle higher education",
    ),
    "bachelor": (
        "bachelor",
        "bachelors",
        "bachelor's",
        "prof bachelor",
        "professional bachelor",
        "academic bachelor",
        "ba",
        "bs",
        "bsc",
        "professionele bachelor",
        "academische bachelor",
        "bachelor energy",
        "bachelor it",
        "bachelor science",
        "licence",
    ),
    "master": (
        "master",
        "masters",
        "master's",
        "ma",
        "ms",
        "msc",
        "mba",
        "ingenieur",
        "burgerlijk ingenieur",
        "civil engineer",
    ),
    "phd": (
        "phd",
        "ph.d",
        "doctorate",
        "doctoral",
        "doctor",
        "doctoraat",
    ),
    "professional": (
        "professional degree",
        "professional certification",
        "md",
        "jd",
        "law degree",
    ),
    "vocational": (
        "vocational",
        "vocational training",
        "beroepsopleiding",
        "trade school",
        "apprenticeship",
    ),
    "someCollege": (
        "some college",
        "incomplete bachelor",
        "university dropout",
        "partial degree",
    ),
})

CIVIL_STATUS: CanonicalMapping = MappingProxyType({
    "single": (
        "single",
        "unmarried",
        "not married",
        "alleenstaand",
        "célibataire",
        "ledig",
    ),
    "cohabiting": (
        "cohabiting",
        "cohabitation",
        "living together",
        "samenwonend",
        "cohabitant",
        "zusammenlebend",
        "partner",
        "in a relationship",
    ),
    "civilUnion": (
        "civil union",
        "civil partnership",
        "registered partnership",
        "wettelijk samenwonend",
        "pacs",
        "eingetragene partnerschaft",
    ),
    "married": (
        "married",
        "getrouwd",
        "gehuwd",
        "marié",
        "verheiratet",
        "spouse",
    ),
    "divorced": (
        "divorced",
        "gescheiden",
        "divorcé",
        "geschieden",
    ),
    "widowed": (
        "widowed",
        "widow",
        "widower",
        "weduwe",
        "weduwnaar",
        "veuf",
        "veuve",
        "verwitwet",
    ),
})

CONTRACT_TYPE: CanonicalMapping = MappingProxyType({
    "permanent": (
        "permanent",
        "indefinite",
        "vast",
        "vaste",
        "cdi",
        "unbefristet",
        "fixed position",
        "tenure",
        "onbepaalde duur",
        "durée indéterminée",
    ),
    "temporary": (
        "temporary",
        "fixed-term",
        "tijdelijk",
        "cdd",
        "befristet",
        "bepaalde duur",
        "durée déterminée",
        "contract",
    ),
    "freelance": (
        "freelance",
        "independent",
        "self-employed",
        "zelfstandig",
        "indépendant",
        "freiberufler",
        "contractor",
    ),
    "internship": (
        "internship",
        "intern",
        "stage",
        "praktikum",
    ),
})

COMPANY_SIZE: CanonicalMapping = MappingProxyType({
    "1-10": (
        "1-10",
        "startup",
        "very small",
        "micro",
        "tiny",
        "< 10",
    ),
    "11-50": (
        "11-50",
        "small",
        "klein",
        "petit",
    ),
    "51-200": (
        "51-200",
        "medium",
        "middelgroot",
        "moyen",
        "mittel",
    ),
    "201-500": (
        "201-500",
        "large",
        "groot",
        "grand",
        "groß",
    ),
    "501-1000": (
        "501-1000",
        "very large",
        "zeer groot",
    ),
    "1001-5000": (
        "1001-5000",
        "enterprise",
        "multinational",
    ),
    "5001+": (
        "5001+",
        "5000+",
        "mega corporation",
        "fortune 500",
    ),
})

# Upper bound (inclusive) of each company size bucket, in declaration order.
COMPANY_SIZE_BUCKETS: Tuple[Tuple[int, str], ...] = (
    (10, "1-10"),
    (50, "11-50"),
    (200, "51-200"),
    (500, "201-500"),
    (1000, "501-1000"),
    (5000, "1001-5000"),
)

# Hybrid answers usually name the office or home too, so hybrid is tried first
WORK_ARRANGEMENT: CanonicalMapping = MappingProxyType({
    "hybrid": (
        "hybrid",
        "mixed",
        "hybride",
        "flexible",
    ),
    "remote": (
        "remote",
        "work from home",
        "wfh",
        "thuiswerk",
        "télétravail",
        "home office",
        "fully remote",
        "100% remote",
    ),
    "onsite": (
        "onsite",
        "on-site",
        "on site",
        "office",
        "kantoor",
        "sur place",
        "vor ort",
    ),
})

SECTOR: CanonicalMapping = MappingProxyType({
    "IT": ("it", "tech", "technology", "software", "ict", "informatique"),
    "Finance": ("finance", "banking", "financial", "fintech", "bank"),
    "Healthcare": (
        "healthcare",
        "health care",
        "medical",
        "pharma",
        "gezondheidszorg",
        "santé",
    ),
    "Education": (
        "education",
        "teaching",
        "onderwijs",
        "éducation",
        "university",
        "school",
    ),
    "Retail": (
        "retail",
        "e-commerce",
        "ecommerce",
        "detailhandel",
        "commerce de détail",
    ),
    "Manufacturing": ("manufacturing", "production", "industry", "productie"),
    "Consulting": ("consulting", "advisory", "consultancy", "conseil"),
    "Government": (
        "government",
        "public sector",
        "overheid",
        "gouvernement",
        "öffentlicher dienst",
    ),
    "Construction": ("construction", "bouw", "bau"),
    "Energy": ("energy", "oil", "gas", "utilities", "energie", "énergie"),
    "Automotive": ("automotive", "automobile", "auto", "car"),
    "Telecommunications": ("telecom", "telecommunications", "telco"),
    "RealEstate": ("real estate", "property", "vastgoed", "immobilier"),
})

# Truth tokens accepted by the boolean normalizer
TRUE_TOKENS = frozenset({"yes", "ja", "oui", "y", "true", "1", "✓", "x", "si", "wel"})
FALSE_TOKENS = frozenset({"no", "nee", "non", "nein", "n", "false", "0", "✗", "geen"})

# Unit words that turn a work experience figure into months
MONTH_UNITS = ("month", "maand", "mois", "monat")

ALL_MAPPINGS: Mapping[str, CanonicalMapping] = MappingProxyType({
    "education": EDUCATION,
    "civil_status": CIVIL_STATUS,
    "contract_type": CONTRACT_TYPE,
    "company_size": COMPANY_SIZE,
    "work_arrangement": WORK_ARRANGEMENT,
    "sector": SECTOR,
})
