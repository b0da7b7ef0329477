# --- Quick-Lookup Table of Common Swedish Medications ---

import logging
from collections import namedtuple
from types import MappingProxyType
from urllib.parse import quote

from fuzzywuzzy import process

logger = logging.getLogger(__name__)

FASS_SEARCH_URL = "https://fass.se/search?query="
SUGGESTION_THRESHOLD = 80
SUGGESTION_LIMIT = 3

# Characters left alone by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Structured data types
Medication = namedtuple('Medication', ['key', 'brands', 'use', 'dose', 'otc', 'warnings', 'atc'])
OtcStatus = namedtuple('OtcStatus', ['kind', 'note'])
NotFound = namedtuple('NotFound', ['query', 'suggestions'])

OTC = OtcStatus(kind='otc', note=None)
RX = OtcStatus(kind='rx', note=None)


def conditional_otc(note):
    """OTC status that depends on strength or form, e.g. 'Gel OTC, tablets Rx'."""
    return OtcStatus(kind='conditional', note=note)


# Single source of truth, insertion order is display order
MEDICATIONS = (
    Medication(
        key='paracetamol',
        brands=('Alvedon', 'Panodil', 'Pamol'),
        use='Pain relief, fever reduction',
        dose='Adult: 500-1000mg every 4-6h, max 4g/day',
        otc=OTC,
        warnings='Avoid with liver disease, limit alcohol',
        atc='N02BE01',
    ),
    Medication(
        key='ibuprofen',
        brands=('Ipren', 'Ibumetin', 'Brufen'),
        use='Pain, inflammation, fever',
        dose='Adult: 200-400mg every 4-6h, max 1200mg/day (OTC)',
        otc=OTC,
        warnings='Take with food, avoid if stomach ulcers or kidney issues',
        atc='M01AE01',
    ),
    Medication(
        key='omeprazol',
        brands=('Losec', 'Omeprazol'),
        use='Acid reflux, stomach ulcers, GERD',
        dose='Adult: 20mg once daily',
        otc=conditional_otc('Low dose OTC, higher doses Rx'),
        warnings='Long-term use may affect B12/magnesium',
        atc='A02BC01',
    ),
    Medication(
        key='sertralin',
        brands=('Zoloft', 'Sertralin'),
        use='Depression, anxiety, OCD, PTSD',
        dose='Adult: Start 50mg/day, may increase',
        otc=RX,
        warnings='Takes 2-4 weeks for effect, do not stop abruptly',
        atc='N06AB06',
    ),
    Medication(
        key='metformin',
        brands=('Metformin', 'Glucophage'),
        use='Type 2 diabetes',
        dose='Adult: Start 500mg 1-2x/day with food',
        otc=RX,
        warnings='Monitor kidney function, stop before contrast imaging',
        atc='A10BA02',
    ),
    Medication(
        key='atorvastatin',
        brands=('Lipitor', 'Atorvastatin'),
        use='High cholesterol, cardiovascular prevention',
        dose='Adult: 10-80mg once daily',
        otc=RX,
        warnings='Report muscle pain, avoid grapefruit',
        atc='C10AA05',
    ),
    Medication(
        key='loratadin',
        brands=('Clarityn', 'Loratadin'),
        use='Allergies, hay fever, hives',
        dose='Adult: 10mg once daily',
        otc=OTC,
        warnings='Non-drowsy antihistamine',
        atc='R06AX13',
    ),
    Medication(
        key='cetirizin',
        brands=('Zyrtec', 'Cetirizin'),
        use='Allergies, hay fever, hives',
        dose='Adult: 10mg once daily',
        otc=OTC,
        warnings='May cause slight drowsiness',
        atc='R06AE07',
    ),
    Medication(
        key='diklofenak',
        brands=('Voltaren', 'Diklofenak'),
        use='Pain, inflammation, arthritis',
        dose='Adult: 50mg 2-3x/day or gel topically',
        otc=conditional_otc('Gel OTC, tablets Rx'),
        warnings='Cardiovascular risk with long-term use',
        atc='M01AB05',
    ),
    Medication(
        key='amoxicillin',
        brands=('Amoxicillin', 'Amimox'),
        use='Bacterial infections',
        dose='Adult: 500mg 3x/day or 875mg 2x/day',
        otc=RX,
        warnings='Complete full course, check for penicillin allergy',
        atc='J01CA04',
    ),
)

# Efficient lookup dictionaries
MEDICATION_BY_KEY = MappingProxyType({med.key: med for med in MEDICATIONS})


def _name_index(medications):
    """Every searchable name (key or brand, lowercased) -> canonical key; earlier entries win."""
    return {name.lower(): med.key
            for med in reversed(medications)
            for name in (med.key,) + tuple(med.brands)}


NAME_TO_KEY = MappingProxyType(_name_index(MEDICATIONS))


# Query functions

def get_medications():
    """Return the full read-only table, keyed by canonical substance name."""
    return MEDICATION_BY_KEY


def get_medication(key):
    """Return the Medication for an exact canonical key, or None if not found."""
    return MEDICATION_BY_KEY.get(key.strip().lower())


def normalize_query(query):
    return query.strip().lower()


def resolve(query, medications=MEDICATIONS):
    """
    Resolve a free-text name to a Medication.

    1. Exact substance key
    2. Exact brand name (case-insensitive)
    3. Substring of the key or of any brand

    Each tier is tried against the whole table before falling back to the
    next one, so an exact brand match always beats an earlier entry's
    substring match. Returns NotFound (with fuzzy suggestions) on a miss.
    """
    q = normalize_query(query)
    if not q:
        return NotFound(query=query, suggestions=())

    for med in medications:
        if med.key == q:
            logger.debug("%r matched key %s", query, med.key)
            return med

    for med in medications:
        if any(brand.lower() == q for brand in med.brands):
            logger.debug("%r matched a brand of %s", query, med.key)
            return med

    for med in medications:
        if q in med.key or any(q in brand.lower() for brand in med.brands):
            logger.debug("%r partially matched %s", query, med.key)
            return med

    logger.debug("No quick-lookup match for %r", query)
    return NotFound(query=query, suggestions=suggest_medications(query, medications))


def search_medications(query):
    """Return every Medication whose key or brand contains the query (case-insensitive substring)."""
    q = normalize_query(query)
    if not q:
        return []
    return [med for med in MEDICATIONS
            if q in med.key or any(q in brand.lower() for brand in med.brands)]


def suggest_medications(query, medications=MEDICATIONS, threshold=SUGGESTION_THRESHOLD,
                        limit=SUGGESTION_LIMIT):
    """Return up to `limit` canonical keys whose key or a brand fuzzily resembles the query."""
    q = normalize_query(query)
    if not q:
        return ()

    name_to_key = NAME_TO_KEY if medications is MEDICATIONS else _name_index(medications)
    best_matches = process.extractBests(q, list(name_to_key), score_cutoff=threshold, limit=None)
    suggestions = []
    for name, score in best_matches:
        key = name_to_key[name]
        if key not in suggestions:
            suggestions.append(key)
        if len(suggestions) == limit:
            break
    return tuple(suggestions)


def build_search_url(query):
    """Return the FASS.se search URL for the raw, un-normalized query."""
    return FASS_SEARCH_URL + quote(query, safe=_URI_COMPONENT_SAFE, errors="surrogateescape")
