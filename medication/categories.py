# medication/categories.py
"""
Mapping from raw drug-catalogue classifications to the handful of
categories shown to members.
"""

PAIN_RELIEF = 'pain_relief'
DIGESTIVE = 'digestive'
ANTIBIOTIC = 'antibiotic'
RESPIRATORY = 'respiratory'
ALLERGY = 'allergy'
CARDIOVASCULAR = 'cardiovascular'
DIABETES = 'diabetes'
VITAMIN = 'vitamin'
OTHER = 'other'

CATEGORY_MAP = {
    'antipyretics, analgesics and anti-inflammatory agents': PAIN_RELIEF,
    'analgesics': PAIN_RELIEF,
    'peptic ulcer agents': DIGESTIVE,
    'digestants': DIGESTIVE,
    'intestinal regulators': DIGESTIVE,
    'laxatives': DIGESTIVE,
    'antibiotics acting mainly on gram-positive bacteria': ANTIBIOTIC,
    'antibiotics acting on gram-positive and gram-negative bacteria': ANTIBIOTIC,
    'antitussives and expectorants': RESPIRATORY,
    'bronchodilators': RESPIRATORY,
    'antihistamines': ALLERGY,
    'antihypertensives': CARDIOVASCULAR,
    'vasodilators': CARDIOVASCULAR,
    'antidiabetic agents': DIABETES,
    'multivitamins': VITAMIN,
    'vitamin a and d preparations': VITAMIN,
    'other vitamins': VITAMIN,
}


def normalize_category(raw_category):
    """Return the member-facing category for a raw classification, 'other' if unknown."""
    if not raw_category:
        return OTHER
    return CATEGORY_MAP.get(raw_category.strip().lower(), OTHER)
