"""Presentation icons for industries (Ionicons names)."""

DEFAULT_INDUSTRY_ICON = 'briefcase'

INDUSTRY_ICONS = {
    'Food': 'restaurant',
    'Technology': 'laptop',
    'Fashion': 'shirt',
    'Health': 'fitness',
    'Automotive': 'car',
    'Entertainment': 'film',
    'Finance': 'cash',
    'Education': 'school',
    'Healthcare': 'medkit',
    'Hospitality': 'bed',
    'RealEstate': 'home',
    'Energy': 'flash',
    'Agriculture': 'leaf',
    'Transport': 'bus',
    'Construction': 'construct',
    'Telecommunications': 'call',
}


def icon_for_industry(name):
    return INDUSTRY_ICONS.get(name, DEFAULT_INDUSTRY_ICON)
