"""
AQI Classification Services

US EPA-style severity bands for a numeric AQI, plus the fixed safety tips
shown next to them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SeverityLevel:
    """One AQI severity band. ``upper_bound`` is inclusive."""
    upper_bound: int
    label: str
    color: str
    recommendation: str

    def to_dict(self):
        return {
            'max': self.upper_bound,
            'label': self.label,
            'color': self.color,
            'recommendation': self.recommendation
        }


# Ordered by ascending upper bound; the last band also covers everything above 500.
AQI_LEVELS = (
    SeverityLevel(
        50, 'Good', '#00e400',
        'Air quality is satisfactory. Enjoy outdoor activities.'
    ),
    SeverityLevel(
        100, 'Moderate', '#ffff00',
        'Acceptable quality. Unusually sensitive people should consider reducing '
        'prolonged outdoor exertion.'
    ),
    SeverityLevel(
        150, 'Unhealthy for Sensitive', '#ff7e00',
        'Members of sensitive groups may experience health effects. Consider '
        'reducing outdoor activities.'
    ),
    SeverityLevel(
        200, 'Unhealthy', '#ff0000',
        'Everyone may experience health effects. Avoid prolonged outdoor exertion. '
        'Sensitive groups should stay indoors.'
    ),
    SeverityLevel(
        300, 'Very Unhealthy', '#8f3f97',
        'Health alert: everyone may experience serious effects. Stay indoors, '
        'close windows, use air purifiers.'
    ),
    SeverityLevel(
        500, 'Hazardous', '#7e0023',
        'Emergency conditions. Avoid all outdoor activity. Stay indoors with '
        'windows closed. Use N95 masks if you must go out.'
    ),
)


SAFETY_TIPS = (
    'Check AQI before outdoor exercise and plan for early morning when pollution is often lower.',
    'On high AQI days, keep windows closed and use air conditioning or an air purifier.',
    'Wear N95 or KN95 masks when AQI is Unhealthy or worse, especially near traffic.',
    'Avoid vigorous outdoor activity when AQI is above 100; choose indoor workouts instead.',
    'Vulnerable groups (children, elderly, those with heart/lung conditions) should limit '
    'exposure when AQI > 100.',
    'Use the air quality index to choose the best time of day for errands or commutes.',
    'Consider indoor plants that can help filter some pollutants (e.g., peace lily, spider plant).',
    'On bad air days, shower and change after being outside to reduce particle exposure.',
)


def classify(aqi):
    """Return the severity band for an AQI value.

    Bands are scanned in ascending order and the first one whose inclusive
    upper bound covers ``aqi`` wins, so 50 is still Good and 51 is Moderate.
    Values above the last bound fall into the last band.
    """
    for level in AQI_LEVELS:
        if aqi <= level.upper_bound:
            return level
    return AQI_LEVELS[-1]


def legend():
    """Band list for rendering a legend: ``[{'upTo', 'label', 'color'}, ...]``."""
    return [
        {'upTo': level.upper_bound, 'label': level.label, 'color': level.color}
        for level in AQI_LEVELS
    ]
