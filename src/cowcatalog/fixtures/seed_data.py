"""Demo herd used when no stored catalog exists or it cannot be read."""

from datetime import datetime, timedelta
from typing import Any, Dict, List

from cowcatalog.models import Cow

# (ear_tag, sex, pen, status, weight, daily_weight_gain, created_days_ago, events)
# events: (id, days_ago, type, description)
SEED_HERD: List[tuple] = [
    ("TAG-1001", "Female", "Pen A", "Active", 520, 0.8, 120, [
        ("e1", 2, "Weight Check", "Routine weigh-in: 520 kg"),
        ("e2", 30, "Pen Move", "Moved from Pen C to Pen A"),
        ("e3", 60, "Treatment", "Administered vaccine booster"),
    ]),
    ("TAG-1002", "Male", "Pen B", "Active", 610, 1.1, 200, [
        ("e4", 5, "Weight Check", "Routine weigh-in: 610 kg"),
    ]),
    ("TAG-1003", "Female", "Pen A", "In Treatment", 480, 0.4, 90, [
        ("e5", 1, "Treatment", "Antibiotic course started for hoof infection"),
        ("e6", 10, "Weight Check", "Routine weigh-in: 480 kg"),
    ]),
    ("TAG-1004", "Male", "Pen C", "Active", 540, 0.9, 150, [
        ("e7", 7, "Weight Check", "Routine weigh-in: 540 kg"),
        ("e8", 45, "Pen Move", "Moved from Pen B to Pen C"),
    ]),
    ("TAG-1005", "Female", "Pen B", "Deceased", 390, None, 300, [
        ("e9", 3, "Death", "Found deceased, natural causes suspected"),
        ("e10", 20, "Treatment", "Treated for respiratory illness"),
        ("e11", 40, "Weight Check", "Routine weigh-in: 390 kg"),
    ]),
    ("TAG-1006", "Male", "Pen A", "Active", 700, 1.3, 250, [
        ("e12", 4, "Weight Check", "Routine weigh-in: 700 kg"),
    ]),
    ("TAG-1007", "Female", "Pen C", "In Treatment", 460, 0.3, 80, [
        ("e13", 0, "Treatment", "Eye infection, topical ointment applied"),
        ("e14", 15, "Pen Move", "Moved from Pen A to Pen C for isolation"),
    ]),
    ("TAG-1008", "Male", "Pen B", "Active", 580, 1.0, 100, [
        ("e15", 6, "Weight Check", "Routine weigh-in: 580 kg"),
    ]),
]


def generate_seed_data(now: datetime) -> List[Cow]:
    """
    Build the 8-cow demo herd with dates relative to `now`.

    Args:
        now: Timezone-aware reference time

    Returns:
        Fresh Cow objects in ear-tag order
    """

    def days_ago(days: int) -> datetime:
        return now - timedelta(days=days)

    cows: List[Cow] = []
    for ear_tag, sex, pen, status, weight, gain, created, events in SEED_HERD:
        payload: Dict[str, Any] = {
            "ear_tag": ear_tag,
            "sex": sex,
            "pen": pen,
            "status": status,
            "weight": weight,
            "daily_weight_gain": gain,
            "created_at": days_ago(created),
            "events": [
                {"id": event_id, "date": days_ago(ago), "type": event_type, "description": description}
                for event_id, ago, event_type, description in events
            ],
        }
        cows.append(Cow.model_validate(payload))
    return cows
