"""Department labels printed by the timeclock export and the job categories they imply."""

from __future__ import annotations

from pydantic import BaseModel


class Department(BaseModel):
    model_config = {"frozen": True}

    category: str
    tip_based: bool = False


DEPARTMENTS: dict[str, Department] = {
    "מלצר": Department(category="waiter", tip_based=True),
    "מלצרית": Department(category="waiter", tip_based=True),
    "אחמשית": Department(category="waiter", tip_based=True),
    'אח"מ': Department(category="waiter", tip_based=True),
    "אחראי משמרת": Department(category="waiter", tip_based=True),
    "אחראי": Department(category="waiter", tip_based=True),
    "טבח": Department(category="cook"),
    "טבחית": Department(category="cook"),
    "סושימן": Department(category="sushi"),
    "סושי": Department(category="sushi"),
    "שוטף": Department(category="dishwasher"),
    "שוטף כלים": Department(category="dishwasher"),
}


def lookup_department(label: str) -> Department | None:
    return DEPARTMENTS.get(label.strip())


def is_department(label: str) -> bool:
    return label.strip() in DEPARTMENTS
