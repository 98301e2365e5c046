from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass
class GameRuleSet:
    name: str
    data: Dict[str, Any] = field(default_factory=dict)

# Values shared by every layout profile
BASE_RULES: Dict[str, Any] = {
    "playfield_width": 390,
    "max_missed": 3,
    "simulation_interval_ms": 16,
    "spawn_interval_ms": 1500,
    "min_speed": 2.0,
    "max_speed": 4.0,
    "margin_px": 50,
    "resolution_band_px": 50,
    "score_tiers": {0: "low", 6: "medium", 11: "high"},
}

DEFAULT_RULES = {
    "phone": GameRuleSet(
        name="phone",
        data={**BASE_RULES, "paddle_width": 80, "object_visual_size": 30,
              "playfield_height": 500, "move_step": 30},
    ),
    "tablet": GameRuleSet(
        name="tablet",
        data={**BASE_RULES, "playfield_width": 820, "paddle_width": 120,
              "object_visual_size": 45, "playfield_height": 700, "move_step": 50},
    ),
}

def get_rules(profile: str) -> GameRuleSet:
    rules = DEFAULT_RULES.get(profile)
    if rules is None:
        return GameRuleSet(name=profile, data=dict(DEFAULT_RULES["phone"].data))
    return GameRuleSet(name=rules.name, data=dict(rules.data))

def available_profiles() -> list[str]:
    return sorted(DEFAULT_RULES)
