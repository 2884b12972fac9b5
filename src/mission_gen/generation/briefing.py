"""Level names and mission briefing text."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from mission_gen.generation.core.rng import LevelRNG

_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

NAME_PREFIXES = ["Covert", "Shadow", "Midnight", "Silent", "Stealth", "Black", "Phantom", "Ghost"]
NAME_SITES = ["Facility", "Outpost", "Bunker", "Complex", "Station", "Base", "Compound", "Site"]
NAME_PHONETICS = ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Gamma"]

# Chance of a "<prefix> <phonetic>" codename instead of "<prefix> <site>"
PHONETIC_NAME_CHANCE = 0.3

LOCATIONS = [
    "an underground facility",
    "a remote outpost",
    "a classified research complex",
    "a high-security compound",
    "a black site",
    "an enemy stronghold",
]

BRIEFING_OBJECTIVES = [
    "Eliminate all hostiles in the area.",
    "Retrieve the classified intelligence documents.",
    "Neutralize the enemy commander.",
    "Destroy the prototype weapon system.",
    "Extract the captured operative.",
    "Disable the security systems.",
    "Recover the stolen data.",
    "Plant surveillance devices.",
]

COMPLICATIONS = [
    "Enemy reinforcements may be in the area.",
    "The facility is on high alert.",
    "Hostiles are equipped with advanced weaponry.",
    "Security systems are active and monitoring.",
    "The area may contain hazardous materials.",
    "Enemy snipers have been spotted in the area.",
    "The facility is rigged with explosives.",
]

COMPLICATION_CHANCE = 0.7


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)))


def generate_level_name(rng: LevelRNG) -> str:
    if rng.chance(PHONETIC_NAME_CHANCE):
        return f"{rng.random_choice(NAME_PREFIXES)} {rng.random_choice(NAME_PHONETICS)}"
    return f"{rng.random_choice(NAME_PREFIXES)} {rng.random_choice(NAME_SITES)}"


def render_briefing(
    location: str,
    primary: str,
    secondary: str = "",
    complication: str = "",
) -> str:
    """Render the briefing template.

    Empty *secondary* / *complication* sections are left out entirely.
    """
    template = _environment().get_template("briefing.txt.j2")
    return template.render(
        location=location[:1].upper() + location[1:],
        primary=primary,
        secondary=secondary,
        complication=complication,
    )


def generate_briefing(rng: LevelRNG) -> str:
    """Roll a location, objectives and an optional complication, then render."""
    location = rng.random_choice(LOCATIONS)
    primary = rng.random_choice(BRIEFING_OBJECTIVES)
    # The trailing "" lets a briefing have no secondary objective at all
    secondary = rng.random_choice([o for o in BRIEFING_OBJECTIVES if o != primary] + [""])
    complication = rng.random_choice(COMPLICATIONS) if rng.chance(COMPLICATION_CHANCE) else ""
    return render_briefing(location, primary, secondary, complication)
