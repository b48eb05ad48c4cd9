"""
Roster loading for JSON-defined worlds.

This module provides RosterLoader for converting JSON roster files into
``Personality`` objects. A roster defines who inhabits a world at start-up:
each agent's character, interests, values, mood, engagement and template
pools, plus an optional opening message.

Design philosophy:
- Rosters are data (JSON), not code - new characters need no Python
- Validation ensures required fields are present before any agent is built
- Template pools are optional per category (engine defaults fill the gaps)

Roster file structure:
```json
{
  "name": "Salon",
  "description": "...",
  "kickstart": "Optional first message from the first agent",
  "agents": [
    {
      "name": "Vera",
      "personality": "precise, epistemologically careful",
      "interests": ["knowledge", "truth"],
      "style": "analytical",
      "values": ["precision"],
      "mood": "contemplative",
      "engagement": 0.7,
      "templates": {"question": ["..."], "interest": ["... {interest} ..."]}
    }
  ]
}
```

Usage:
    loader = RosterLoader()
    roster = loader.load("salon")
    agents = build_agents(roster.personalities, rng=random.Random(7))
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .config import Config
from .personality import TEMPLATE_CATEGORIES, Personality, TemplateSet


class Roster(BaseModel):
    """A named set of personalities loaded from JSON."""

    name: str
    description: str = ""
    kickstart: Optional[str] = Field(None, description="Opening message for the first agent")
    personalities: List[Personality] = Field(default_factory=list)


class RosterLoader:
    """Load and validate rosters from JSON files.

    Directory structure:
    - Default: {PROJECT_ROOT}/examples/rosters/
    - Override via constructor: RosterLoader(Path("/custom/rosters"))
    - Roster files: {roster_name}.json

    Validation:
    - Required fields: name, agents
    - At least one agent, each with a name
    - Unknown template categories are rejected
    - Raises ValueError if validation fails
    """

    def __init__(self, rosters_dir: Optional[Path] = None):
        """Initialize roster loader.

        Args:
            rosters_dir: Directory containing roster files.
                         Defaults to Config.ROSTERS_DIR
        """
        self.rosters_dir = rosters_dir or Config.ROSTERS_DIR

    def load(self, roster_name: str) -> Roster:
        """Load a roster by name (without the .json extension).

        Raises:
            FileNotFoundError: If the roster file doesn't exist
            ValueError: If the roster is missing fields or malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        roster_path = self.rosters_dir / f"{roster_name}.json"

        if not roster_path.exists():
            raise FileNotFoundError(
                f"Roster '{roster_name}' not found at {roster_path}"
            )

        data = json.loads(roster_path.read_text())
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> Roster:
        """Validate raw roster data and build a ``Roster``."""
        self._validate_roster(data)

        personalities = [self._parse_personality(entry) for entry in data["agents"]]
        return Roster(
            name=data["name"],
            description=data.get("description", ""),
            kickstart=data.get("kickstart"),
            personalities=personalities,
        )

    def _validate_roster(self, data: Dict[str, Any]) -> None:
        required = ["name", "agents"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Roster missing required fields: {missing}")

        if not data["agents"]:
            raise ValueError("Roster must have at least one agent")

        for entry in data["agents"]:
            if not isinstance(entry, dict) or not entry.get("name"):
                raise ValueError("Each agent entry must be an object with a 'name'")

    def _parse_personality(self, entry: Dict[str, Any]) -> Personality:
        templates = entry.get("templates") or {}
        unknown = [key for key in templates if key not in TEMPLATE_CATEGORIES]
        if unknown:
            raise ValueError(
                f"Agent '{entry['name']}' has unknown template categories: {unknown}"
            )

        fields = {key: value for key, value in entry.items() if key != "templates"}
        try:
            return Personality(**fields, templates=TemplateSet(**templates))
        except ValidationError as exc:
            raise ValueError(f"Invalid personality for agent '{entry['name']}': {exc}") from exc
