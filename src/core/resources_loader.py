"""Seed data loader.

Lives in `core/` because it decides *what* initial records look like
(a JSON list of objects), independently of the resource that will serve
them.

Accepted layouts:
- `[{"id": 1, ...}, ...]`
- `{"entities": [{"id": 1, ...}, ...]}`
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Entity

SAMPLE_ENTITIES: tuple[dict[str, object], ...] = (
    {"id": 1, "name": "Bulbasaur", "type": "grass"},
    {"id": 4, "name": "Charmander", "type": "fire"},
    {"id": 7, "name": "Squirtle", "type": "water"},
)


def load_seed_entities(path: Path) -> list[Entity]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("entities", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of records")
    return [Entity.model_validate(item) for item in data]


def sample_entities() -> list[Entity]:
    return [Entity.model_validate(item) for item in SAMPLE_ENTITIES]
