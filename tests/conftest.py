"""
Shared pytest fixtures for arc_table tests.

Provides:
  - Isolated INI-backed BuildSettings
  - A writer for small on-disk item corpora
  - Build config files (columns / exclude types)
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import orjson
import pytest

from arc_table.settings import BuildSettings


@pytest.fixture(autouse=True)
def _clear_language_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's ARC_DATA_LANG out of tests."""
    monkeypatch.delenv("ARC_DATA_LANG", raising=False)
    monkeypatch.delenv("ARC_TABLE_SETTINGS", raising=False)


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture
def settings(settings_file: Path) -> BuildSettings:
    return BuildSettings(settings_file=settings_file)


def _write_documents(directory: Path, documents: Dict[str, Any]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for filename, data in documents.items():
        path = directory / filename
        if isinstance(data, bytes):
            path.write_bytes(data)
        else:
            path.write_bytes(orjson.dumps(data))


@pytest.fixture
def write_corpus(tmp_path: Path) -> Callable[..., Path]:
    """Return a function writing ``items/`` and ``hideout/`` JSON files.

    Values given as bytes are written verbatim so malformed files can be
    produced.
    """

    def _write(
        items: Dict[str, Any], hideout: Optional[Dict[str, Any]] = None
    ) -> Path:
        root = tmp_path / "corpus"
        _write_documents(root / "items", items)
        if hideout is not None:
            _write_documents(root / "hideout", hideout)
        return root

    return _write


@pytest.fixture
def write_build_config(tmp_path: Path) -> Callable[..., Dict[str, Path]]:
    """Return a function writing columns.json and exclude_types.json."""

    def _write(columns: List[str], exclude_types: List[str]) -> Dict[str, Path]:
        config_dir = tmp_path / "config"
        config_dir.mkdir(parents=True, exist_ok=True)
        columns_file = config_dir / "columns.json"
        exclude_types_file = config_dir / "exclude_types.json"
        columns_file.write_bytes(orjson.dumps(columns))
        exclude_types_file.write_bytes(orjson.dumps(exclude_types))
        return {"columns": columns_file, "exclude_types": exclude_types_file}

    return _write


SAMPLE_ITEMS: Dict[str, Any] = {
    "anvil.json": {
        "id": "anvil",
        "name": {"en": "Anvil", "fr": "Enclume"},
        "type": "Weapon",
        "rarity": "Rare",
        "value": 500,
        "recipe": {"metal_parts": 3, "unknown_part": 1},
        "craftBench": "weapon_bench",
        "effects": {"dmg": {"en": "Damage", "fr": "Dégâts", "value": "40"}},
    },
    "metal_parts.json": {
        "id": "metal_parts",
        "name": {"en": "Metal Parts", "fr": "Pièces métalliques"},
        "type": "Basic Material",
        "value": 75,
        "stackSize": 15,
        "recyclesInto": {"anvil": 1},
    },
    "outfit.json": {
        "id": "outfit",
        "name": {"en": "Outfit"},
        "type": "Cosmetic",
        "value": 0,
    },
    "quest_note.json": {
        "id": "quest_note",
        "name": {"en": "Quest Note"},
        "type": "Quest Item",
    },
    "broken.json": b"{not json",
    "list.json": [1, 2, 3],
}

SAMPLE_HIDEOUT: Dict[str, Any] = {
    "weapon_bench.json": {"id": "weapon_bench", "name": {"en": "Gunsmith", "fr": "Armurier"}},
}

SAMPLE_COLUMNS = ["id", "name", "type", "value", "recipe", "recyclesInto", "effects", "craftBench"]


@pytest.fixture
def sample_corpus(write_corpus: Callable[..., Path]) -> Path:
    """Corpus with kept, excluded, valueless and malformed items."""
    return write_corpus(SAMPLE_ITEMS, SAMPLE_HIDEOUT)


@pytest.fixture
def sample_config(write_build_config: Callable[..., Dict[str, Path]]) -> Dict[str, Path]:
    return write_build_config(SAMPLE_COLUMNS, ["Cosmetic"])
