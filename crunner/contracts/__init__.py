"""Contract ABIs shipped with crunner, plus user-supplied ABI loading."""

from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple
import json

from crunner.exceptions import ConfigurationError

DEFAULT_ABI_FILENAME = "default_abi.json"


def load_contract_abi(filename: str = DEFAULT_ABI_FILENAME) -> List[Dict[str, Any]]:
    """Load an ABI JSON file from the contracts package."""
    with resources.files(__package__).joinpath(filename).open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_abi_file(path: Path) -> List[Dict[str, Any]]:
    """Load a user ABI from ``path``.

    Accepts either a bare JSON array or a build artifact carrying an ``abi`` array.
    """
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"ABI file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"ABI file contains invalid JSON: {path}") from exc

    if isinstance(data, dict) and "abi" in data:
        data = data["abi"]
    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise ConfigurationError(f"Invalid ABI format in {path}: must be a JSON array of entries")
    return data


def _entry_key(entry: Dict[str, Any]) -> Tuple[str, str, Tuple[str, ...]]:
    # Overloads share a name and differ only in their input types.
    inputs = tuple(item.get("type", "") for item in entry.get("inputs", []))
    return entry.get("type", "function"), entry.get("name", ""), inputs


def merge_abis(base: Iterable[Dict[str, Any]], extra: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Combine two ABIs; entries in ``extra`` replace ``base`` entries with the same signature."""
    merged: Dict[Tuple[str, str, Tuple[str, ...]], Dict[str, Any]] = {}
    for entry in base:
        merged[_entry_key(entry)] = entry
    for entry in extra:
        merged[_entry_key(entry)] = entry
    return list(merged.values())


__all__ = ["DEFAULT_ABI_FILENAME", "load_abi_file", "load_contract_abi", "merge_abis"]
