"""Saving and restoring StringEncoding state as JSON."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .encoding import StringEncoding
from .models import EncodingState


log = logging.getLogger("string_encoding.persistence")


def save_encoding(encoding: StringEncoding, path: str | Path) -> Path:
    """Write the policy and dictionary of an orchestrator to a JSON file.

    Args:
        encoding: Orchestrator to persist
        path: Destination file; parent directories are created

    Returns:
        Path to the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    state = encoding.to_state()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.model_dump(mode="json"), f, ensure_ascii=False)
        f.write("\n")

    log.debug("Saved %s with %d tokens to %s", state.policy.name, len(state.dictionary.tokens), path)
    return path


def load_encoding(path: str | Path) -> StringEncoding:
    """Restore an orchestrator saved with ``save_encoding``.

    Args:
        path: File written by ``save_encoding``

    Returns:
        StringEncoding continuing in the saved label space

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid saved state
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Encoding state not found: {path}")

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        raise ValueError(f"Empty encoding state file: {path}")

    try:
        state = EncodingState.model_validate_json(text)
    except ValidationError as e:
        raise ValueError(f"Invalid encoding state in {path}: {e}") from e

    return StringEncoding.from_state(state)
