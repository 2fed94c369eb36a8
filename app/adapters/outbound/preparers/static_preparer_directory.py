"""Static preparer directory adapter."""

import json
from pathlib import Path
from typing import Any, Iterable, Optional

from app.application.dtos.preparer import LAST_RESORT_PREPARER, Preparer
from app.application.ports.preparer_directory import PreparerDirectory
from app.infrastructure.logging.logger import logger

DEFAULT_PREPARERS_PATH = Path(__file__).resolve().parents[4] / "data" / "preparers.json"


class StaticPreparerDirectory(PreparerDirectory):
    """Immutable in-memory preparer directory, built once at startup."""

    def __init__(self, preparers: Iterable[Preparer], default_code: str = "ow") -> None:
        """
        Initialize directory.

        Args:
            preparers: Preparers in directory order (later duplicates of a code are ignored)
            default_code: Code used when a referral code is missing or unknown
        """
        self._preparers = tuple(preparers)
        self._default_code = default_code
        index: dict[str, Preparer] = {}
        for preparer in self._preparers:
            index.setdefault(preparer.code.lower(), preparer)
        self._index = index

    @property
    def default_code(self) -> str:
        return self._default_code

    def resolve(self, code: Optional[str]) -> Preparer:
        """
        Resolve a referral code to its preparer.

        Args:
            code: Referral code (case-insensitive, may be None or empty)

        Returns:
            Requested preparer, else the default, else the first entry,
            else the last-resort preparer
        """
        key = (code or "").strip().lower()
        if key and key in self._index:
            return self._index[key]

        default = self._index.get((self._default_code or "").lower())
        if default is not None:
            return default

        if self._preparers:
            return self._preparers[0]

        return LAST_RESORT_PREPARER

    def list(self) -> list[Preparer]:
        return list(self._preparers)


def _to_preparer(entry: dict[str, Any]) -> Preparer:
    return Preparer(
        code=str(entry["code"]).strip(),
        first_name=entry.get("firstName") or "",
        last_name=entry.get("lastName") or "",
        email=entry.get("email") or "",
        phone=entry.get("phone") or "",
        title=entry.get("title") or "",
        avatar_url=entry.get("avatarUrl") or "",
    )


def load_preparer_directory(
    path: Optional[str] = None,
    default_code: Optional[str] = None,
) -> StaticPreparerDirectory:
    """
    Load the preparer directory from a JSON file.

    The file looks like ``{"defaultCode": "ow", "preparers": [{"code": ...,
    "firstName": ..., "lastName": ..., "email": ...}]}``. A missing or
    malformed file yields an empty directory, which resolves every code to the
    last-resort preparer.

    Args:
        path: JSON file path (defaults to data/preparers.json)
        default_code: Overrides the file's defaultCode when given

    Returns:
        StaticPreparerDirectory instance
    """
    file_path = Path(path) if path else DEFAULT_PREPARERS_PATH

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load preparers from {file_path}: {str(e)}")
        return StaticPreparerDirectory([], default_code=default_code or "ow")

    preparers = []
    for entry in data.get("preparers", []) if isinstance(data, dict) else []:
        if not isinstance(entry, dict) or not str(entry.get("code") or "").strip():
            logger.warning(f"Skipping preparer entry without a code in {file_path}")
            continue
        preparers.append(_to_preparer(entry))

    file_default = data.get("defaultCode") if isinstance(data, dict) else None
    return StaticPreparerDirectory(
        preparers,
        default_code=default_code or file_default or "ow",
    )
