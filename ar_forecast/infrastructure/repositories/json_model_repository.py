"""
JSON Model Repository - Infrastructure Layer

Implements the AR model repository over a directory of master-data files
named ``{instrument}_ar_model.json`` (version ``legacy``) or
``{instrument}_ar_model_{YYYYMMDD}.json`` (version ``YYYYMMDD``).
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog

from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.entities.errors import ModelValidationError
from ar_forecast.domain.repositories.model_repository import IARModelRepository
from ar_forecast.domain.services.model_validator import validate_ar_model

logger = structlog.get_logger(__name__)

LEGACY_VERSION = "legacy"
_FILE_PATTERN = re.compile(r"^(?P<instrument>.+?)_ar_model(?:_(?P<version>\d{8}))?\.json$")


class JsonARModelRepository(IARModelRepository):
    """File-system implementation of the AR model repository."""

    def __init__(self, models_dir: str):
        """
        Initialize the JSON model repository.

        Args:
            models_dir: Directory holding the master-data JSON files
        """
        self.models_dir = Path(models_dir)

    def path_for(self, instrument_id: str, model_version: str) -> Path:
        if model_version == LEGACY_VERSION:
            return self.models_dir / f"{instrument_id}_ar_model.json"
        return self.models_dir / f"{instrument_id}_ar_model_{model_version}.json"

    def _scan(self) -> List[Tuple[str, str, Path]]:
        """List (instrument, version, path) for every master-data file."""
        if not self.models_dir.is_dir():
            logger.warning("model_repository.missing_dir", path=str(self.models_dir))
            return []

        entries: List[Tuple[str, str, Path]] = []
        for path in sorted(self.models_dir.glob("*.json")):
            match = _FILE_PATTERN.match(path.name)
            if not match:
                continue
            version = match.group("version") or LEGACY_VERSION
            entries.append((match.group("instrument"), version, path))
        return entries

    def _load(self, instrument_id: str, model_version: str, path: Path) -> ARModel:
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload: Any = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ModelValidationError(
                f"Master data file {path.name} is not valid JSON",
                details={"path": str(path), "errors": [str(exc)]},
            ) from exc

        if not isinstance(payload, dict):
            raise ModelValidationError(
                f"Master data file {path.name} must contain a JSON object",
                details={"path": str(path)},
            )

        model = ARModel.from_master_data(instrument_id, payload, model_version)
        suspicious = validate_ar_model(model)
        if suspicious:
            logger.warning(
                "model_repository.suspicious_coefficients",
                instrument_id=instrument_id,
                model_version=model_version,
                coefficients={c.lag_name: c.value for c in suspicious},
            )
        logger.debug(
            "model_repository.loaded",
            instrument_id=instrument_id,
            model_version=model_version,
            order=model.order,
        )
        return model

    async def find_by_instrument_and_version(
        self, instrument_id: str, model_version: str
    ) -> Optional[ARModel]:
        path = self.path_for(instrument_id, model_version)
        if not path.is_file():
            return None
        return self._load(instrument_id, model_version, path)

    async def find_active_by_instrument(self, instrument_id: str) -> Optional[ARModel]:
        versions: Dict[str, Path] = {
            version: path
            for instrument, version, path in self._scan()
            if instrument == instrument_id
        }
        if not versions:
            return None

        dated = sorted(v for v in versions if v != LEGACY_VERSION)
        version = dated[-1] if dated else LEGACY_VERSION
        return self._load(instrument_id, version, versions[version])

    async def find_all(self) -> List[ARModel]:
        return [
            self._load(instrument, version, path)
            for instrument, version, path in self._scan()
        ]
