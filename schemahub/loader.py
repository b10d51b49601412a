"""Module loader: service definitions from JSON files."""
#
# FILE FORMAT:
# Either a list of service schemas or {"services": [...]}. Each schema is
#   {"name": "...", "version": 1, "settings": {...}, "actions": {...}}
# The fragments themselves are not validated here; malformed fragments are
# reported when the documents are built.
#

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from schemahub.errors import ErrorCode, SchemaHubError
from schemahub.registry.models import ServiceDescriptor

logger = logging.getLogger(__name__)


class ServiceSpec(BaseModel):
    """One service entry in a services file."""
    name: str = Field(..., min_length=1, max_length=256)
    version: Optional[Union[int, str]] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    actions: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Service name cannot be empty")
        if "." in v:
            raise ValueError("Service name cannot contain '.'")
        return v


class ServicesFile(BaseModel):
    services: List[ServiceSpec] = Field(default_factory=list)


def parse_services(data: Any) -> List[ServiceDescriptor]:
    """
    Validate decoded JSON and turn it into descriptors.

    Raises:
        SchemaHubError: REGISTRY_SERVICE_INVALID
    """
    if isinstance(data, list):
        data = {"services": data}

    try:
        parsed = ServicesFile.model_validate(data)
    except ValidationError as e:
        raise SchemaHubError(
            ErrorCode.REGISTRY_SERVICE_INVALID,
            "Invalid service definitions",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    return [ServiceDescriptor.from_dict(spec.model_dump()) for spec in parsed.services]


def load_services(path: Union[str, Path]) -> List[ServiceDescriptor]:
    """
    Read service definitions from a JSON file.

    Raises:
        SchemaHubError: CONFIG_FILE_NOT_FOUND, CONFIG_PARSE_ERROR or REGISTRY_SERVICE_INVALID
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SchemaHubError(
            ErrorCode.CONFIG_FILE_NOT_FOUND,
            "Services file not found",
            details={"path": str(path)},
        ) from e
    except json.JSONDecodeError as e:
        raise SchemaHubError(
            ErrorCode.CONFIG_PARSE_ERROR,
            "Services file is not valid JSON",
            details={"path": str(path), "error": str(e)},
        ) from e

    services = parse_services(data)
    logger.info(f"Loaded {len(services)} service definitions from {path}")
    return services
