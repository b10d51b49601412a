"""Module template: the base OpenAPI document every build starts from."""
#
# The skeleton holds what no single service owns: document metadata, the two
# server entries, security schemes, shared responses and the generic Error
# schema. Operator overrides are merged over it, then service fragments.
#

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

import schemahub
from schemahub.base.config import SchemaHubConfig, get_config

OPENAPI_VERSION = "3.0.3"
PACKAGE_NAME = "schemahub"


def default_title(package_name: str = PACKAGE_NAME) -> str:
    return f"{package_name.upper()} API Documentation"


def copyright_notice(organization: str, since: int, year: Optional[int] = None) -> str:
    year = year or datetime.now().year
    return f"{organization} Copyright © - {since} - {year}"


def build_template(
    title: Optional[str] = None,
    version: Optional[str] = None,
    config: Optional[SchemaHubConfig] = None,
    year: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Return a fresh copy of the base document.

    Args:
        title: info.title (defaults to "<PACKAGE> API Documentation")
        version: info.version (defaults to the package version)
        config: settings supplying URLs and the organisation name
        year: upper bound of the copyright range (defaults to this year)
    """
    docs = (config or get_config()).docs

    return {
        "openapi": OPENAPI_VERSION,

        # https://swagger.io/specification/#infoObject
        "info": {
            "title": title or default_title(),
            "version": version or schemahub.__version__,
            "termsOfService": docs.terms_url,
            "contact": {
                "email": docs.contact_email,
                "url": docs.contact_url,
            },
            "license": {
                "name": copyright_notice(docs.organization, docs.copyright_since, year),
                "url": docs.terms_url,
            },
            "description": "",
        },

        # https://swagger.io/specification/#serverObject
        "servers": [
            {
                "description": "Sandbox Server",
                "url": docs.sandbox_url,
            },
            {
                "description": "Production Server",
                "url": docs.production_url,
            },
        ],

        # https://swagger.io/specification/#componentsObject
        "components": {
            "responses": {
                "UnauthorizedErrorToken": {
                    "description": "Access token is missing or invalid, request new one",
                },
                "UnauthorizedErrorBasic": {
                    "description": "Authentication information is missing or invalid",
                },
                "404": {"description": "Entity not found."},
                "500": {
                    "description": "Internal Error.",
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Error"},
                        },
                    },
                },
            },
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT",
                },
                "basicAuth": {
                    "description": (
                        f"{docs.organization} provides extra endpoints for private use, "
                        "ask for access if you really need the private APIs."
                    ),
                    "type": "http",
                    "scheme": "basic",
                },
            },
            "schemas": {
                "Error": {
                    "type": "object",
                    "required": ["message"],
                    "properties": {
                        "status": {"type": "string"},
                        "message": {"type": "string"},
                    },
                    "description": "This general error structure is used throughout this API.",
                    "example": {"message": "SKU(s) out of stock."},
                },
            },
        },

        # https://swagger.io/specification/#pathsObject
        "paths": {},

        # https://swagger.io/specification/#securityRequirementObject
        "security": [],

        # https://swagger.io/specification/#tagObject
        "tags": [],

        # https://swagger.io/specification/#externalDocumentationObject
        "externalDocs": {
            "description": "Find more info here",
            "url": docs.docs_url,
        },
    }
