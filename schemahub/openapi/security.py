"""Module security: decides which operations reach the public document."""

from __future__ import annotations

from typing import Any, Mapping

BEARER_SCHEME = "bearerAuth"


def declares_bearer(requirement: Any) -> bool:
    return isinstance(requirement, Mapping) and BEARER_SCHEME in requirement


def accept(element: Mapping[str, Any], bearer_only: bool) -> bool:
    """
    Whether a path entry belongs in the document being built.

    The private document takes everything. The public one drops an entry only
    when it declares a non-empty security list without a bearer requirement;
    entries with no security declaration are kept.
    """
    if not bearer_only:
        return True

    security = element.get("security")
    if not isinstance(security, (list, tuple)) or not security:
        return True

    return any(declares_bearer(requirement) for requirement in security)
