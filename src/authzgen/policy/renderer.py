"""
Document Renderer - Serialize policies to YAML documents.

A policy object is first rendered to canonical JSON, with empty lists and
unset fields omitted, then converted to block-style YAML with sorted keys.
The header and the spec are serialized independently and merged under a
``spec:`` key.
"""

from __future__ import annotations

from typing import Any, Optional
import json
import logging

import yaml
from pydantic import BaseModel

from authzgen.errors import SerializationError
from authzgen.policy.model import PolicyHeader

logger = logging.getLogger(__name__)

SPEC_INDENT = "  "


def _prune(value: Any) -> Any:
    """Drop None and empty values from mappings, recursively."""
    if isinstance(value, dict):
        pruned = {}
        for key, item in value.items():
            item = _prune(item)
            if item is None or item == [] or item == {} or item == "":
                continue
            pruned[key] = item
        return pruned
    if isinstance(value, list):
        return [_prune(item) for item in value]
    return value


def to_json(message: Optional[BaseModel], indent: str = " ") -> str:
    """
    Render a policy object as canonical JSON.

    Raises:
        SerializationError: message is None
    """
    if message is None:
        raise SerializationError("unexpected nil message")

    data = message.model_dump(mode="json", by_alias=True)
    return json.dumps(_prune(data), indent=indent)


def _dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=True)


def to_yaml(message: Optional[BaseModel]) -> str:
    """Render a policy object as YAML via its JSON form."""
    js = to_json(message)
    return _dump_yaml(json.loads(js))


def header_to_yaml(header: Optional[PolicyHeader]) -> str:
    """Render the apiVersion/kind/metadata header."""
    if header is None:
        raise SerializationError("unexpected nil policy header")
    return _dump_yaml(header.to_dict())


def policy_to_yaml(header: PolicyHeader, spec: BaseModel) -> str:
    """
    Render a complete policy document.

    Args:
        header: Resource header (apiVersion, kind, metadata)
        spec: Policy body, e.g. an AuthorizationPolicySpec

    Returns:
        Header YAML followed by a ``spec:`` block holding every spec line
    """
    header_yaml = header_to_yaml(header)
    spec_yaml = to_yaml(spec)

    lines = ["spec:\n"]
    # Indent one level so the spec body nests under the spec key.
    for line in spec_yaml.splitlines():
        lines.append(f"{SPEC_INDENT}{line}\n")

    logger.debug(f"Rendered {header.kind.value} {header.namespace}/{header.name}")
    return header_yaml + "".join(lines)
