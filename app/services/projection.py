# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Response projection: lift well-known nested metadata fields into
first-class response fields.

Extraction never raises: a missing key, a value of the wrong JSON type or
an unparsable document at any level yields "" (or an empty list) for that
field while the rest of the response is still produced.
"""

import json
from typing import Any, Dict, List, Optional

from app.core.config import settings


def parse_metadata(raw: Any) -> Optional[Dict[str, Any]]:
    """Return the metadata document as a dict, or None when absent/malformed."""
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        if not raw.strip():
            return None
        try:
            raw = json.loads(raw)
        except ValueError:
            return None
    return raw if isinstance(raw, dict) else None


def nested_str(document: Any, *path: str) -> str:
    """Follow ``path`` through nested objects; "" unless a string sits at the end."""
    node = parse_metadata(document)
    for key in path:
        if not isinstance(node, dict):
            return ""
        node = node.get(key)
    return node if isinstance(node, str) else ""


# ── Teams ──

def jira_team(metadata: Any) -> str:
    return nested_str(metadata, "jira", "team")


def project_team(team: Dict[str, Any]) -> Dict[str, Any]:
    """Full team view plus ``jira_team``."""
    view = dict(team)
    view["metadata"] = parse_metadata(team.get("metadata"))
    view["jira_team"] = jira_team(team.get("metadata"))
    return view


def project_team_list_item(team: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": team["id"],
        "group_id": team["group_id"],
        "name": team["name"],
        "title": team["title"],
        "description": team.get("description", ""),
        "metadata": parse_metadata(team.get("metadata")),
    }


# ── Components ──

def sonar_url(metadata: Any) -> str:
    project_id = nested_str(metadata, "sonar", "project_id")
    if not project_id:
        return ""
    return f"{settings.SONAR_DASHBOARD_URL}{project_id}"


def project_component(component: Dict[str, Any]) -> Dict[str, Any]:
    """Minimal component view with qos / sonar / github pulled from metadata."""
    metadata = component.get("metadata")
    return {
        "id": component["id"],
        "owner_id": component["owner_id"],
        "project_id": component.get("project_id"),
        "name": component["name"],
        "title": component["title"],
        "description": component.get("description", ""),
        "qos": nested_str(metadata, "ci", "qos"),
        "sonar": sonar_url(metadata),
        "github": nested_str(metadata, "github", "url"),
    }


# ── Members ──

def quick_links(metadata: Any) -> List[Dict[str, str]]:
    document = parse_metadata(metadata)
    if document is None:
        return []
    links = document.get("quick_links")
    if not isinstance(links, list):
        return []
    result = []
    for link in links:
        if not isinstance(link, dict):
            continue
        result.append({
            field: link[field] if isinstance(link.get(field), str) else ""
            for field in ("url", "title", "icon", "category")
        })
    return result


def project_entity(entity: Dict[str, Any]) -> Dict[str, Any]:
    """Generic view: same fields with metadata parsed (None when malformed)."""
    view = dict(entity)
    view["metadata"] = parse_metadata(entity.get("metadata"))
    return view
