"""Build per-resource hypermedia links from the route table."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Optional

from .base.models import LinkDescriptor, RouteDescriptor
from .config import SKIPPED_ACTIONS, SKIPPED_CONTROLLERS
from .exceptions import MetadataUnavailableError

logger = logging.getLogger(__name__)

FORMAT_SUFFIX = re.compile(r"\(\.:format\)")
ID_PLACEHOLDER = re.compile(r":id\b")
VERB_ANCHORS = re.compile(r"[$^]")

LinkIndex = dict[str, list[LinkDescriptor]]


class LinkIndexBuilder:
    """Collects links per resource from the routes.

    The result maps the controller name to its links, e.g.::

        {"articles": [LinkDescriptor(rel="create", method="POST", href="/articles"), ...]}
    """

    def __init__(
        self,
        skip_controllers: tuple[str, ...] = SKIPPED_CONTROLLERS,
        skip_actions: tuple[str, ...] = SKIPPED_ACTIONS,
    ):
        self.skip_controllers = skip_controllers
        self.skip_actions = skip_actions

    def build(self, routes: Iterable[RouteDescriptor]) -> LinkIndex:
        index: LinkIndex = {}
        for route in routes:
            if self._skip(route):
                continue

            links = index.setdefault(route.controller, [])
            rel = self.rel(route.action)
            if any(link.rel == rel for link in links):
                continue
            links.append(LinkDescriptor(rel=rel, method=self.method(route.verb), href=self.href(route.path)))

        logger.info(f"Collected links for {len(index)} resources")
        return index

    def _skip(self, route: RouteDescriptor) -> bool:
        reqs = route.requirements
        if not reqs or "controller" not in reqs:
            return True
        if any(c in reqs["controller"] for c in self.skip_controllers):
            return True
        action = reqs.get("action")
        if isinstance(action, tuple) and any(a in action for a in self.skip_actions):
            return True
        return False

    @staticmethod
    def rel(action: Any) -> Optional[str]:
        if isinstance(action, tuple):
            return "|".join(action)
        return action

    @staticmethod
    def method(verb: Optional[str]) -> Optional[str]:
        """Strip regex anchors from a verb matcher, ``^GET$`` -> ``GET``."""
        if verb is None:
            return None
        return VERB_ANCHORS.sub("", verb)

    @staticmethod
    def href(path: Optional[str]) -> Optional[str]:
        """Normalize a route path, ``/articles/:id(.:format)`` -> ``/articles/{id}``."""
        if path is None:
            return None
        return ID_PLACEHOLDER.sub("{id}", FORMAT_SUFFIX.sub("", path))


def route_from_dict(data: dict[str, Any]) -> RouteDescriptor:
    """Build a route from a route table entry.

    Entries either carry ``controller``/``action`` directly or inside a
    ``requirements`` object. Missing fields are left unset.
    """
    reqs = data.get("requirements") or {}
    return RouteDescriptor(
        controller=data.get("controller", reqs.get("controller")),
        action=data.get("action", reqs.get("action")),
        verb=data.get("verb"),
        path=data.get("path"),
    )


def load_routes(path: Path) -> list[RouteDescriptor]:
    """Load the route table from a JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise MetadataUnavailableError(f"Failed to load routes from {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("routes", [])
    if not isinstance(data, list):
        raise MetadataUnavailableError(f"Route table in {path} must be a list")

    routes = [route_from_dict(entry) for entry in data if isinstance(entry, dict)]
    logger.debug(f"Loaded {len(routes)} routes from {path}")
    return routes
