"""Tests for the link index builder."""

import json

import pytest
from schema_builder.base.models import LinkDescriptor, RouteDescriptor
from schema_builder.exceptions import MetadataUnavailableError
from schema_builder.links import LinkIndexBuilder, load_routes, route_from_dict


class TestLinkIndexBuilder:
    """Tests for LinkIndexBuilder."""

    def setup_method(self):
        self.builder = LinkIndexBuilder()

    def test_build(self, routes):
        """Routes should be grouped per controller in declaration order."""
        index = self.builder.build(routes)
        assert list(index) == ["articles"]
        assert [link.rel for link in index["articles"]] == ["index", "create", "show", "update"]

    def test_first_route_wins(self, routes):
        """Duplicate rels should keep the first declared route."""
        update = self.builder.build(routes)["articles"][-1]
        assert update == LinkDescriptor("update", "PATCH", "/articles/{id}")

    def test_href_and_method(self):
        """Paths should lose the format suffix and use {id}; verbs lose anchors."""
        route = RouteDescriptor("articles", "show", "^GET$", "/articles/:id(.:format)")
        link = self.builder.build([route])["articles"][0]
        assert link.href == "/articles/{id}"
        assert link.method == "GET"

    def test_nested_placeholders_kept(self):
        """Only the :id placeholder should be rewritten."""
        assert self.builder.href("/articles/:article_id/comments/:id(.:format)") == (
            "/articles/:article_id/comments/{id}"
        )

    def test_skip_routes_without_requirements(self):
        """Catch-all routes without constraints should be dropped."""
        assert self.builder.build([RouteDescriptor(verb="^GET$", path="/*path")]) == {}

    @pytest.mark.parametrize("controller", ["sessions", "passwords", "users", "admin/articles"])
    def test_skip_controllers(self, controller):
        """Authentication and admin controllers should be dropped."""
        route = RouteDescriptor(controller, "index", "^GET$", "/x")
        assert self.builder.build([route]) == {}

    def test_skip_ui_actions_in_set(self):
        """Action sets containing edit or new should be dropped."""
        routes = [
            RouteDescriptor("articles", ("show", "edit"), "^GET$", "/articles/:id"),
            RouteDescriptor("articles", ("index", "show"), "^GET$", "/articles"),
        ]
        links = self.builder.build(routes)["articles"]
        assert [link.rel for link in links] == ["index|show"]

    def test_malformed_route(self):
        """Missing verb or path should propagate as None without raising."""
        link = self.builder.build([RouteDescriptor("articles", "index")])["articles"][0]
        assert link == LinkDescriptor("index", None, None)


class TestLoadRoutes:
    """Tests for reading the route table."""

    def test_route_from_dict(self):
        """Requirements may be given inline or nested."""
        route = route_from_dict({
            "requirements": {"controller": "articles", "action": "show"},
            "verb": "^GET$",
            "path": "/articles/:id(.:format)",
        })
        assert route == RouteDescriptor("articles", "show", "^GET$", "/articles/:id(.:format)")

    def test_load_routes(self, tmp_path):
        """Route files may be a list or an object with a routes key."""
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({"routes": [
            {"controller": "articles", "action": "index", "verb": "GET", "path": "/articles"},
            {"path": "/*path"},
        ]}))
        routes = load_routes(path)
        assert len(routes) == 2
        assert routes[1].requirements == {}

    def test_load_routes_missing(self, tmp_path):
        """A missing route file should be reported as unavailable metadata."""
        with pytest.raises(MetadataUnavailableError):
            load_routes(tmp_path / "missing.json")

    def test_load_routes_invalid(self, tmp_path):
        path = tmp_path / "routes.json"
        path.write_text("{not json")
        with pytest.raises(MetadataUnavailableError):
            load_routes(path)
