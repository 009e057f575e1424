"""Tests for path matching."""

from novelhub.routing.router import Route, Router, split_location


class TestRouter:
    """Test route patterns and location parsing."""

    def test_static_and_param_routes(self) -> None:
        """Test params are captured and the first match wins."""
        router = Router(
            [
                Route("/", "home"),
                Route("/story/:id/edit", "edit", protected=True),
                Route("/story/:id", "view"),
            ]
        )
        route, params = router.match("/story/abc/edit")
        assert (route.page, params, route.protected) == ("edit", {"id": "abc"}, True)
        route, params = router.match("/story/abc")
        assert (route.page, params) == ("view", {"id": "abc"})
        route, params = router.match("/")
        assert (route.page, params) == ("home", {})

    def test_no_match(self) -> None:
        """Test unknown paths and wrong segment counts do not match."""
        router = Router([Route("/story/:id", "view")])
        assert router.match("/stories") is None
        assert router.match("/story/a/b") is None

    def test_trailing_slash(self) -> None:
        """Test a trailing slash is ignored."""
        assert Route("/browse", "browse").match("/browse/") == {}

    def test_split_location(self) -> None:
        """Test the query string is separated and single-valued."""
        assert split_location("/reset-password?token=abc") == ("/reset-password", {"token": "abc"})
        assert split_location("/login?redirect=%2Fcreate") == ("/login", {"redirect": "/create"})
        assert split_location("") == ("/", {})
