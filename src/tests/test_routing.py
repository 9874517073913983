"""Unit tests for the request path grammar."""

import pytest

from flatwiki.core.models import is_valid_title
from flatwiki.core.routing import Operation, Route, resolve


class TestFixedPaths:
    def test_root_lists(self):
        assert resolve("/") == Route(Operation.LIST)

    def test_create(self):
        assert resolve("/create") == Route(Operation.CREATE, None)

    def test_store_takes_no_title(self):
        assert resolve("/store") == Route(Operation.STORE)
        assert resolve("/store/Home") is None


class TestTitledPaths:
    @pytest.mark.parametrize(
        "op", [Operation.VIEW, Operation.EDIT, Operation.SAVE, Operation.DELETE]
    )
    def test_operation_and_title(self, op):
        route = resolve(f"/{op.value}/Home")
        assert route == Route(op, "Home")

    def test_title_with_spaces_and_digits(self):
        assert resolve("/view/My Page 2") == Route(Operation.VIEW, "My Page 2")

    def test_title_is_case_preserved(self):
        assert resolve("/edit/HomePage").title == "HomePage"


class TestRejectedPaths:
    @pytest.mark.parametrize(
        "path",
        [
            "",
            "view/Home",
            "/view",
            "/view/",
            "/view/Home/",
            "/view/Home/extra",
            "/show/Home",
            "/VIEW/Home",
            "/create/",
            "/store/",
            "//",
            "/view/../../etc/passwd",
            "/view/a.b",
            "/view/Home#top",
            "/view/Home?x=1",
            "/view/Café",
            "/view/Home\n",
            "/view/Tab\there",
            "/public/style.css",
        ],
    )
    def test_not_found(self, path):
        assert resolve(path) is None

    @pytest.mark.parametrize("path", [None, 42, b"/view/Home", ["/"]])
    def test_non_string_input(self, path):
        assert resolve(path) is None


class TestTotality:
    @pytest.mark.parametrize(
        "path",
        ["/", "/create", "/store", "/view/A", "/edit/A", "/save/A", "/delete/A", "/nope"],
    )
    def test_exactly_one_outcome(self, path):
        result = resolve(path)
        assert result is None or isinstance(result.operation, Operation)

    def test_titled_operations_always_carry_title(self):
        for op in ("view", "edit", "save", "delete"):
            route = resolve(f"/{op}/X")
            assert route.title == "X"


class TestTitleValidation:
    @pytest.mark.parametrize("title", ["Home", "My Page", "2024", "a b c", " "])
    def test_valid(self, title):
        assert is_valid_title(title) is True

    @pytest.mark.parametrize("title", ["", "a/b", "..", "x#y", "under_score", "dash-ed", "Home\n", None])
    def test_invalid(self, title):
        assert is_valid_title(title) is False
