"""Tests for the Director model."""

from __future__ import annotations

import pytest

from varnish_agent.exceptions import InvalidInputError
from varnish_agent.registry.models import Director, sort_directors


class TestFromPayload:
    """Tests for Director.from_payload."""

    def test_preserves_extra_properties_in_order(self) -> None:
        """Engine-owned properties are kept verbatim and in their original order."""
        payload = {
            "name": "b1",
            "prefix": "/api",
            "backends": ["10.0.0.1:8080", "10.0.0.2:8080"],
            "hosts": ["example.com"],
            "type": "random",
        }

        director = Director.from_payload(payload)

        assert director.to_payload() == payload
        assert list(director.to_payload()) == ["name", "prefix", "backends", "hosts", "type"]

    def test_name_is_serialized_first(self) -> None:
        """Given name after other keys, to_payload moves it to the front."""
        director = Director.from_payload({"weight": 5, "name": "b1", "backends": []})

        assert list(director.to_payload()) == ["name", "weight", "backends"]

    def test_missing_name_defaults_to_empty(self) -> None:
        """A payload without name parses; emptiness is checked by the registry."""
        director = Director.from_payload({"weight": 5})

        assert director.name == ""

    @pytest.mark.parametrize("payload", [[], "b1", 5, None])
    def test_non_object_rejected(self, payload: object) -> None:
        """Non-object payloads raise InvalidInputError."""
        with pytest.raises(InvalidInputError):
            Director.from_payload(payload)

    def test_non_string_name_rejected(self) -> None:
        """A numeric name is malformed input."""
        with pytest.raises(InvalidInputError) as exc_info:
            Director.from_payload({"name": 42})

        assert exc_info.value.status_code == 400


class TestWithName:
    """Tests for Director.with_name."""

    def test_forces_name_and_keeps_content(self) -> None:
        director = Director.from_payload({"name": "ignored", "weight": 5})

        renamed = director.with_name("b1")

        assert renamed.to_payload() == {"name": "b1", "weight": 5}
        assert director.name == "ignored"

    def test_copy_is_independent(self) -> None:
        """Mutating the copy's nested values leaves the original untouched."""
        director = Director.from_payload({"name": "a", "backends": ["x"]})

        renamed = director.with_name("b")
        renamed.backends.append("z")  # type: ignore[attr-defined]

        assert director.backends == ["x"]  # type: ignore[attr-defined]


class TestSortDirectors:
    """Tests for sort_directors."""

    def test_sorts_by_name(self) -> None:
        directors = [Director(name=n) for n in ("web", "api", "static")]

        assert [d.name for d in sort_directors(directors)] == ["api", "static", "web"]

    def test_stable_for_equal_names(self) -> None:
        """Equal names keep their relative order."""
        first = Director(name="a", n=1)
        second = Director(name="a", n=2)

        assert sort_directors([first, second]) == [first, second]
