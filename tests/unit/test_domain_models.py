from __future__ import annotations

import dataclasses

import pytest

from src.app.domain.models import ImageUpload, Reaction, SauceContent, SauceRecord, UserAccount


def make_sauce(**overrides) -> SauceRecord:
    fields = dict(
        id="sauce-1",
        user_id="owner",
        name="Sriracha",
        manufacturer="Huy Fong",
        description="Garlic chili sauce",
        main_pepper="Red jalapeno",
        image_url="http://localhost:3000/images/sriracha1.png",
        heat=4,
    )
    fields.update(overrides)
    return SauceRecord(**fields)


class TestReaction:
    def test_reaction_values(self) -> None:
        assert Reaction.LIKE.value == 1
        assert Reaction.NEUTRAL.value == 0
        assert Reaction.DISLIKE.value == -1

    def test_reaction_is_int_enum(self) -> None:
        assert isinstance(Reaction.LIKE, int)
        assert Reaction(-1) is Reaction.DISLIKE


class TestSauceRecord:
    def test_create_minimal(self) -> None:
        sauce = make_sauce()

        assert sauce.users_liked == ()
        assert sauce.users_disliked == ()
        assert sauce.likes == 0
        assert sauce.dislikes == 0
        assert sauce.created_at is None
        assert sauce.counts_consistent is True

    def test_is_frozen(self) -> None:
        sauce = make_sauce()

        with pytest.raises(dataclasses.FrozenInstanceError):
            sauce.likes = 3  # type: ignore[misc]

    def test_membership_helpers(self) -> None:
        sauce = make_sauce(users_liked=("u1",), users_disliked=("u2",), likes=1, dislikes=1)

        assert sauce.has_liked("u1") is True
        assert sauce.has_disliked("u1") is False
        assert sauce.has_disliked("u2") is True

    def test_is_owned_by(self) -> None:
        sauce = make_sauce()

        assert sauce.is_owned_by("owner") is True
        assert sauce.is_owned_by("someone-else") is False

    def test_counts_inconsistent(self) -> None:
        sauce = make_sauce(users_liked=("u1",), likes=0)

        assert sauce.counts_consistent is False


class TestSauceContent:
    def test_as_row_uses_column_names(self) -> None:
        content = SauceContent(
            name="Cholula",
            manufacturer="Jose Cuervo",
            description="Mexican hot sauce",
            main_pepper="Arbol",
            heat=3,
        )

        assert content.as_row() == {
            "name": "Cholula",
            "manufacturer": "Jose Cuervo",
            "description": "Mexican hot sauce",
            "main_pepper": "Arbol",
            "heat": 3,
        }


class TestUserAccount:
    def test_create_user(self) -> None:
        user = UserAccount(id="u1", email="a@b.co", password_hash="$2b$hash")

        assert user.id == "u1"
        assert user.email == "a@b.co"
        assert user.created_at is None


class TestImageUpload:
    def test_create_upload(self) -> None:
        upload = ImageUpload(filename="hot sauce.png", content_type="image/png", data=b"\x89PNG")

        assert upload.filename == "hot sauce.png"
        assert upload.data == b"\x89PNG"
