import pytest

from vsm.sections.registry import (
    NOT_FOUND,
    REGISTRY,
    SectionKind,
    available_sections,
    resolve,
    resolve_slug,
)


KNOWN = [
    "HeroSection",
    "CountdownTimer",
    "AboutSection",
    "AboutFeatures",
    "Stats",
    "SportsCommunityStory",
    "EventsSection",
    "NewsSection",
    "TeamSection",
    "GallerySection",
    "CTASection",
]


@pytest.mark.parametrize("name", KNOWN)
def test_resolve_known_components(name):
    component = resolve(name)
    assert component.found
    assert component.kind.value == name
    assert component.template.startswith("sections/")


@pytest.mark.parametrize("name", ["UnknownWidget", "", None, "herosection"])
def test_resolve_unknown_returns_sentinel(name):
    assert resolve(name) is NOT_FOUND
    assert not NOT_FOUND.found


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        REGISTRY[SectionKind.HERO] = NOT_FOUND


def test_catalog_lists_every_kind_once():
    catalog = available_sections()
    assert [c.kind.value for c in catalog] == KNOWN
    assert len({c.slug for c in catalog}) == len(catalog)


def test_hero_is_the_only_hero_type():
    types = {c.kind: c.default_type for c in available_sections()}
    assert types.pop(SectionKind.HERO) == "hero"
    assert set(types.values()) == {"content"}


def test_resolve_slug():
    assert resolve_slug("countdown").kind is SectionKind.COUNTDOWN
    assert resolve_slug("nope") is NOT_FOUND


def test_defaults_are_camel_case():
    defaults = resolve("NewsSection").defaults()
    assert defaults["postsPerRow"] == 3
    assert "posts_per_row" not in defaults

    assert resolve("CountdownTimer").defaults()["eventDate"] == "2025-12-28T04:30:00"
    assert NOT_FOUND.defaults() == {}
