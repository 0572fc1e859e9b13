"""Contains unit tests for deriving tags from affected projects."""

import pytest

from affected_labeler.synchronize.tags import derive_tags, normalize_project_tag, project_type_tag

from .utils import make_catalog, make_project

ABBREVIATIONS = {"application": "app", "library": "lib"}


def test_all_projects_affected_yields_only_the_sentinel() -> None:
    """When every project is affected only the all-affected tag is returned."""
    catalog = make_catalog(
        make_project("web", "application", ("scope:frontend",)),
        make_project("core", "library", ("scope:shared",)),
    )
    tags = derive_tags(list(catalog.values()), catalog, ABBREVIATIONS, "all-affected")
    assert tags == {"all-affected"}


def test_no_affected_projects_yields_no_tags() -> None:
    """An empty change derives no tags, even for an empty workspace."""
    assert derive_tags([], make_catalog(make_project("core")), ABBREVIATIONS, "all-affected") == set()
    assert derive_tags([], {}, ABBREVIATIONS, "all-affected") == set()


def test_partial_change_combines_declared_and_type_tags() -> None:
    """Declared tags are kept and a type tag is synthesized per affected project."""
    web = make_project("web", "application", ("scope:frontend", "team:growth"))
    core = make_project("core", "library", ("scope:shared",))
    catalog = make_catalog(web, core, make_project("api", "application"))

    tags = derive_tags([web, core], catalog, ABBREVIATIONS, "all-affected")

    assert tags == {"scope:frontend", "team:growth", "app:web", "scope:shared", "lib:core"}


def test_duplicate_inputs_do_not_duplicate_tags() -> None:
    """Projects listed twice and tags shared between projects collapse into one set."""
    web = make_project("web", "application", ("scope:shared", "scope:shared"))
    admin = make_project("admin", "application", ("scope:shared",))
    catalog = make_catalog(web, admin, make_project("core"))

    tags = derive_tags([web, web, admin], catalog, ABBREVIATIONS, "all-affected")

    assert tags == {"scope:shared", "app:web", "app:admin"}


def test_duplicate_affected_entries_do_not_trigger_the_sentinel() -> None:
    """The all-affected check counts distinct projects."""
    web = make_project("web", "application")
    catalog = make_catalog(web, make_project("core"))

    tags = derive_tags([web, web], catalog, ABBREVIATIONS, "all-affected")

    assert tags == {"app:web"}


def test_type_tag_prefixes_come_from_abbreviation_values() -> None:
    """Every synthesized type tag uses a configured abbreviation as its prefix."""
    projects = [make_project(f"p{i}", project_type) for i, project_type in enumerate(["application", "library", "library"])]
    catalog = make_catalog(*projects, make_project("other"))

    tags = derive_tags(projects, catalog, ABBREVIATIONS, "all-affected")

    assert {tag.split(":")[0] for tag in tags} <= set(ABBREVIATIONS.values())


def test_unmapped_project_type_omits_type_tag() -> None:
    """A project type without an abbreviation keeps its declared tags but gets no type tag."""
    tool = make_project("codegen", "tooling", ("scope:internal",))
    catalog = make_catalog(tool, make_project("core"))

    tags = derive_tags([tool], catalog, ABBREVIATIONS, "all-affected")

    assert tags == {"scope:internal"}
    assert not any(tag.startswith("undefined:") or tag.startswith("None:") for tag in tags)


@pytest.mark.parametrize(
    "tag,expected",
    [
        pytest.param("library:core:extra", "library:core", id="known prefix drops extra segments"),
        pytest.param("scope:a:b", "scope:a:b", id="unknown prefix kept verbatim"),
        pytest.param("library", "library", id="known prefix without suffix kept verbatim"),
        pytest.param("standalone", "standalone", id="bare tag kept verbatim"),
    ],
)
def test_normalize_project_tag(tag: str, expected: str) -> None:
    """Test the normalize_project_tag function."""
    assert normalize_project_tag(tag, ABBREVIATIONS) == expected


def test_project_type_tag_without_type() -> None:
    """Projects with no type produce no type tag."""
    assert project_type_tag(make_project("loose", None), ABBREVIATIONS) is None


def test_project_type_tag_uses_project_name() -> None:
    """The type tag is built from the project's name, not its id."""
    project = make_project("libs-core", "library", name="core")
    assert project_type_tag(project, ABBREVIATIONS) == "lib:core"
