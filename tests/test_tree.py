"""
Menu tree builder tests

Two-pass build, orphan handling, state classes and current-page matching.
"""

import json

import pytest

from etchnav.lib.tree import (
    currentPage_annotate,
    menuTree_build,
    menuTree_toDicts,
    menuTree_toJSON,
    stateClasses_compute,
    url_matches,
)
from etchnav.models.menu import MenuItem, MenuNode


def menu_make(**flags):
    """Home / About / About > Team, with optional flags per item id"""
    items = [
        MenuItem(id=1, title="Home", url="/"),
        MenuItem(id=2, title="About", url="/about"),
        MenuItem(id=3, title="Team", url="/about/team", parent_id=2),
    ]
    return [
        MenuItem(**{**item.__dict__, **flags.get(f"item{item.id}", {})})
        for item in items
    ]


def ids_collect(forest):
    stack = list(forest)
    ids = []
    while stack:
        node = stack.pop()
        ids.append(node.id)
        stack.extend(node.children)
    return sorted(ids)


class TestBuild:
    """Structure of the built forest"""

    def test_roots_and_children(self):
        """Two roots; About holds Team"""
        forest = menuTree_build(menu_make())

        assert [node.title for node in forest] == ["Home", "About"]
        assert forest[0].children == []
        assert [child.id for child in forest[1].children] == [3]

    def test_empty_input(self):
        assert menuTree_build([]) == []

    def test_orphan_dropped(self):
        """An item whose parent id is unknown disappears without error"""
        items = menu_make() + [MenuItem(id=4, title="Orphan", url="/x", parent_id=999)]
        forest = menuTree_build(items)

        assert ids_collect(forest) == [1, 2, 3]

    def test_child_listed_before_parent(self):
        items = [
            MenuItem(id=3, title="Team", parent_id=2),
            MenuItem(id=2, title="About"),
        ]
        forest = menuTree_build(items)

        assert [node.id for node in forest] == [2]
        assert forest[0].children[0].id == 3

    def test_children_keep_input_order(self):
        items = [
            MenuItem(id=1, title="Parent"),
            MenuItem(id=5, title="B", parent_id=1),
            MenuItem(id=4, title="A", parent_id=1),
            MenuItem(id=6, title="C", parent_id=1),
        ]
        forest = menuTree_build(items)

        assert [child.title for child in forest[0].children] == ["B", "A", "C"]

    def test_from_dict_wordpress_keys(self):
        item = MenuItem.from_dict({
            "ID": "7",
            "title": "Blog",
            "url": "/blog",
            "menu_item_parent": "2",
            "classes": "highlight featured",
            "current": True,
        })

        assert item.id == 7
        assert item.parent_id == 2
        assert item.css_classes == ("highlight", "featured")
        assert item.is_current is True

    def test_from_dict_camel_keys(self):
        item = MenuItem.from_dict({"id": 3, "title": "Team", "parentId": 2, "isCurrentAncestor": True})

        assert item.parent_id == 2
        assert item.is_current_ancestor is True

    @pytest.mark.parametrize("flag, expected", [
        ("false", False), ("0", False), ("", False), ("no", False),
        ("true", True), ("1", True), (" Yes ", True), (1, True), (0, False),
    ])
    def test_from_dict_string_flags(self, flag, expected):
        item = MenuItem.from_dict({"id": 1, "title": "Home", "current": flag, "current_item_ancestor": flag})

        assert item.is_current is expected
        assert item.is_current_ancestor is expected


class TestStateClasses:
    """Annotation pass"""

    def test_plain_tree(self):
        forest = menuTree_build(menu_make())

        assert forest[0].state_classes == ""
        assert forest[1].state_classes == "has-submenu"
        assert forest[1].children[0].state_classes == ""

    def test_current_item_and_parent(self):
        """Host flags: Team is current, About is its ancestor"""
        forest = menuTree_build(menu_make(
            item2={"is_current_ancestor": True},
            item3={"is_current": True},
        ))

        home, about = forest
        team = about.children[0]
        assert team.state_classes == "is-current"
        assert team.link_classes == "current-page"
        assert about.state_classes == "is-current-parent has-submenu"
        assert about.link_classes == ""
        assert home.state_classes == ""

    def test_fixed_order(self):
        node = MenuNode(id=1, title="x", url="", target="", is_current=True, is_current_ancestor=True)
        node.children.append(MenuNode(id=2, title="y", url="", target=""))

        assert stateClasses_compute(node) == "is-current is-current-parent has-submenu"

    def test_deterministic(self):
        first = menuTree_toDicts(menuTree_build(menu_make(item3={"is_current": True})))
        second = menuTree_toDicts(menuTree_build(menu_make(item3={"is_current": True})))

        assert first == second


class TestPreview:
    """Menu preview representation"""

    def test_dict_shape(self):
        data = menuTree_toDicts(menuTree_build(menu_make()))

        about = data[1]
        assert set(about) == {
            "id", "title", "url", "target", "classes", "current",
            "current_parent", "state_classes", "link_classes", "children",
        }
        assert about["children"][0]["title"] == "Team"

    def test_json(self):
        text = menuTree_toJSON(menuTree_build(menu_make()), indent=2)

        assert json.loads(text)[0]["title"] == "Home"
        assert '\n  {' in text


class TestCurrentPage:
    """Current-page flags derived from a URL"""

    def test_exact_ignores_query_fragment_and_slash(self):
        assert url_matches("/about/", "/about?ref=nav#team")
        assert url_matches("https://example.com/about", "https://EXAMPLE.com/about/")

    def test_exact_rejects_descendant(self):
        assert not url_matches("/about", "/about/team")

    def test_prefix_segment_boundary(self):
        assert url_matches("/about", "/about/team", "prefix")
        assert not url_matches("/about", "/aboutus", "prefix")

    def test_root_only_exact(self):
        assert not url_matches("/", "/about", "prefix")
        assert url_matches("/", "/", "prefix")

    def test_hosts_compared_when_both_present(self):
        assert not url_matches("https://a.example/x", "https://b.example/x")
        assert url_matches("/x", "https://b.example/x")

    def test_empty_item_url_never_matches(self):
        assert not url_matches("", "/")

    def test_annotate_marks_item_and_ancestors(self):
        items = currentPage_annotate(menu_make(), "https://example.com/about/team/")
        forest = menuTree_build(items)

        home, about = forest
        assert about.children[0].state_classes == "is-current"
        assert about.state_classes == "is-current-parent has-submenu"
        assert home.state_classes == ""

    def test_annotate_keeps_host_flags(self):
        items = currentPage_annotate(menu_make(item1={"is_current": True}), "/about/team")
        by_id = {item.id: item for item in items}

        assert by_id[1].is_current
        assert by_id[3].is_current
        assert by_id[2].is_current_ancestor

    def test_annotate_without_url(self):
        items = menu_make()
        assert currentPage_annotate(items, None) == tuple(items)

    def test_annotate_survives_cycles(self):
        """Cyclic parent references do not loop forever"""
        items = [
            MenuItem(id=1, title="A", url="/a", parent_id=2),
            MenuItem(id=2, title="B", url="/b", parent_id=1),
        ]
        annotated = currentPage_annotate(items, "/a")

        assert {item.id for item in annotated if item.is_current_ancestor} == {1, 2}
