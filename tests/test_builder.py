import textwrap

import pytest

from swiftui_tree.builder import (
    SwiftUIParseError, ViewTreeBuilder, build_tree, extract_declarations, list_root_candidates,
)
from swiftui_tree.model import NodeKind
from swiftui_tree.settings import RECURSION_MARKER


def _views(src):
    return extract_declarations(textwrap.dedent(src))


def _markers(tree):
    return [n for n in tree.walk() if RECURSION_MARKER in n.modifiers]


def test_root_candidates_prefer_entry_point_names():
    names = {"HeaderView": "", "ContentView": "", "TitleView": ""}
    assert list_root_candidates(names) == ["ContentView", "HeaderView", "TitleView"]


def test_root_candidates_group_is_case_insensitive_and_sorted():
    names = {"Zebra": "", "MyApp": "", "mainScreen": "", "Alpha": "", "RootView": ""}
    assert list_root_candidates(names) == ["MyApp", "RootView", "mainScreen", "Alpha", "Zebra"]


def test_root_candidates_empty():
    assert list_root_candidates({}) == []


def test_unknown_root_returns_none():
    assert build_tree({"ContentView": "Text(\"a\")"}, "Missing") is None


def test_blank_body_returns_none():
    assert build_tree({"Empty": "   \n  "}, "Empty") is None


def test_single_text_body():
    views = _views(
        """
        struct Hello: View {
            var body: some View {
                Text("Hello")
            }
        }
        """
    )
    tree = build_tree(views, "Hello")
    assert tree.name == "Text"
    assert tree.props == ['"Hello"']
    assert tree.modifiers == []
    assert tree.children == []


def test_several_top_level_views_are_wrapped_in_group():
    tree = build_tree({"Pair": 'Text("a")\nText("b")'}, "Pair")
    assert tree.name == "Group"
    assert tree.kind is NodeKind.CONTAINER
    assert [c.props for c in tree.children] == [['"a"'], ['"b"']]


def test_custom_views_are_inlined():
    views = _views(
        """
        struct ContentView: View {
            var body: some View {
                VStack {
                    TitleView()
                }
            }
        }

        struct TitleView: View {
            var body: some View {
                Text("Title")
                    .font(.largeTitle)
            }
        }
        """
    )
    tree = build_tree(views, "ContentView")
    title = tree.children[0]
    assert title.kind is NodeKind.CUSTOM_VIEW
    assert title.name == "TitleView"
    assert [c.name for c in title.children] == ["Text"]
    assert title.children[0].modifiers == ["font(.largeTitle)"]


def test_self_reference_terminates_with_one_marker():
    views = _views(
        """
        struct Loop: View {
            var body: some View {
                VStack {
                    Text("x")
                    Loop()
                }
            }
        }
        """
    )
    tree = build_tree(views, "Loop")
    markers = _markers(tree)
    assert len(markers) == 1
    assert markers[0].name == "Loop"
    assert markers[0].kind is NodeKind.VIEW
    assert markers[0].children == []
    # marked right inside the root body, not after one more inlined copy
    assert tree.children[1] is markers[0]


def test_mutual_recursion_is_cut_on_the_path():
    views = _views(
        """
        struct Ping: View {
            var body: some View {
                Pong()
            }
        }

        struct Pong: View {
            var body: some View {
                VStack {
                    Ping()
                }
            }
        }
        """
    )
    tree = build_tree(views, "Ping")
    assert tree.name == "Pong"
    assert tree.kind is NodeKind.CUSTOM_VIEW
    markers = _markers(tree)
    assert [m.name for m in markers] == ["Ping"]


def test_same_view_in_sibling_branches_is_inlined_twice():
    views = _views(
        """
        struct ContentView: View {
            var body: some View {
                VStack {
                    Badge()
                    HStack {
                        Badge()
                    }
                }
            }
        }

        struct Badge: View {
            var body: some View {
                Text("new")
            }
        }
        """
    )
    tree = build_tree(views, "ContentView")
    badges = [n for n in tree.walk() if n.name == "Badge"]
    assert len(badges) == 2
    assert all(b.kind is NodeKind.CUSTOM_VIEW for b in badges)
    assert all([c.name for c in b.children] == ["Text"] for b in badges)
    assert _markers(tree) == []


def test_reserved_names_are_never_inlined():
    tree = build_tree({"Main": "Grid()", "Grid": 'Text("x")'}, "Main")
    assert tree.name == "Grid"
    assert tree.kind is NodeKind.CONTAINER
    assert tree.children == []


def test_sample_file_tree(content_view_source):
    views = extract_declarations(content_view_source)
    assert list_root_candidates(views)[0] == "ContentView"
    tree = ViewTreeBuilder().build(views, "ContentView")
    assert tree.name == "NavigationStack"
    lst = tree.children[0]
    assert lst.name == "List"
    assert lst.modifiers == ['navigationTitle("Items")', "toolbar"]
    assert [c.kind for c in lst.children] == [NodeKind.CUSTOM_VIEW, NodeKind.FOR_EACH, NodeKind.IF]

    header = lst.children[0]
    assert header.children[0].props == ['"Header"']

    row = tree.find("RowView")
    assert row.kind is NodeKind.CUSTOM_VIEW
    assert row.props == ["title: item"]
    assert row.children[0].name == "HStack"

    cond = lst.children[2]
    assert cond.name == "if showDetails"
    assert cond.children[1].children[0].name == "if items.isEmpty"


def test_unexpected_faults_surface_as_parse_error():
    with pytest.raises(SwiftUIParseError):
        build_tree(None, "ContentView")
    with pytest.raises(SwiftUIParseError):
        extract_declarations(None)
