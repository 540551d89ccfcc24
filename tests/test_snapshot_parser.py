from pathlib import Path

from inspectlocator.selection import iter_nodes
from inspectlocator.snapshot_parser import parse_snapshot

PAGE_SOURCE = """<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>
<hierarchy index="0" class="hierarchy" rotation="0" width="1080" height="2280">
  <!-- dumped by uiautomator -->
  <android.widget.FrameLayout index="0" package="io.appium.android.apis" class="android.widget.FrameLayout">
    <android.widget.TextView index="0" text="Accessibility" resource-id="android:id/text1" />
    <android.widget.TextView index="1" text="Animation" content-desc="Animation" />
  </android.widget.FrameLayout>
</hierarchy>
"""


def test_parse_snapshot_builds_tree_with_parents() -> None:
    root = parse_snapshot(PAGE_SOURCE)

    assert root is not None
    assert root.tag == "hierarchy"
    frame = root.children[0]
    assert frame.tag == "android.widget.FrameLayout"
    assert frame.parent is root
    assert [child.attr("text") for child in frame.children] == ["Accessibility", "Animation"]
    assert all(child.parent is frame for child in frame.children)


def test_parse_snapshot_skips_comments_and_keeps_attribute_order() -> None:
    root = parse_snapshot(PAGE_SOURCE)

    assert root is not None
    assert len(root.children) == 1
    assert list(root.attributes) == ["index", "class", "rotation", "width", "height"]


def test_missing_attribute_reads_as_empty_string() -> None:
    root = parse_snapshot(PAGE_SOURCE)

    assert root is not None
    text_view = root.children[0].children[0]
    assert text_view.attr("content-desc") == ""
    assert text_view.content_desc == ""


def test_parse_snapshot_accepts_bytes() -> None:
    root = parse_snapshot(PAGE_SOURCE.encode("utf-8"))
    assert root is not None
    assert len(list(iter_nodes(root))) == 4


def test_parse_snapshot_returns_none_for_empty_or_malformed_input() -> None:
    assert parse_snapshot(None) is None
    assert parse_snapshot("") is None
    assert parse_snapshot("   \n ") is None
    assert parse_snapshot("<hierarchy><node></hierarchy>") is None
    assert parse_snapshot("not xml at all") is None


def test_parse_snapshot_does_not_expand_external_entities(tmp_path: Path) -> None:
    secret = tmp_path / "secret.txt"
    secret.write_text("top-secret", encoding="utf-8")
    markup = (
        '<?xml version="1.0"?>\n'
        f'<!DOCTYPE hierarchy [<!ENTITY leak SYSTEM "file://{secret.as_posix()}">]>\n'
        '<hierarchy><node text="&leak;" /></hierarchy>'
    )

    root = parse_snapshot(markup)

    if root is not None:
        for node in iter_nodes(root):
            assert "top-secret" not in node.attr("text")


def test_parse_snapshot_reduces_namespaced_names() -> None:
    markup = '<ui:root xmlns:ui="urn:ui"><ui:item ui:text="Save" /></ui:root>'

    root = parse_snapshot(markup)

    assert root is not None
    assert root.tag == "root"
    assert root.children[0].tag == "item"
    assert root.children[0].attr("text") == "Save"
