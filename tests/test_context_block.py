from inspectlocator.context_block import (
    MAX_LINE_LENGTH,
    context_root,
    find_container,
    is_container,
    render_context_block,
    truncate,
)
from inspectlocator.models import UiNode


def _screen() -> tuple[UiNode, UiNode, UiNode]:
    root = UiNode(tag="hierarchy")
    recycler = root.append(UiNode(tag="androidx.recyclerview.widget.RecyclerView"))
    row = recycler.append(UiNode(tag="android.widget.TextView", attributes={"text": "Accessibility"}))
    recycler.append(
        UiNode(
            tag="android.widget.TextView",
            attributes={"text": "Animation", "resource-id": "android:id/text1", "content-desc": "Anim"},
        )
    )
    return root, recycler, row


def test_container_detection_by_tag_keyword() -> None:
    assert is_container(UiNode(tag="android.widget.LinearLayout"))
    assert is_container(UiNode(tag="android.view.ViewGroup"))
    assert is_container(UiNode(tag="android.widget.ScrollView"))
    assert is_container(UiNode(tag="androidx.viewpager.widget.ViewPager"))
    assert not is_container(UiNode(tag="android.widget.TextView"))
    assert not is_container(UiNode(tag="hierarchy"))


def test_find_container_walks_to_nearest_container_ancestor() -> None:
    _root, recycler, row = _screen()

    assert find_container(row) is recycler
    assert context_root(row) is recycler


def test_node_is_its_own_context_when_no_container_exists() -> None:
    root = UiNode(tag="hierarchy")
    button = root.append(UiNode(tag="android.widget.Button", attributes={"text": "OK"}))

    assert find_container(button) is None
    assert context_root(button) is button


def test_find_container_ignores_the_node_itself() -> None:
    root = UiNode(tag="hierarchy")
    layout = root.append(UiNode(tag="android.widget.FrameLayout"))

    assert find_container(layout) is None


def test_render_context_block_layout() -> None:
    _root, recycler, _row = _screen()

    block = render_context_block(recycler)

    assert block.split("\n") == [
        "<RecyclerView>",
        '  <TextView text="Accessibility"/>',
        '  <TextView text="Animation" resource-id="text1" content-desc="Anim"/>',
        "</RecyclerView>",
    ]


def test_render_context_block_bounds_depth() -> None:
    root = UiNode(tag="android.widget.LinearLayout")
    current = root
    for _ in range(6):
        current = current.append(UiNode(tag="android.widget.LinearLayout"))

    lines = render_context_block(root, max_depth=1).split("\n")

    assert lines == [
        "<LinearLayout>",
        "  <LinearLayout>",
        "    ...",
        "  </LinearLayout>",
        "</LinearLayout>",
    ]


def test_render_context_block_truncates_long_values_and_lines() -> None:
    node = UiNode(
        tag="android.widget.TextView",
        attributes={
            "text": "x" * 60,
            "resource-id": "com.example.app:id/" + "a" * 60,
            "content-desc": "line one\n  line two",
        },
    )

    line = render_context_block(node)

    assert 'text="' + "x" * 32 + '..."' in line
    assert len(line) <= MAX_LINE_LENGTH
    assert line.endswith("...")
    assert "\n" not in line


def test_render_context_block_is_pure() -> None:
    _root, recycler, _row = _screen()
    assert render_context_block(recycler) == render_context_block(recycler)


def test_truncate() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("abcdefghij", 10) == "abcdefghij"
    assert truncate("abcdefghijk", 10) == "abcdefg..."


def test_long_resource_id_is_truncated_before_namespace_is_dropped() -> None:
    short_package = UiNode(tag="android.widget.TextView", attributes={"resource-id": "com.example.app:id/" + "a" * 40})
    long_package = UiNode(
        tag="android.widget.TextView",
        attributes={"resource-id": "com.example.some.very.long.package:id/title"},
    )

    assert render_context_block(short_package) == '<TextView resource-id="' + "a" * 13 + '..."/>'
    assert render_context_block(long_package) == '<TextView resource-id="com.example.some.very.long.packa..."/>'
