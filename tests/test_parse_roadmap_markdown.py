from learnpath.utils.markdown import (
    FALLBACK_LEVEL,
    module_content_markdown,
    parse_roadmap_markdown,
)


def test_one_module_per_heading_with_bullets_in_order():
    md = "## Beginner\n- Learn X\n- Learn Z\n### Advanced\n* Learn Y\n"
    modules = parse_roadmap_markdown(md)

    assert [m.level for m in modules] == ["Beginner", "Advanced"]
    assert modules[0].content == ("• Learn X", "• Learn Z")
    assert modules[1].content == ("• Learn Y",)
    assert modules[0].context == ()


def test_numbered_items_get_canonical_bullet():
    modules = parse_roadmap_markdown("## Basics\n1. Install\n12. Configure\n")
    assert modules[0].content == ("• Install", "• Configure")


def test_fallback_without_headings():
    modules = parse_roadmap_markdown("just one line\nand another")

    assert len(modules) == 1
    assert modules[0].level == FALLBACK_LEVEL == "Complete Roadmap"
    assert modules[0].content == ("just one line", "and another")


def test_fallback_keeps_every_non_blank_line_verbatim():
    md = "# Title\n\n- item\n   indented text\n"
    modules = parse_roadmap_markdown(md)
    assert modules[0].content == ("# Title", "- item", "   indented text")


def test_fallback_preserves_leading_indentation():
    modules = parse_roadmap_markdown("  indented\n# Title")
    assert modules[0].content == ("  indented", "# Title")


def test_empty_input_yields_no_modules():
    assert parse_roadmap_markdown("") == []
    assert parse_roadmap_markdown("\n   \n\t\n") == []


def test_heading_without_body_is_dropped():
    modules = parse_roadmap_markdown("## Empty\n## Filled\n- thing\n")
    assert [m.level for m in modules] == ["Filled"]


def test_only_empty_headings_fall_back_to_single_module():
    modules = parse_roadmap_markdown("## One\n## Two\n")
    assert len(modules) == 1
    assert modules[0].level == FALLBACK_LEVEL
    assert modules[0].content == ("## One", "## Two")


def test_level_one_and_level_four_headings_are_not_modules():
    md = "# Roadmap\n## Routing\n#### Details\n- Paths\n"
    modules = parse_roadmap_markdown(md)

    assert [m.level for m in modules] == ["Routing"]
    assert modules[0].content == ("#### Details", "• Paths")


def test_lines_before_first_heading_are_ignored():
    modules = parse_roadmap_markdown("Intro text\n- stray item\n## Beginner\n- Learn X\n")
    assert len(modules) == 1
    assert modules[0].content == ("• Learn X",)


def test_indented_line_after_item_becomes_nested_bullet():
    md = "## Beginner\n- Learn X\n  - detail one\n    detail two\n- Learn Y\n"
    modules = parse_roadmap_markdown(md)

    assert modules[0].content == (
        "• Learn X\n  • detail one\n  • detail two",
        "• Learn Y",
    )


def test_indented_line_without_preceding_item_is_plain_content():
    modules = parse_roadmap_markdown("## Beginner\n   Read the docs\n")
    assert modules[0].content == ("Read the docs",)


def test_pending_items_flush_before_plain_line():
    md = "## Beginner\nOverview first\n- a\n- b\nClosing note\n  not nested\n"
    modules = parse_roadmap_markdown(md)

    assert modules[0].content == (
        "Overview first",
        "• a",
        "• b",
        "Closing note",
        "not nested",
    )


def test_blank_lines_do_not_change_output():
    compact = "## Beginner\n- Learn X\n  sub point\nText\n## Advanced\n1. Learn Y\n"
    spaced = "\n\n## Beginner\n\n- Learn X\n\n  sub point\n\n\nText\n## Advanced\n\n1. Learn Y\n\n"
    assert parse_roadmap_markdown(compact) == parse_roadmap_markdown(spaced)


def test_windows_line_endings():
    modules = parse_roadmap_markdown("## Beginner\r\n- Learn X\r\n")
    assert modules[0].content == ("• Learn X",)


def test_bold_text_is_not_a_bullet():
    modules = parse_roadmap_markdown("## Beginner\n**Goal**: learn\n")
    assert modules[0].content == ("**Goal**: learn",)


def test_module_content_markdown_renders_list_syntax():
    text = module_content_markdown(("Intro", "• Learn X\n  • detail", "• Learn Y"))
    assert text == "Intro\n\n- Learn X\n  - detail\n- Learn Y\n"
