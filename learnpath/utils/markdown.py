## Planner markdown -> roadmap modules
import re
from typing import List, Optional

from learnpath.agents.schemas import ParsedModule

FALLBACK_LEVEL = "Complete Roadmap"
BULLET = "• "
NESTED_BULLET = "\n  • "

_HEADING = re.compile(r"^#{2,3}\s+(.+)$")
_NUMBERED_ITEM = re.compile(r"^\d+\.\s+")
_BULLET_ITEM = re.compile(r"^[*-]\s+")
_INDENTED = re.compile(r"^\s{2,}\S")


def _strip_list_marker(line: str) -> str:
    line = _NUMBERED_ITEM.sub("", line, count=1)
    return _BULLET_ITEM.sub("", line, count=1).strip()


def parse_roadmap_markdown(markdown: str) -> List[ParsedModule]:
    """
    Split planner markdown into one ParsedModule per ``##``/``###`` heading.

    Numbered and bulleted items are normalised to ``• item``; an indented line
    right after a list item is folded into that item as a nested bullet.
    Blank lines are ignored. A heading with no body is dropped. When no
    heading yields a module, every non-blank line becomes the content of a
    single "Complete Roadmap" module. Never raises.
    """
    modules: List[ParsedModule] = []

    level: Optional[str] = None
    content: List[str] = []
    pending_items: List[str] = []
    in_list = False

    def flush_items() -> None:
        content.extend(pending_items)
        pending_items.clear()

    def finalize() -> None:
        if level is None:
            return
        flush_items()
        if content:
            modules.append(ParsedModule(level=level, content=tuple(content)))

    for raw in markdown.splitlines():
        line = raw.strip()
        if not line:
            continue

        heading = _HEADING.match(line)
        if heading:
            finalize()
            level = heading.group(1).strip()
            content = []
            in_list = False
            continue

        if in_list and pending_items and _INDENTED.match(raw):
            pending_items[-1] = pending_items[-1] + NESTED_BULLET + _strip_list_marker(line)
            continue

        if _NUMBERED_ITEM.match(line) or _BULLET_ITEM.match(line):
            if level is None:
                continue
            pending_items.append(BULLET + _strip_list_marker(line))
            in_list = True
            continue

        if level is not None:
            flush_items()
            in_list = False
            content.append(line)

    finalize()

    if not modules:
        lines = [line for line in markdown.splitlines() if line.strip()]
        if lines:
            return [ParsedModule(level=FALLBACK_LEVEL, content=tuple(lines))]

    return modules


def module_content_markdown(content) -> str:
    """Render parsed content lines back to markdown list/paragraph syntax."""
    blocks = []
    for item in content:
        if item.startswith(BULLET):
            text = "- " + item[len(BULLET):]
            blocks.append(text.replace(NESTED_BULLET, "\n  - "))
        else:
            blocks.append("\n" + item + "\n")
    return "\n".join(blocks).strip() + "\n"
