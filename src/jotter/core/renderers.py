"""Content renderers: one pure function per record kind.

Every renderer except raw HTML collapses whitespace runs to a single space,
trims the result and escapes the five HTML metacharacters exactly once.
Feeding rendered output back in escapes it again; that is expected.
"""

from collections.abc import Callable

from jotter.core.types import Record, RecordKind

IMAGE_ALT = "no description available"

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&apos;",
    }
)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and trim."""
    return " ".join(text.split())


def escape_html(text: str) -> str:
    return text.translate(_ESCAPES)


def _clean(text: str) -> str:
    return escape_html(collapse_whitespace(text))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_link_fields(content: str) -> dict[str, str]:
    """
    Parse a link record's ``KEY=value`` lines.

    Blank lines, ``#`` comments and lines without ``=`` are skipped. Values
    may be wrapped in one pair of matching quotes. A repeated key keeps its
    last value.

    Args:
        content: Raw link file content

    Returns:
        Mapping of key to value
    """
    fields: dict[str, str] = {}
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        if not sep:
            continue
        fields[key.strip()] = _unquote(value.strip())
    return fields


def render_heading(content: str) -> str:
    text = _clean(content)
    if not text:
        return ""
    return f"<h1>{text}</h1>"


def render_item(content: str) -> str:
    text = _clean(content)
    if not text:
        return ""
    return f"<li>{text}</li>"


def render_link(content: str) -> str:
    """Render a link record; a missing TEXT gives an empty fragment."""
    fields = parse_link_fields(content)
    text = _clean(fields.get("TEXT", ""))
    if not text:
        return ""
    href = escape_html(fields.get("HREF", "").strip())
    return f'<li><a href="{href}" target="_blank">{text}</a></li>'


def render_image(path: str) -> str:
    return f'<p><img src="{path}" alt="{IMAGE_ALT}" /></p>'


def render_raw_html(content: str) -> str:
    return content


_TEXT_RENDERERS: dict[RecordKind, Callable[[str], str]] = {
    RecordKind.HEADING: render_heading,
    RecordKind.ITEM: render_item,
    RecordKind.LINK: render_link,
    RecordKind.RAW_HTML: render_raw_html,
}


def render_record(record: Record, image_src: str | None = None) -> str:
    """
    Dispatch a record to the renderer for its kind.

    Args:
        record: Record with content loaded (images excepted)
        image_src: Path written into an image's ``src``; defaults to the
            record's basename

    Returns:
        HTML fragment, possibly empty
    """
    if record.kind is RecordKind.IMAGE:
        return render_image(image_src or record.basename)

    return _TEXT_RENDERERS[record.kind](record.content or "")
