"""Markdown helpers for rendering coach answers in chat bubbles."""

import re


def clean_response(text: str) -> str:
    """Tidy a completed streamed answer before it is rendered.

    Collapses whitespace and immediately repeated words, normalizes headings
    to ``###`` and bullets to ``-``, and squashes stacked bold markers.
    """
    t = str(text or "")
    t = re.sub(r"[\r\t]", " ", t)
    t = re.sub(r" +", " ", t)
    t = re.sub(r"\n{3,}", "\n\n", t)
    t = re.sub(r"\b(\w+)(\s+\1\b)+", r"\1", t, flags=re.IGNORECASE)
    t = re.sub(r"^\s*#{1,6}\s+", "### ", t, flags=re.MULTILINE)
    t = re.sub(r"^\s*[•*+]\s+", "- ", t, flags=re.MULTILINE)
    t = re.sub(r"\*{3,}", "**", t)
    t = re.sub(r"(\*\*)\s*(\*\*)+", "**", t)
    return t.strip()


def _wrap_lists(text: str, marker: str, tag: str, classes: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(f'<{tag} class="{classes}">')
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert coach markdown to HTML for chat display.

    Supports: ### headings, bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(
        r"^#{1,6}\s+(.+)$",
        r'<div class="font-semibold mt-2">\1</div>',
        text,
        flags=re.MULTILINE,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Bullets are matched before italics so "- *x*" keeps its marker
    text = _wrap_lists(text, r"^[-*]\s+", "ul", "list-disc list-inside my-2 space-y-1")
    text = _wrap_lists(text, r"^\d+\.\s+", "ol", "list-decimal list-inside my-2 space-y-1")

    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    text = re.sub(
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    # Line breaks, except right around block elements
    text = re.sub(r"\n?(</?(?:ul|ol|li|div|pre)[^>]*>)\n?", r"\1", text)
    return text.replace("\n", "<br>")
