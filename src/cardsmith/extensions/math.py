"""Markdown extension typesetting ``$...$`` and ``$$...$$`` math."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree

from markdown import Markdown
from markdown.blockprocessors import BlockProcessor
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor

from ..content.nodes import MathBlock, MathInline, serialize
from ..typesetting import MathTypesetter


_INLINE_MATH_PATTERN = r"(?<![\\$])(\${1,2})(?!\$)(.+?)(?<![\\$])\1(?!\$)"
_DISPLAY_DELIMITER = "$$"

INLINE_CLASS = "math math-inline"
DISPLAY_CLASS = "math math-display"


def _active_typesetter(md: Markdown, default: MathTypesetter) -> MathTypesetter:
    typesetter = getattr(md, "cardsmith_typesetter", None)
    return typesetter if isinstance(typesetter, MathTypesetter) else default


class _InlineMathProcessor(InlineProcessor):
    """Replace inline math spans with typeset, stashed markup."""

    def __init__(self, pattern: str, md: Markdown, typesetter: MathTypesetter) -> None:
        super().__init__(pattern, md)
        self._typesetter = typesetter

    def handleMatch(  # type: ignore[override]  # noqa: N802 - Markdown API requires camelCase
        self,
        match,  # type: ignore[override]  # noqa: ANN001
        data: str,
    ) -> tuple[str | None, int | None, int | None]:
        latex = match.group(2).strip()
        if not latex:
            return None, None, None

        typesetter = _active_typesetter(self.md, self._typesetter)
        unit = MathInline(latex=latex, attrs={"class": INLINE_CLASS})
        markup = serialize(unit, math=typesetter.render_unit_markup)
        return self.md.htmlStash.store(markup), match.start(0), match.end(0)


class _DisplayMathBlockProcessor(BlockProcessor):
    """Typeset paragraphs delimited by ``$$`` as display math."""

    def __init__(self, parser, typesetter: MathTypesetter) -> None:  # noqa: ANN001
        super().__init__(parser)
        self._typesetter = typesetter

    def test(self, parent: ElementTree.Element, block: str) -> bool:
        return block.lstrip().startswith(_DISPLAY_DELIMITER)

    def run(self, parent: ElementTree.Element, blocks: list[str]) -> bool:
        collected: list[str] = []
        for index, block in enumerate(blocks):
            collected.append(block)
            text = "\n\n".join(collected).strip()
            if len(text) > 2 * len(_DISPLAY_DELIMITER) and text.endswith(_DISPLAY_DELIMITER):
                break
        else:
            return False

        latex = text[len(_DISPLAY_DELIMITER) : -len(_DISPLAY_DELIMITER)]
        if _DISPLAY_DELIMITER in latex or not latex.strip():
            return False

        del blocks[: index + 1]
        md = self.parser.md
        typesetter = _active_typesetter(md, self._typesetter)
        unit = MathBlock(latex=latex.strip(), attrs={"class": DISPLAY_CLASS})
        markup = serialize(unit, math=typesetter.render_unit_markup)
        paragraph = ElementTree.SubElement(parent, "p")
        paragraph.text = md.htmlStash.store(markup)
        return True


class MathExtension(Extension):
    """Register inline and display math processors."""

    def __init__(self, **kwargs: object) -> None:
        self.config = {
            "typesetter": [None, "MathTypesetter used when none is attached to the processor"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802
        typesetter = self.getConfig("typesetter") or MathTypesetter()
        if "$" not in md.ESCAPED_CHARS:
            md.ESCAPED_CHARS.append("$")
        # Above escapes (180), below code spans (190).
        md.inlinePatterns.register(
            _InlineMathProcessor(_INLINE_MATH_PATTERN, md, typesetter),
            "cardsmith_math_inline",
            185,
        )
        md.parser.blockprocessors.register(
            _DisplayMathBlockProcessor(md.parser, typesetter),
            "cardsmith_math_display",
            75,
        )


def makeExtension(**kwargs: object) -> MathExtension:  # pragma: no cover - Markdown hook  # noqa: N802
    return MathExtension(**kwargs)


__all__ = ["DISPLAY_CLASS", "INLINE_CLASS", "MathExtension", "makeExtension"]
