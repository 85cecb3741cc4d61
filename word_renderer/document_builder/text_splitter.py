"""Text Run Splitter Module

Turns text requests into the inline runs of a paragraph, preserving embedded
line breaks and wrapping linked text as hyperlinks.
"""
from typing import Iterable, List

from ..document_model import ContentText, Hyperlink, Inline, LineBreak, TextRun


class TextRunSplitter:
    """Split text into runs and explicit line-break markers.

    A segment with a link target becomes a Hyperlink and carries no bold
    styling; otherwise it becomes a TextRun with the bold flag applied.
    """

    LINE_BREAK = "\n"

    def split(self, text: str, bold: bool = False, link_target: str = "") -> List[Inline]:
        """
        Split text at every line break into runs.

        Args:
            text: Text that may contain '\\n' characters
            bold: Bold flag for plain runs (ignored when link_target is set)
            link_target: Hyperlink target; empty string means no link

        Returns:
            Runs interleaved with LineBreak markers, never ending with one

        Example:
            >>> TextRunSplitter().split("Bold text\\nSecond line", bold=True)
            [TextRun(text='Bold text', bold=True), LineBreak(), TextRun(text='Second line', bold=True)]
        """
        segments = text.split(self.LINE_BREAK)
        last_index = len(segments) - 1

        inlines: List[Inline] = []
        for i, segment in enumerate(segments):
            if link_target:
                inlines.append(Hyperlink(target=link_target, text=segment))
            else:
                inlines.append(TextRun(text=segment, bold=bold))
            if i != last_index:
                inlines.append(LineBreak())
        return inlines

    def split_contents(self, contents: Iterable[ContentText]) -> List[Inline]:
        """Split each ContentText in order and concatenate the results."""
        inlines: List[Inline] = []
        for content in contents:
            inlines.extend(self.split(content.text, content.bold, content.link_target))
        return inlines
