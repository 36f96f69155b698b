"""HTML to Markdown converter."""

from bs4 import BeautifulSoup
from markdownify import ATX, MarkdownConverter as _Markdownify

from blog_pipeline.core import HtmlConverter


class MarkdownConverter(HtmlConverter):
    """Convert translated post bodies to Markdown with markdownify."""

    STRIP_TAGS = ("script", "style")

    def __init__(self, heading_style: str = ATX, bullets: str = "-") -> None:
        self._converter = _Markdownify(heading_style=heading_style, bullets=bullets)

    def to_markdown(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(list(self.STRIP_TAGS)):
            tag.decompose()

        markdown = self._converter.convert_soup(soup).strip()
        return f"{markdown}\n" if markdown else ""
