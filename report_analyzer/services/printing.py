"""Static HTML document used for printing an analysis."""

from __future__ import annotations

from datetime import date
from textwrap import dedent

_PRINT_TEMPLATE = dedent(
    """
    <html>
      <head>
        <title>Tweet Binder Analysis</title>
        <style>
          body {{ font-family: Arial, sans-serif; padding: 20px; line-height: 1.6; }}
          h1 {{ color: #00A2F3; }}
          .date {{ color: #666; font-size: 0.9em; margin-top: 20px; }}
        </style>
      </head>
      <body>
        <h1>Engagement and Exposure Analysis</h1>
        {paragraphs}
        <div class="date">Generated on {generated_on}</div>
      </body>
    </html>
    """
).strip()


def render_print_document(analysis: str, generated_on: date | None = None) -> str:
    """Wrap each analysis line in a paragraph inside a printable page.

    The analysis is embedded without escaping; the model may answer with
    simple HTML tags that should render as such.
    """
    generated_on = generated_on or date.today()
    paragraphs = "".join(f"<p>{line}</p>" for line in analysis.split("\n"))
    return _PRINT_TEMPLATE.format(
        paragraphs=paragraphs,
        generated_on=generated_on.isoformat(),
    )


__all__ = ["render_print_document"]
