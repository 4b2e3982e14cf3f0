try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import date

from report_analyzer.services.printing import render_print_document


def test_print_document_wraps_each_line_in_a_paragraph() -> None:
    html = render_print_document(
        "Engagement Rating\n1. High {strong}\n<h3>Impact</h3>",
        generated_on=date(2026, 3, 14),
    )

    assert "<title>Tweet Binder Analysis</title>" in html
    assert "<h1>Engagement and Exposure Analysis</h1>" in html
    assert (
        "<p>Engagement Rating</p><p>1. High {strong}</p><p><h3>Impact</h3></p>" in html
    )
    assert "Generated on 2026-03-14" in html
