from __future__ import annotations

from pathlib import Path

from exporters.html_exporter import HTML_COLUMNS, HtmlReportEmitter, render_html_report
from managers.container_manager import ContainerManager

EXPORT = {
    "containerVersion": {
        "accountId": "123",
        "containerId": "456",
        "container": {"publicId": "GTM-HTML"},
        "tag": [
            {
                "tagId": "1",
                "name": "Meta <Purchase> & more",
                "type": "html",
                "firingTriggerId": ["5"],
                "blockingTriggerId": ["6"],
                "parameter": [{"key": "html", "value": "{{DL - order_id}}"}],
            },
            {"name": "No id tag", "type": "gaawe", "paused": True},
        ],
        "trigger": [
            {"triggerId": "5", "name": "Purchase"},
            {"triggerId": "6", "name": "Staff & QA"},
        ],
    }
}


def _report():
    return ContainerManager().build_report(EXPORT, "GTM-HTML_workspace3.json")


def test_render_html_report_has_header_and_rows() -> None:
    html = render_html_report(_report())

    assert html.startswith("<!DOCTYPE html>")
    assert '<table border="1">' in html
    for column in HTML_COLUMNS:
        assert f"<th>{column}</th>" in html
    assert html.count("<tr>") == 3
    assert html.rstrip().endswith("</table></body></html>")


def test_render_html_report_titles_page_with_public_id() -> None:
    html = render_html_report(_report())

    assert "<title>Tags Table - GTM-HTML</title>" in html
    assert "<h1>GTM-HTML</h1>" in html


def test_render_html_report_links_and_escapes_tag_names() -> None:
    html = render_html_report(_report())

    expected_link = (
        '<a href="https://tagmanager.google.com/#/container/accounts/123/containers/456'
        '/workspaces/3/tags/1" target="_blank">Meta &lt;Purchase&gt; &amp; more</a>'
    )
    assert expected_link in html
    assert "<td>No id tag</td>" in html


def test_render_html_report_formats_exceptions() -> None:
    html = render_html_report(_report())
    assert "<td>Purchase<br><strong>Exceptions:</strong><br>Staff &amp; QA</td>" in html


def test_render_html_report_row_values() -> None:
    html = render_html_report(_report())
    first_row = html.split("<tr>")[2]
    cells = [c.split("</td>")[0] for c in first_row.split("<td>")[1:]]

    assert len(cells) == len(HTML_COLUMNS)
    assert cells[1] == "Custom HTML"
    assert cells[4] == "a year ago"
    assert cells[5] == "Active"
    assert cells[6] == "Meta"
    assert cells[7] == "dual"
    assert cells[10] == "TRUE"
    assert cells[11] == "TRUE"
    assert cells[12] == "TRUE"
    assert cells[13] == "FALSE"


def test_html_emitter_writes_file_per_container(tmp_path: Path) -> None:
    emitter = HtmlReportEmitter(tmp_path / "out")
    emitter.write(_report())
    written = emitter.close()

    output_file = tmp_path / "out" / "GTM-HTML.html"
    assert written == [output_file]
    assert output_file.read_text(encoding="utf-8") == render_html_report(_report())
