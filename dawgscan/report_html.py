"""HTML rendering of a scan report, the same sections and empty states as the popup."""

import html
from typing import List, Optional

from dawgscan.models import ScanReport, TechnologyMatch

STYLE = """
body{margin:0;padding:24px;background:#0a0a0a;color:#e2e8f0;font-family:'Segoe UI',system-ui,sans-serif;}
h1{font-size:24px;margin:0 0 4px;} h1 span{color:#00FF41;}
h3{margin:24px 0 8px;font-size:15px;color:#94a3b8;text-transform:uppercase;letter-spacing:1px;}
.url{color:#64748b;font-size:13px;} .error{color:#ff4444;} .empty{color:#64748b;}
a{color:#00d4ff;text-decoration:none;} ul{margin:0;padding-left:20px;} li{margin:4px 0;}
table{border-collapse:collapse;font-size:13px;} td,th{border:1px solid #2a2a2a;padding:6px 10px;text-align:left;}
.yes{color:#00FF41;} .no{color:#ff4444;}
"""


def _esc(text) -> str:
    return html.escape(str(text))


def _linked(label: str, link: Optional[str]) -> str:
    if link:
        return f'<a href="{_esc(link)}" target="_blank" rel="noopener">{_esc(label)}</a>'
    return _esc(label)


def _flag(value: bool) -> str:
    return '<span class="yes">✓</span>' if value else '<span class="no">✗</span>'


def _tech_list(matches: List[TechnologyMatch], empty: str) -> str:
    if not matches:
        return f'<p class="empty">{_esc(empty)}</p>'
    items = "".join(f"<li>{_linked(m.label, m.link)}</li>" for m in matches)
    return f"<ul>{items}</ul>"


def render_report_html(report: ScanReport) -> str:
    config = report.config
    sections = []

    if config.protocol:
        sections.append(f"<h3>Protocol Used</h3><p><strong>{_esc(report.protocol or '')}</strong></p>")

    if report.error:
        sections.append(f'<p class="error">{_esc(report.error.message)}</p>')

    if config.headers:
        if report.missing_headers:
            items = "".join(f"<li>{_linked(h.name, h.link)}</li>" for h in report.missing_headers)
            body = f"<ul>{items}</ul>"
        else:
            body = '<p class="empty">No missing security headers.</p>'
        sections.append(f"<h3>Missing Security Headers</h3>{body}")

    if config.server:
        if report.server:
            items = "".join(
                f"<li>{_esc(f.key)}: {_linked(f.value, f.link)}</li>" for f in report.server
            )
            body = f"<ul>{items}</ul>"
        else:
            body = '<p class="empty">No server information disclosed.</p>'
        sections.append(f"<h3>Server</h3>{body}")

    if config.technologies:
        sections.append(
            f"<h3>Detected Technologies</h3>{_tech_list(report.technologies, 'No technologies detected.')}"
        )

    if config.libraries:
        sections.append(
            f"<h3>Detected Libraries</h3>{_tech_list(report.libraries, 'No libraries detected.')}"
        )

    if config.cookies:
        if report.cookies:
            rows = "".join(
                f"<tr><td>{_esc(c.name)}</td><td>{_flag(c.secure)}</td>"
                f"<td>{_flag(c.http_only)}</td><td>{_esc(c.same_site or '-')}</td></tr>"
                for c in report.cookies
            )
            body = f"<table><tr><th>Name</th><th>Secure</th><th>HttpOnly</th><th>SameSite</th></tr>{rows}</table>"
        else:
            body = '<p class="empty">No cookies found.</p>'
        sections.append(f"<h3>Cookies</h3>{body}")

    content = "\n".join(sections)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>DAWG SCAN - {_esc(report.url)}</title>
<style>{STYLE}</style>
</head>
<body>
<h1>DAWG <span>SCAN</span></h1>
<div class="url">{_esc(report.url)} · {report.scan_time_seconds}s</div>
{content}
</body>
</html>"""
