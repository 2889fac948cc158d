"""Server stack disclosure: Server, X-Powered-By and X-Generator headers."""

from typing import Dict, List, Sequence, Tuple
from urllib.parse import quote_plus

from dawgscan.models import HeaderSet, ServerFinding
from dawgscan.signatures import SEARCH_URL, SERVER_KEYWORDS

STACK_HEADERS: Dict[str, str] = {
    "server": "Server",
    "x-powered-by": "X-Powered-By",
    "x-generator": "Generator",
}


def classify_server(received: HeaderSet) -> List[ServerFinding]:
    """One finding per stack-revealing header, repeats included, in response order."""
    findings = []
    for name, value in received:
        key = STACK_HEADERS.get(name.lower())
        if key:
            findings.append(ServerFinding(key=key, value=value))
    return findings


def resolve_link(finding: ServerFinding, keywords: Sequence[Tuple[str, str]] = SERVER_KEYWORDS) -> str:
    """Documentation URL for the first keyword found in the value, else a web search."""
    lowered = finding.value.lower()
    for keyword, url in keywords:
        if keyword in lowered:
            return url
    return SEARCH_URL.format(query=quote_plus(finding.value))


async def run_all(received: HeaderSet) -> List[ServerFinding]:
    return [
        finding.model_copy(update={"link": resolve_link(finding)})
        for finding in classify_server(received)
    ]
