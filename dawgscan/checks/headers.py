"""Security header compliance: which required headers the response lacks."""

from typing import List, Optional, Sequence

from dawgscan.models import HeaderFinding, HeaderSet
from dawgscan.signatures import HEADER_LINKS, REQUIRED_HEADERS


def check_missing(received: Optional[HeaderSet], required: Sequence[str] = REQUIRED_HEADERS) -> List[str]:
    """Return the ``required`` names absent from ``received``, in catalog order.

    Only the header name counts, compared case-insensitively; an empty or
    missing header set reports every required header.
    """
    present = {name.lower() for name, _ in (received or ())}
    return [header for header in required if header.lower() not in present]


async def run_all(received: Optional[HeaderSet]) -> List[HeaderFinding]:
    return [HeaderFinding(name=name, link=HEADER_LINKS.get(name)) for name in check_missing(received)]
