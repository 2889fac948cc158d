"""Evidence and report models shared by the classifiers, the aggregator and the API."""

from typing import Dict, FrozenSet, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Ordered (name, value) pairs exactly as received on one response.
HeaderSet = Sequence[Tuple[str, str]]

ServerKey = Literal["Server", "X-Powered-By", "Generator"]


class ServerFinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: ServerKey
    value: str
    link: Optional[str] = None


class TechnologyMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: Optional[str] = None
    link: Optional[str] = None

    @computed_field
    @property
    def label(self) -> str:
        if self.version:
            return f"{self.name}: v{self.version}"
        return self.name


class HeaderFinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    link: Optional[str] = None


class ClientEvidenceBundle(BaseModel):
    """Snapshot of client-side markers observed on one page.

    ``global_probes`` maps a global identifier that exists on the page to the
    version its accessor returned, or ``None`` when no version was readable.
    ``dom_hits`` holds the attribute selectors that matched at least one element.
    """

    # THREE.REVISION and similar accessors return numbers
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    global_probes: Dict[str, Optional[str]] = Field(default_factory=dict)
    dom_hits: FrozenSet[str] = frozenset()
    scripts: Tuple[str, ...] = ()
    generator: Optional[str] = None


class CookieSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    value: str = ""
    secure: bool = False
    http_only: bool = Field(False, alias="httpOnly")
    same_site: str = Field("", alias="sameSite")


class ScanConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    protocol: bool = True
    headers: bool = True
    technologies: bool = True
    libraries: bool = True
    server: bool = True
    cookies: bool = True


class ScanErrorInfo(BaseModel):
    kind: Literal["TargetUnavailable", "FetchFailed"]
    message: str
    status: Optional[int] = None


class ScanReport(BaseModel):
    url: str
    protocol: Optional[str] = None
    error: Optional[ScanErrorInfo] = None
    missing_headers: List[HeaderFinding] = Field(default_factory=list)
    server: List[ServerFinding] = Field(default_factory=list)
    technologies: List[TechnologyMatch] = Field(default_factory=list)
    libraries: List[TechnologyMatch] = Field(default_factory=list)
    cookies: List[CookieSummary] = Field(default_factory=list)
    config: ScanConfiguration = Field(default_factory=ScanConfiguration)
    scan_time_seconds: float = 0.0
