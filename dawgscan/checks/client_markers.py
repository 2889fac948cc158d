"""Client-side marker matching: frameworks and libraries seen in the page.

A rule set is evaluated in four passes over one evidence bundle and every
pass always runs; the order only fixes the order of the output:

  1. global identifiers (version-qualified when the probe read a version)
  2. DOM attribute selector hits
  3. meta generator content, passed through as ``Generator: <content>``
  4. script source keywords, exhaustive over every URL and every keyword

Each technology is reported once. A version-qualified finding replaces a
bare finding for the same technology at the bare finding's position; the
first version seen wins over later ones.
"""

from typing import Dict, List, Optional, Sequence

from dawgscan.models import ClientEvidenceBundle, TechnologyMatch
from dawgscan.signatures import LIBRARY_RULES, RULE_SETS, TECHNOLOGY_LINKS, TECHNOLOGY_RULES, RuleSet

GENERATOR_PREFIX = "Generator: "


def _clean_version(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    version = str(raw).strip()
    if version[:1] in ("v", "V"):
        version = version[1:]
    return version or None


def _candidates(evidence: ClientEvidenceBundle, rules: RuleSet) -> List[TechnologyMatch]:
    found = []

    for rule in rules.globals:
        if rule.global_name in evidence.global_probes:
            version = _clean_version(evidence.global_probes[rule.global_name])
            found.append(TechnologyMatch(name=rule.name, version=version))

    for rule in rules.dom:
        if rule.selector in evidence.dom_hits:
            found.append(TechnologyMatch(name=rule.name))

    if rules.include_generator and evidence.generator:
        found.append(TechnologyMatch(name=GENERATOR_PREFIX + evidence.generator))

    for src in evidence.scripts:
        lowered = src.lower()
        for rule in rules.scripts:
            if rule.keyword in lowered:
                found.append(TechnologyMatch(name=rule.name))

    return found


def deduplicate(matches: Sequence[TechnologyMatch]) -> List[TechnologyMatch]:
    kept: Dict[str, TechnologyMatch] = {}
    for match in matches:
        current = kept.get(match.name)
        if current is None or (current.version is None and match.version is not None):
            # dict keeps the first-seen position on reassignment
            kept[match.name] = match
    return list(kept.values())


def _with_link(match: TechnologyMatch) -> TechnologyMatch:
    link = TECHNOLOGY_LINKS.get(match.name)
    if link is None:
        return match
    return match.model_copy(update={"link": link})


def match_rules(evidence: ClientEvidenceBundle, rules: RuleSet) -> List[TechnologyMatch]:
    return [_with_link(m) for m in deduplicate(_candidates(evidence, rules))]


def detect_technologies(evidence: ClientEvidenceBundle) -> List[TechnologyMatch]:
    return match_rules(evidence, TECHNOLOGY_RULES)


def detect_libraries(evidence: ClientEvidenceBundle) -> List[TechnologyMatch]:
    return match_rules(evidence, LIBRARY_RULES)


def probe_plan() -> Dict[str, list]:
    """What an in-page collector has to evaluate to build a bundle."""
    globals_ = []
    selectors: List[str] = []
    for rules in RULE_SETS:
        for rule in rules.globals:
            globals_.append({"global": rule.global_name, "version": rule.version_accessor})
        for dom_rule in rules.dom:
            if dom_rule.selector not in selectors:
                selectors.append(dom_rule.selector)
    return {"globals": globals_, "selectors": selectors}


async def run_technologies(evidence: ClientEvidenceBundle) -> List[TechnologyMatch]:
    return detect_technologies(evidence)


async def run_libraries(evidence: ClientEvidenceBundle) -> List[TechnologyMatch]:
    return detect_libraries(evidence)
