from dawgscan.checks.client_markers import (
    deduplicate,
    detect_libraries,
    detect_technologies,
    probe_plan,
)
from dawgscan.models import ClientEvidenceBundle, TechnologyMatch


def labels(matches):
    return [m.label for m in matches]


def test_script_scan_is_exhaustive():
    evidence = ClientEvidenceBundle(scripts=("/libs/jquery.min.js", "/libs/lodash.min.js"))
    assert labels(detect_libraries(evidence)) == ["jQuery", "Lodash"]
    assert detect_technologies(evidence) == []


def test_one_url_can_match_several_keywords():
    evidence = ClientEvidenceBundle(scripts=("https://cdn.example.com/jquery-ui/1.13.2/jquery-ui.min.js",))
    assert labels(detect_libraries(evidence)) == ["jQuery UI", "jQuery"]


def test_bare_global_and_script_collapse():
    evidence = ClientEvidenceBundle(
        global_probes={"jQuery": None},
        scripts=("https://code.jquery.com/jquery-3.6.0.min.js",),
    )
    assert labels(detect_libraries(evidence)) == ["jQuery"]


def test_global_version_is_embedded_in_label():
    evidence = ClientEvidenceBundle(global_probes={"jQuery": "3.6.0", "moment": "v2.29.4"})
    assert labels(detect_libraries(evidence)) == ["jQuery: v3.6.0", "Moment.js: v2.29.4"]


def test_blank_version_reads_as_bare():
    evidence = ClientEvidenceBundle(global_probes={"React": "  "})
    assert labels(detect_technologies(evidence)) == ["React"]


def test_numeric_global_version_is_read_as_text():
    evidence = ClientEvidenceBundle.model_validate({"global_probes": {"THREE": 150}})
    assert evidence.global_probes == {"THREE": "150"}
    assert labels(detect_libraries(evidence)) == ["Three.js: v150"]


def test_versioned_global_supersedes_later_bare_hits():
    evidence = ClientEvidenceBundle(
        global_probes={"angular": "1.8.2"},
        dom_hits=frozenset({"[ng-app]", "[ng-controller]"}),
        scripts=("/static/angular.min.js",),
    )
    assert labels(detect_technologies(evidence)) == ["AngularJS: v1.8.2"]


def test_dedup_keeps_first_position_and_prefers_version():
    matches = [
        TechnologyMatch(name="React"),
        TechnologyMatch(name="Vue.js"),
        TechnologyMatch(name="React", version="18.2.0"),
        TechnologyMatch(name="React", version="17.0.0"),
    ]
    assert labels(deduplicate(matches)) == ["React: v18.2.0", "Vue.js"]


def test_construction_order_follows_categories():
    evidence = ClientEvidenceBundle(
        global_probes={"Vue": "3.2.0"},
        dom_hits=frozenset({"[data-reactroot]"}),
        generator="WordPress 6.4.2",
        scripts=("/wp-includes/js/svelte-bundle.js",),
    )
    assert labels(detect_technologies(evidence)) == [
        "Vue.js: v3.2.0",
        "React",
        "Generator: WordPress 6.4.2",
        "Svelte",
    ]


def test_generator_passed_through_unlinked_and_only_for_technologies():
    evidence = ClientEvidenceBundle(generator="Hugo 0.121.0")
    technologies = detect_technologies(evidence)
    assert labels(technologies) == ["Generator: Hugo 0.121.0"]
    assert technologies[0].link is None
    assert detect_libraries(evidence) == []


def test_known_technologies_carry_links():
    evidence = ClientEvidenceBundle(global_probes={"React": "18.2.0"}, scripts=("/js/bootstrap.bundle.js",))
    assert detect_technologies(evidence)[0].link == "https://react.dev/"
    assert detect_libraries(evidence)[0].link == "https://getbootstrap.com/"


def test_script_urls_lowercased_before_matching():
    evidence = ClientEvidenceBundle(scripts=("/Scripts/JQuery-3.7.1.MIN.js",))
    assert labels(detect_libraries(evidence)) == ["jQuery"]


def test_passes_are_independent():
    evidence = ClientEvidenceBundle(scripts=("/react.production.min.js", "/jquery.js"))
    assert labels(detect_technologies(evidence)) == ["React"]
    assert labels(detect_libraries(evidence)) == ["jQuery"]


def test_empty_bundle_yields_nothing():
    evidence = ClientEvidenceBundle()
    assert detect_technologies(evidence) == []
    assert detect_libraries(evidence) == []


def test_repeated_runs_are_identical():
    evidence = ClientEvidenceBundle(global_probes={"jQuery": "1.12.4"}, scripts=("/vue.js", "/moment.js"))
    assert detect_technologies(evidence) == detect_technologies(evidence)
    assert detect_libraries(evidence) == detect_libraries(evidence)


def test_probe_plan_lists_accessors_and_unique_selectors():
    plan = probe_plan()
    assert {"global": "jQuery", "version": "jQuery.fn.jquery"} in plan["globals"]
    assert {"global": "angular", "version": "angular.version.full"} in plan["globals"]
    assert "[ng-app]" in plan["selectors"]
    assert len(plan["selectors"]) == len(set(plan["selectors"]))
