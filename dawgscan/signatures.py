"""Static signature tables.

Everything here is read-only data. Table order matters wherever a table is
declared as a tuple: ``SERVER_KEYWORDS`` is resolved first-match in
declaration order, and the client rule sets emit findings in declaration
order before deduplication.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

REQUIRED_HEADERS: Tuple[str, ...] = (
    "Content-Security-Policy",
    "X-Content-Type-Options",
    "X-Frame-Options",
    "Strict-Transport-Security",
    "Referrer-Policy",
)

_MDN_HEADERS = "https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/"

HEADER_LINKS: Dict[str, str] = {
    name: _MDN_HEADERS + name
    for name in REQUIRED_HEADERS + ("Server", "X-Powered-By", "X-Generator", "Set-Cookie")
}

TECHNOLOGY_LINKS: Dict[str, str] = {
    # Frameworks
    "React": "https://react.dev/",
    "Vue.js": "https://vuejs.org/",
    "AngularJS": "https://angularjs.org/",
    "Angular": "https://angular.dev/",
    "Next.js": "https://nextjs.org/",
    "Nuxt.js": "https://nuxt.com/",
    "Svelte": "https://svelte.dev/",
    "Ember.js": "https://emberjs.com/",
    "Backbone.js": "https://backbonejs.org/",
    "Alpine.js": "https://alpinejs.dev/",
    "Gatsby": "https://www.gatsbyjs.com/",
    # Libraries
    "jQuery": "https://jquery.com/",
    "jQuery UI": "https://jqueryui.com/",
    "Lodash": "https://lodash.com/",
    "Underscore.js": "https://underscorejs.org/",
    "Moment.js": "https://momentjs.com/",
    "Bootstrap": "https://getbootstrap.com/",
    "Modernizr": "https://modernizr.com/",
    "D3": "https://d3js.org/",
    "Chart.js": "https://www.chartjs.org/",
    "Axios": "https://axios-http.com/",
    "GSAP": "https://gsap.com/",
    "Three.js": "https://threejs.org/",
    "Swiper": "https://swiperjs.com/",
    "AOS": "https://michalsnik.github.io/aos/",
    "Popper": "https://popper.js.org/",
    "Tippy.js": "https://atomiks.github.io/tippyjs/",
    "Font Awesome": "https://fontawesome.com/",
    "reCAPTCHA": "https://developers.google.com/recaptcha",
    "Google Tag Manager": "https://tagmanager.google.com/",
    "Google Analytics": "https://marketingplatform.google.com/about/analytics/",
}

# First substring match wins. Keep more specific tokens ahead of the generic
# ones they contain ("apache-coyote" before "apache").
SERVER_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    # Web servers and proxies
    ("nginx", "https://nginx.org/"),
    ("openresty", "https://openresty.org/"),
    ("apache-coyote", "https://tomcat.apache.org/"),
    ("tomcat", "https://tomcat.apache.org/"),
    ("apache", "https://httpd.apache.org/"),
    ("microsoft-iis", "https://www.iis.net/"),
    ("litespeed", "https://www.litespeedtech.com/"),
    ("caddy", "https://caddyserver.com/"),
    ("envoy", "https://www.envoyproxy.io/"),
    ("kestrel", "https://learn.microsoft.com/aspnet/core/fundamentals/servers/kestrel"),
    ("jetty", "https://eclipse.dev/jetty/"),
    ("gunicorn", "https://gunicorn.org/"),
    ("uvicorn", "https://www.uvicorn.org/"),
    ("werkzeug", "https://werkzeug.palletsprojects.com/"),
    ("varnish", "https://varnish-cache.org/"),
    # Cloud platforms and CDNs
    ("cloudflare", "https://www.cloudflare.com/"),
    ("cloudfront", "https://aws.amazon.com/cloudfront/"),
    ("awselb", "https://aws.amazon.com/elasticloadbalancing/"),
    ("amazons3", "https://aws.amazon.com/s3/"),
    ("akamaighost", "https://www.akamai.com/"),
    ("vercel", "https://vercel.com/"),
    ("netlify", "https://www.netlify.com/"),
    ("github", "https://pages.github.com/"),
    ("heroku", "https://www.heroku.com/"),
    # Frameworks and runtimes
    ("express", "https://expressjs.com/"),
    ("next.js", "https://nextjs.org/"),
    ("nuxt", "https://nuxt.com/"),
    ("asp.net", "https://dotnet.microsoft.com/apps/aspnet"),
    ("php", "https://www.php.net/"),
    ("django", "https://www.djangoproject.com/"),
    ("phusion passenger", "https://www.phusionpassenger.com/"),
    # CMS and hosted builders
    ("wordpress", "https://wordpress.org/"),
    ("drupal", "https://www.drupal.org/"),
    ("joomla", "https://www.joomla.org/"),
    ("wix", "https://www.wix.com/"),
    ("squarespace", "https://www.squarespace.com/"),
    ("shopify", "https://www.shopify.com/"),
    # Static site generators
    ("hugo", "https://gohugo.io/"),
    ("jekyll", "https://jekyllrb.com/"),
    ("gatsby", "https://www.gatsbyjs.com/"),
)

SEARCH_URL = "https://www.google.com/search?q={query}"


@dataclass(frozen=True)
class GlobalRule:
    """A global binding whose presence implies ``name``.

    ``version_accessor`` is the dotted path an in-page collector reads for
    the version, e.g. ``jQuery.fn.jquery``.
    """

    global_name: str
    name: str
    version_accessor: Optional[str] = None


@dataclass(frozen=True)
class DomRule:
    selector: str
    name: str


@dataclass(frozen=True)
class ScriptRule:
    keyword: str
    name: str


@dataclass(frozen=True)
class RuleSet:
    name: str
    globals: Tuple[GlobalRule, ...]
    dom: Tuple[DomRule, ...]
    scripts: Tuple[ScriptRule, ...]
    include_generator: bool = False


TECHNOLOGY_RULES = RuleSet(
    name="technologies",
    globals=(
        GlobalRule("React", "React", "React.version"),
        GlobalRule("Vue", "Vue.js", "Vue.version"),
        GlobalRule("angular", "AngularJS", "angular.version.full"),
        GlobalRule("next", "Next.js", "next.version"),
        GlobalRule("__NUXT__", "Nuxt.js"),
        GlobalRule("Ember", "Ember.js", "Ember.VERSION"),
        GlobalRule("Backbone", "Backbone.js", "Backbone.VERSION"),
        GlobalRule("Alpine", "Alpine.js", "Alpine.version"),
    ),
    dom=(
        DomRule("[ng-app]", "AngularJS"),
        DomRule("[ng-controller]", "AngularJS"),
        DomRule("[ng-version]", "Angular"),
        DomRule("[data-reactroot]", "React"),
        DomRule("[data-reactid]", "React"),
        DomRule("[data-vue]", "Vue.js"),
        DomRule("[data-v-app]", "Vue.js"),
        DomRule("[id=__next]", "Next.js"),
        DomRule("[id=__nuxt]", "Nuxt.js"),
        DomRule("[id=___gatsby]", "Gatsby"),
        DomRule("[data-svelte-h]", "Svelte"),
        DomRule("[x-data]", "Alpine.js"),
    ),
    scripts=(
        ScriptRule("react", "React"),
        ScriptRule("vue", "Vue.js"),
        ScriptRule("angular", "AngularJS"),
        ScriptRule("/_next/", "Next.js"),
        ScriptRule("/_nuxt/", "Nuxt.js"),
        ScriptRule("svelte", "Svelte"),
        ScriptRule("ember", "Ember.js"),
        ScriptRule("backbone", "Backbone.js"),
        ScriptRule("alpine", "Alpine.js"),
        ScriptRule("gatsby", "Gatsby"),
    ),
    include_generator=True,
)

LIBRARY_RULES = RuleSet(
    name="libraries",
    globals=(
        GlobalRule("jQuery", "jQuery", "jQuery.fn.jquery"),
        GlobalRule("moment", "Moment.js", "moment.version"),
        GlobalRule("d3", "D3", "d3.version"),
        GlobalRule("Chart", "Chart.js", "Chart.version"),
        GlobalRule("bootstrap", "Bootstrap", "bootstrap.Tooltip.VERSION"),
        GlobalRule("Modernizr", "Modernizr", "Modernizr._version"),
        GlobalRule("axios", "Axios", "axios.VERSION"),
        GlobalRule("gsap", "GSAP", "gsap.version"),
        GlobalRule("THREE", "Three.js", "THREE.REVISION"),
        GlobalRule("Swiper", "Swiper"),
    ),
    dom=(
        DomRule("[data-toggle]", "Bootstrap"),
        DomRule("[data-bs-toggle]", "Bootstrap"),
        DomRule("[data-aos]", "AOS"),
        DomRule("[data-tippy-content]", "Tippy.js"),
    ),
    scripts=(
        ScriptRule("jquery-ui", "jQuery UI"),
        ScriptRule("jquery", "jQuery"),
        ScriptRule("lodash", "Lodash"),
        ScriptRule("underscore", "Underscore.js"),
        ScriptRule("moment", "Moment.js"),
        ScriptRule("bootstrap", "Bootstrap"),
        ScriptRule("modernizr", "Modernizr"),
        ScriptRule("d3.min", "D3"),
        ScriptRule("chart.js", "Chart.js"),
        ScriptRule("chart.min", "Chart.js"),
        ScriptRule("chart.umd", "Chart.js"),
        ScriptRule("axios", "Axios"),
        ScriptRule("gsap", "GSAP"),
        ScriptRule("three.min", "Three.js"),
        ScriptRule("swiper", "Swiper"),
        ScriptRule("aos.js", "AOS"),
        ScriptRule("popper", "Popper"),
        ScriptRule("tippy", "Tippy.js"),
        ScriptRule("fontawesome", "Font Awesome"),
        ScriptRule("font-awesome", "Font Awesome"),
        ScriptRule("recaptcha", "reCAPTCHA"),
        ScriptRule("googletagmanager", "Google Tag Manager"),
        ScriptRule("google-analytics", "Google Analytics"),
    ),
)

RULE_SETS: Tuple[RuleSet, ...] = (TECHNOLOGY_RULES, LIBRARY_RULES)
