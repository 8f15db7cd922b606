"""
Curated product analyses plus the generic fallback used for everything else.

The catalog is keyed by normalized product name (trimmed, lower-cased). A hit
returns the curated analysis; a miss returns a generic template whose
confidence comes from the heuristic in app.services.confidence.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from urllib.parse import quote

from app.schemas.product_research import ResearchAnalysis
from app.services.confidence import normalize_product_name, score_product_name


@dataclass(frozen=True)
class CatalogEntry:
    """Hand-written analysis for one known product."""

    advantages: Tuple[str, ...]
    disadvantages: Tuple[str, ...]
    market_analysis: str
    sources: Tuple[str, ...]
    confidence_score: float


GENERIC_ADVANTAGES: Tuple[str, ...] = (
    "Active development and updates",
    "Community support available",
    "Documentation exists",
    "Open source or commercial backing",
)

GENERIC_DISADVANTAGES: Tuple[str, ...] = (
    "Limited information available",
    "Smaller community compared to major tools",
    "Potential learning curve",
    "May have compatibility limitations",
)

GENERIC_MARKET_ANALYSIS = (
    "Limited market analysis available for {product_name}. This appears to be a less "
    "commonly discussed product in major developer communities. Further research would "
    "be needed to provide detailed market insights."
)

# Code search, Q&A search, discussion search.
GENERIC_SOURCE_TEMPLATES: Tuple[str, ...] = (
    "https://github.com/search?q={query}",
    "https://stackoverflow.com/search?q={query}",
    "https://www.reddit.com/search/?q={query}",
)

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


DEFAULT_CATALOG_ENTRIES: Mapping[str, CatalogEntry] = MappingProxyType({
    "react": CatalogEntry(
        advantages=(
            "Large ecosystem and community support",
            "Component-based architecture for reusability",
            "Virtual DOM for efficient rendering",
            "Strong corporate backing from Meta",
            "Excellent developer tools and debugging support",
        ),
        disadvantages=(
            "Steep learning curve for beginners",
            "Frequent updates can break compatibility",
            "JSX syntax requires additional build step",
            "Large bundle size for simple applications",
            "Complex state management in large apps",
        ),
        market_analysis=(
            "React dominates the frontend framework market with over 40% adoption rate "
            "among developers. It has strong enterprise adoption and continues to grow in "
            "popularity. The framework is particularly strong in single-page applications "
            "and has excellent job market demand."
        ),
        sources=(
            "https://github.com/facebook/react",
            "https://stackoverflow.com/questions/tagged/reactjs",
            "https://www.reddit.com/r/reactjs",
            "https://npm-stat.com/charts.html?package=react",
        ),
        confidence_score=0.92,
    ),
    "vue": CatalogEntry(
        advantages=(
            "Gentle learning curve and beginner-friendly",
            "Excellent documentation and guides",
            "Progressive framework - can be adopted incrementally",
            "Lightweight and fast performance",
            "Built-in state management and routing solutions",
        ),
        disadvantages=(
            "Smaller ecosystem compared to React",
            "Less job market demand",
            "Fewer third-party components available",
            "Limited corporate backing",
            "Smaller community size",
        ),
        market_analysis=(
            "Vue.js has carved out a solid niche in the frontend ecosystem, particularly "
            "popular among developers who want simplicity without sacrificing power. It has "
            "strong adoption in Asia and among smaller to medium-sized projects."
        ),
        sources=(
            "https://github.com/vuejs/vue",
            "https://stackoverflow.com/questions/tagged/vue.js",
            "https://www.reddit.com/r/vuejs",
            "https://www.npmjs.com/package/vue",
        ),
        confidence_score=0.89,
    ),
    "angular": CatalogEntry(
        advantages=(
            "Full-featured framework with everything included",
            "Strong TypeScript support out of the box",
            "Excellent for large enterprise applications",
            "Powerful CLI and development tools",
            "Google backing and long-term support",
        ),
        disadvantages=(
            "Very steep learning curve",
            "Heavyweight for simple applications",
            "Complex architecture can be overkill",
            "Frequent major version changes",
            "Verbose syntax and boilerplate code",
        ),
        market_analysis=(
            "Angular is the enterprise choice for large-scale applications. While it has "
            "lower overall adoption than React, it maintains strong presence in enterprise "
            "environments and has stable corporate backing from Google."
        ),
        sources=(
            "https://github.com/angular/angular",
            "https://stackoverflow.com/questions/tagged/angular",
            "https://www.reddit.com/r/angular",
            "https://angular.io/guide/releases",
        ),
        confidence_score=0.87,
    ),
})


def encode_query(value: str) -> str:
    """URL-encode a search term the way browsers encode a query component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def generic_sources(normalized_name: str) -> list:
    query = encode_query(normalized_name)
    return [template.format(query=query) for template in GENERIC_SOURCE_TEMPLATES]


class AnalysisCatalog:
    """Looks up curated analyses and builds the generic fallback."""

    def __init__(self, entries: Mapping[str, CatalogEntry] = DEFAULT_CATALOG_ENTRIES):
        self._entries = MappingProxyType(
            {normalize_product_name(name): entry for name, entry in entries.items()}
        )

    def __contains__(self, product_name: str) -> bool:
        return self.lookup(product_name) is not None

    def lookup(self, product_name: str) -> Optional[CatalogEntry]:
        return self._entries.get(normalize_product_name(product_name))

    def analyze(self, product_name: str) -> ResearchAnalysis:
        """
        Build the analysis for a product name.

        The returned product_name is always the caller's string exactly as
        given; only the lookup key and the generic search terms are normalized.
        """
        entry = self.lookup(product_name)
        if entry is not None:
            return ResearchAnalysis(
                product_name=product_name,
                advantages=list(entry.advantages),
                disadvantages=list(entry.disadvantages),
                market_analysis=entry.market_analysis,
                sources=list(entry.sources),
                confidence_score=entry.confidence_score,
            )

        normalized = normalize_product_name(product_name)
        return ResearchAnalysis(
            product_name=product_name,
            advantages=list(GENERIC_ADVANTAGES),
            disadvantages=list(GENERIC_DISADVANTAGES),
            market_analysis=GENERIC_MARKET_ANALYSIS.format(product_name=product_name),
            sources=generic_sources(normalized),
            confidence_score=score_product_name(normalized),
        )
